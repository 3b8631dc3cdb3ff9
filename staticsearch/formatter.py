from __future__ import annotations

import string
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .config import ConfigurationError


@dataclass(frozen=True)
class Identity:
    def __call__(self, value: str) -> str:
        return value


@dataclass(frozen=True)
class Template:
    """Substitutes the raw value into `pattern` at the `{field}` placeholder."""

    pattern: str
    field: str

    def __post_init__(self) -> None:
        try:
            names = {
                name
                for _, name, _, _ in string.Formatter().parse(self.pattern)
                if name is not None
            }
        except ValueError as e:
            raise ConfigurationError(f"Bad {self.field} template {self.pattern!r}: {e}") from e
        unknown = names - {self.field}
        if unknown:
            raise ConfigurationError(
                f"{self.field} template may only use {{{self.field}}}, got {sorted(unknown)}"
            )

    def __call__(self, value: str) -> str:
        return self.pattern.format_map({self.field: value})


@dataclass(frozen=True)
class Callback:
    fn: Callable[[str], Any]

    def __call__(self, value: str) -> Any:
        return self.fn(value)


Formatter = Identity | Template | Callback


def make_formatter(field: str, value: Any) -> Formatter:
    """
    Resolve a formatter option once:
        None / ""    -> Identity
        str          -> Template (named placeholder `{field}`)
        callable     -> Callback
    Anything else is a ConfigurationError.
    """
    if value is None or value == "":
        return Identity()
    if isinstance(value, (Identity, Template, Callback)):
        return value
    if isinstance(value, str):
        return Template(value, field)
    if callable(value):
        return Callback(value)
    raise ConfigurationError(
        f"{field}_format must be a template string or a callable, got {type(value).__name__}"
    )
