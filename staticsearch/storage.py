from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, Field, ValidationError

from .indexer import SearchIndex

logger = logging.getLogger(__name__)

# builders that emit a script assign the object to a global
_JS_PREFIX = re.compile(r"^\s*(?:var\s+|let\s+|const\s+)?searchIndex\s*=\s*")

DocId = int | str
Weight = Annotated[int, Field(ge=0)]


class DocIn(BaseModel):
    t: str = ""
    u: str
    d: str = ""


class IndexIn(BaseModel):
    words: dict[str, list[tuple[DocId, Weight] | DocId]]
    docs: dict[str, DocIn]


class IndexFormatError(ValueError):
    """The index file is not valid JSON or not in the expected shape."""


def parse_index(text: str) -> SearchIndex:
    """Parse index JSON (optionally wrapped as `searchIndex = {...};`)."""
    m = _JS_PREFIX.match(text)
    if m:
        text = text[m.end() :].rstrip().rstrip(";")
    try:
        payload = IndexIn.model_validate_json(text)
    except ValidationError as e:
        raise IndexFormatError(f"Invalid search index: {e}") from e
    return SearchIndex.from_dict(payload.model_dump())


def load_index(path: str | Path) -> SearchIndex:
    """Load an index written by save_index() or an external builder."""
    p = Path(path)
    logger.info("[Storage] Loading index from %s", p)
    idx = parse_index(p.read_text(encoding="utf-8"))
    logger.info(
        "[Storage] Index loaded. Vocabulary: %d, docs: %d",
        idx.vocabulary_size(),
        len(idx.docs),
    )
    return idx


def save_index(index: SearchIndex, path: str | Path) -> None:
    """Serialize the index to JSON on disk."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(index.to_dict(), ensure_ascii=False), encoding="utf-8")
    logger.info("[Storage] Index saved to %s (vocabulary: %d)", p, index.vocabulary_size())
