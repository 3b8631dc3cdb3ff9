from __future__ import annotations

import html
import urllib.parse as ul
from collections.abc import Sequence
from datetime import datetime, timezone

from .searcher import DisplayResult


def _esc(value: object) -> str:
    return html.escape(str(value), quote=True)


def render_feed(
    query: str,
    results: Sequence[DisplayResult],
    *,
    title: str = "Search",
    search_url: str = "",
    link_prefix: str = "",
    author: str = "",
    description_url: str = "",
    updated: datetime | None = None,
) -> str:
    """
    Render results as an Atom feed carrying OpenSearch response elements.

    `search_url` gets `?<query>` appended for the self link; `link_prefix`
    is prepended to each result url.
    """
    when = (updated or datetime.now(timezone.utc)).isoformat(timespec="seconds")
    total = len(results)
    q_esc = _esc(query)
    self_href = _esc(f"{search_url}?{ul.quote_plus(query)}") if search_url else ""

    out = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<feed xmlns="http://www.w3.org/2005/Atom"',
        '      xmlns:opensearch="http://a9.com/-/spec/opensearch/1.1/">',
        f"  <title>{_esc(title)}: {q_esc}</title>",
    ]
    if self_href:
        out.append(f'  <link href="{self_href}"/>')
    out.append(f"  <updated>{when}</updated>")
    if author:
        out.append(f"  <author><name>{_esc(author)}</name></author>")
    out += [
        f"  <opensearch:totalResults>{total}</opensearch:totalResults>",
        "  <opensearch:startIndex>1</opensearch:startIndex>",
        f"  <opensearch:itemsPerPage>{total}</opensearch:itemsPerPage>",
        f'  <opensearch:Query role="request" searchTerms="{q_esc}" startPage="1" />',
    ]
    if self_href:
        out.append(f'  <link rel="self" href="{self_href}" type="application/atom+xml"/>')
    if description_url:
        out.append(
            '  <link rel="search" type="application/opensearchdescription+xml" '
            f'href="{_esc(description_url)}"/>'
        )

    for r in results:
        out += [
            "  <entry>",
            f"    <title>{_esc(r.title)}</title>",
            f'    <link href="{_esc(link_prefix + str(r.url))}"/>',
            f"    <updated>{_esc(r.date)}</updated>",
            '    <content type="text"></content>',
            "  </entry>",
        ]
    out.append("</feed>")
    return "\n".join(out) + "\n"
