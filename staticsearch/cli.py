from __future__ import annotations

import argparse
import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path

from staticsearch.analyzer import Analyzer
from staticsearch.config import INDEX_FILE, ConfigurationError, SearchOptions
from staticsearch.feed import render_feed
from staticsearch.indexer import IndexWriter, SearchIndex
from staticsearch.searcher import Searcher
from staticsearch.stemmer import get_stemmer
from staticsearch.storage import IndexFormatError, load_index, save_index

_DATE_PREFIX = re.compile(r"^(\d{4}-\d{2}-\d{2}).*", re.DOTALL)


def date_only(value: str) -> str:
    """Trim an ISO timestamp down to its YYYY-MM-DD part."""
    return _DATE_PREFIX.sub(r"\1", value)


def build_index_from_dir(directory: str | Path, *, stemmer: str = "porter") -> SearchIndex:
    """
    Index all .txt files in a directory (non-recursive).

    The first non-empty line is the title, the url is `/<stem>/` and the
    date is the file's modification day.
    """
    writer = IndexWriter(Analyzer(), get_stemmer(stemmer))

    folder = Path(directory)
    count = 0
    for p in sorted(folder.glob("*.txt")):
        text = p.read_text(encoding="utf-8", errors="ignore")
        title = next((ln.strip() for ln in text.splitlines() if ln.strip()), p.stem)
        mtime = datetime.fromtimestamp(p.stat().st_mtime, tz=timezone.utc)
        writer.add(f"/{p.stem}/", title, mtime.date().isoformat(), text)
        count += 1
    if count == 0:
        raise SystemExit(f"No .txt files found in: {folder}")

    return writer.commit()


def cmd_index(args: argparse.Namespace) -> None:
    idx = build_index_from_dir(args.directory, stemmer=args.stemmer)
    save_index(idx, args.out)
    print(f"Indexed {len(idx.docs)} docs → {args.out}")
    print(f"Vocabulary size: {idx.vocabulary_size()}")


def cmd_search(args: argparse.Namespace) -> None:
    try:
        idx = load_index(args.index)
    except FileNotFoundError:
        raise SystemExit(f"Index not found: {args.index}") from None
    except IndexFormatError as e:
        raise SystemExit(str(e)) from None

    options = SearchOptions(
        title_format=args.title_format,
        url_format=args.url_format,
        date_format=date_only if args.date_only else None,
        exclude=args.exclude or None,
    )
    try:
        s = Searcher(idx, options, stemmer=get_stemmer(args.stemmer))
    except ConfigurationError as e:
        raise SystemExit(f"Configuration error: {e}") from None

    results = s.search(args.query)

    if args.format == "json":
        print(json.dumps([r.to_dict() for r in results], ensure_ascii=False, indent=2))
    elif args.format == "atom":
        print(
            render_feed(
                args.query,
                results,
                title=args.feed_title,
                link_prefix=args.link_prefix,
            ),
            end="",
        )
    else:
        if not results:
            print("No results.")
            return
        print(f"[ranked] {len(results)} docs:")
        for r in results:
            print(f"- {r.title}\t{r.url}\t{r.date}")


def make_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="staticsearch",
        description="StaticSearch: query a precomputed blog search index (CLI)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log index loading")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_index = sub.add_parser("index", help="Index all .txt files in a directory")
    p_index.add_argument("directory", help="Folder containing .txt files")
    p_index.add_argument("--out", default=str(INDEX_FILE), help="Output index file (JSON)")
    p_index.add_argument("--stemmer", choices=("porter", "identity"), default="porter")
    p_index.set_defaults(func=cmd_index)

    p_search = sub.add_parser("search", help="Search a saved index")
    p_search.add_argument("query", help="Query string")
    p_search.add_argument("--index", default=str(INDEX_FILE), help="Path to saved index JSON")
    p_search.add_argument("--stemmer", choices=("porter", "identity"), default="porter")
    p_search.add_argument(
        "--format", choices=("text", "json", "atom"), default="text", help="Output format"
    )
    p_search.add_argument(
        "--exclude", action="append", default=[], metavar="URL", help="Drop this url (repeatable)"
    )
    p_search.add_argument("--title-format", help="Template with a {title} placeholder")
    p_search.add_argument("--url-format", help="Template with a {url} placeholder")
    p_search.add_argument("--date-only", action="store_true", help="Show dates as YYYY-MM-DD")
    p_search.add_argument("--feed-title", default="Search", help="Atom feed title")
    p_search.add_argument("--link-prefix", default="", help="Prefix for result links in Atom")
    p_search.set_defaults(func=cmd_search)

    return p


def main(argv: list[str] | None = None) -> None:
    parser = make_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    args.func(args)


if __name__ == "__main__":
    main()
