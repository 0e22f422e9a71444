"""CLI entry point for sff."""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from sff.config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_EXTENSIONS,
    DEFAULT_LIMIT,
    DEFAULT_MODEL,
    RunConfiguration,
    default_workers,
)
from sff.errors import SffError
from sff.models import SearchReport
from sff.pipeline import search

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)

MAX_CHUNK_DISPLAY_LEN = 100


def format_path_for_terminal(path: Path) -> str:
    """Render a path as a percent-encoded file:// URL.

    Terminals that understand hyperlinks make these clickable. Falls back
    to the absolute, unresolved path if the file has disappeared.
    """
    try:
        absolute = path.resolve(strict=True)
    except OSError:
        absolute = path.absolute()
    return absolute.as_uri()


def format_location(path: Path, line: int) -> Text:
    """Render a result location as ``file://...:line``.

    The text carries the bare URL as a hyperlink so the line suffix does
    not break the link target.
    """
    url = format_path_for_terminal(path)
    return Text(f"{url}:{line}", style=f"link {url}")


def truncate(text: str, limit: int = MAX_CHUNK_DISPLAY_LEN) -> str:
    """Shorten a chunk for table display."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def render_json(report: SearchReport) -> str:
    """Serialize a report's results for machine consumption."""
    payload = {
        "query": report.query,
        "file_count": report.file_count,
        "chunk_count": report.chunk_count,
        "results": [result.to_dict() for result in report.results],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def render_table(report: SearchReport, elapsed: float) -> None:
    """Print a summary line and the results table to stdout."""
    print(
        f"\nFound {report.chunk_count} relevant chunks from {report.file_count} files "
        f'for query "{report.query}" in {elapsed * 1000:.2f} ms. '
        f"Top {len(report.results)} results:"
    )

    if not report.results:
        print("No matches found.")
        return

    table = Table(show_lines=True)
    table.add_column("Score", justify="right")
    table.add_column("Matching Text Chunk")
    table.add_column("File Path", no_wrap=True)

    for result in report.results:
        table.add_row(
            f"{result.score:.2f}",
            truncate(result.text),
            format_location(result.path, result.line),
        )

    Console().print(table)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sff",
        description=(
            "sff (SemanticFileFinder) searches the text files in a directory by "
            "meaning: it chunks their content, embeds each chunk and ranks the "
            "chunks by similarity to the query."
        ),
    )
    parser.add_argument("query", nargs="+", help="The semantic search query")
    parser.add_argument(
        "-p",
        "--path",
        type=Path,
        default=Path("."),
        help="The directory to search in (default: current directory)",
    )
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Search recursively through all subdirectories",
    )
    parser.add_argument(
        "-m",
        "--model",
        default=DEFAULT_MODEL,
        help=f"Embedding model, from the Hugging Face Hub or a local path (default: {DEFAULT_MODEL})",
    )
    parser.add_argument(
        "-l",
        "--limit",
        type=int,
        default=DEFAULT_LIMIT,
        help=f"Number of top results to display (default: {DEFAULT_LIMIT})",
    )
    parser.add_argument(
        "-e",
        "--extension",
        action="append",
        help=(
            "File extension to search; repeat or comma-separate for several "
            f"(default: {','.join(DEFAULT_EXTENSIONS)})"
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print per-stage timings and skipped entries to stderr",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results in JSON format instead of a table",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_BATCH_SIZE,
        help=f"Chunks per embedding call (default: {DEFAULT_BATCH_SIZE})",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Words per chunk (default: {DEFAULT_CHUNK_SIZE})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads for chunking and embedding (default: CPU count)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    start_time = time.perf_counter()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger("sff").setLevel(logging.DEBUG)

    try:
        config = RunConfiguration(
            root=args.path,
            recursive=args.recursive,
            model=args.model,
            limit=args.limit,
            extensions=frozenset(args.extension or DEFAULT_EXTENSIONS),
            batch_size=args.batch_size,
            chunk_size=args.chunk_size,
            workers=args.workers if args.workers is not None else default_workers(),
        )
    except ValueError as exc:
        parser.error(str(exc))

    query = " ".join(args.query)

    try:
        report = search(query, config)
    except SffError as exc:
        logger.error(f"Error: {exc}")
        sys.exit(1)

    if args.json:
        print(render_json(report))
    elif report.chunk_count == 0:
        extensions = ", ".join(f".{ext}" for ext in sorted(config.extensions))
        print(f"No text files ({extensions}) found to search in '{config.root}'.")
    else:
        render_table(report, time.perf_counter() - start_time)

    logger.debug(
        f"[VERBOSE] Total: {(time.perf_counter() - start_time) * 1000:.2f} ms"
    )


if __name__ == "__main__":
    main()
