"""Command-line interface for extracting and resolving anchors.

Usage:
    textanchor extract --text doc.txt --start 120 --end 145
    textanchor resolve --text doc.txt --anchors highlights.json --segments
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from .binding import extract_anchor, merge_overlapping_positions, resolve_batch
from .config import load_config
from .schema import IdentifiedAnchor

logger = logging.getLogger(__name__)

_ANCHOR_LIST = TypeAdapter(list[IdentifiedAnchor])


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="textanchor",
        description="Extract text anchors and resolve them against edited text",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser("extract", help="Build an anchor from a selection")
    extract.add_argument("--text", type=Path, required=True, help="Plain-text document")
    extract.add_argument("--start", type=int, required=True, help="Selection start offset")
    extract.add_argument("--end", type=int, required=True, help="Selection end offset")
    extract.add_argument("--context-length", type=int, help="Prefix/suffix length (default: 80)")
    extract.add_argument("--config", type=Path, help="Path to YAML configuration file")

    resolve = subparsers.add_parser("resolve", help="Resolve stored anchors against a document")
    resolve.add_argument("--text", type=Path, required=True, help="Plain-text document")
    resolve.add_argument(
        "--anchors",
        type=Path,
        required=True,
        help="JSON list of {id, text, prefix, suffix} records",
    )
    resolve.add_argument("--segments", action="store_true", help="Print merged segments")
    resolve.add_argument("--workers", type=int, help="Parallel workers (default: from config)")
    resolve.add_argument("--config", type=Path, help="Path to YAML configuration file")

    return parser.parse_args(argv)


def _read_text(path: Path) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def run_extract(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    context_length = args.context_length if args.context_length is not None else config.context_length
    anchor = extract_anchor(_read_text(args.text), args.start, args.end, context_length)
    if anchor is None:
        logger.error("Selection %d-%d is empty", args.start, args.end)
        return 1
    print(anchor.model_dump_json(indent=2))
    return 0


def run_resolve(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    text = _read_text(args.text)
    with open(args.anchors, "r", encoding="utf-8") as f:
        anchors = _ANCHOR_LIST.validate_python(json.load(f))

    result = resolve_batch(text, anchors, config, max_workers=args.workers)
    for anchor_id in result.unresolved:
        logger.warning("Anchor %s could not be resolved", anchor_id)

    if args.segments:
        segments = merge_overlapping_positions(result.positions)
        output = [s.model_dump(mode="json") for s in segments]
    else:
        output = {
            "positions": [
                {"id": m.id, "start": m.position.start, "end": m.position.end, "strategy": m.strategy.value}
                for m in result.matches
            ],
            "unresolved": result.unresolved,
        }
    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.command == "extract":
            return run_extract(args)
        return run_resolve(args)
    except (OSError, ValueError, ValidationError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
