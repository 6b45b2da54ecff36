"""CLI entry point: python -m scripts.dissonance_analyzer score/summary."""

from __future__ import annotations

import argparse
import logging
import sys
from fractions import Fraction
from pathlib import Path
from typing import List, Optional

from .context import BeatRange, parse_meter
from .report import format_json, format_summary_text, format_text
from .runner import analyze_file, overall_passed

logger = logging.getLogger(__name__)


def _parse_sequence_ranges(items: Optional[List[str]]) -> List[BeatRange]:
    ranges = []
    for item in items or []:
        parts = item.split("-")
        if len(parts) != 2:
            raise ValueError(f"invalid sequence range '{item}' (expected e.g. 4-8)")
        ranges.append(BeatRange(Fraction(parts[0]), Fraction(parts[1])))
    return ranges


def _write(output: str, path: Optional[str]) -> None:
    if path:
        Path(path).write_text(output)
    else:
        print(output)


def _analyze(args: argparse.Namespace):
    meter = parse_meter(args.meter) if args.meter else None
    return analyze_file(args.input, meter=meter,
                        sequence_beat_ranges=_parse_sequence_ranges(args.sequence))


def cmd_score(args: argparse.Namespace) -> int:
    """Score every simultaneity of a two-voice file."""
    analysis = _analyze(args)
    if args.json:
        output = format_json(analysis)
    else:
        output = format_text(analysis, verbose=args.verbose, title=Path(args.input).name)
    _write(output, args.output)
    return 0 if overall_passed(analysis) else 1


def cmd_summary(args: argparse.Namespace) -> int:
    """Print only the passage summary."""
    analysis = _analyze(args)
    if args.json:
        output = format_json(analysis, summary_only=True)
    else:
        output = format_summary_text(analysis)
    _write(output, args.output)
    return 0 if overall_passed(analysis) else 1


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input", help="Path to a two-voice .json or .mid file")
    parser.add_argument("--meter", help="Override meter (e.g. 3/4, 6/8)")
    parser.add_argument("--sequence", action="append", metavar="START-END",
                        help="Beat range of a melodic sequence (repeatable)")
    parser.add_argument("--json", action="store_true", help="JSON output")
    parser.add_argument("-o", "--output", help="Output file path")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show score details and debug logging")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="dissonance-analyzer",
        description="Two-voice counterpoint dissonance scoring",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    p_score = subparsers.add_parser("score", help="Score every simultaneity")
    _add_common(p_score)

    p_sum = subparsers.add_parser("summary", help="Show the passage summary only")
    _add_common(p_sum)

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if args.command == "score":
            return cmd_score(args)
        return cmd_summary(args)
    except (ValueError, FileNotFoundError, ImportError) as exc:
        logger.debug("analysis failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
