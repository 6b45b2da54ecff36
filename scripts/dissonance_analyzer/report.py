"""Report generation: text and JSON output."""

from __future__ import annotations

import json
from dataclasses import asdict
from enum import Enum
from fractions import Fraction
from typing import Any, Dict, List, Optional

from .metric import beat_label
from .passage import PassageAnalysis, PassageSummary
from .scoring.base import DISSONANT_BAD, DISSONANT_GOOD, DISSONANT_MARGINAL


def _category_prefix(category: str) -> str:
    return {
        DISSONANT_GOOD: "[GOOD]    ",
        DISSONANT_MARGINAL: "[MARGINAL]",
        DISSONANT_BAD: "[BAD]     ",
    }.get(category, "          ")


def _summary_lines(summary: PassageSummary) -> List[str]:
    lines = ["Summary:"]
    lines.append(f"  Simultaneities:  {summary.total}")
    lines.append(f"  Consonances:     {summary.consonances}"
                 f" ({summary.repetitive_consonances} repetitive)")
    lines.append(f"  Dissonances:     {summary.dissonances}"
                 f" ({summary.good_dissonances} good, {summary.bad_dissonances} bad)")
    lines.append(f"  Average score:   {summary.average_score:+.2f}")
    if summary.type_counts:
        lines.append("  Types:")
        for kind, count in summary.type_counts:
            lines.append(f"    {kind:<26} {count}")
    for group in summary.dissonance_groups:
        lines.append(f"  Consecutive dissonances: {group.length} "
                     f"from {float(group.start):g} to {float(group.end):g}")
    lines.append(f"  OVERALL: {'FAIL' if summary.bad_dissonances else 'PASS'}")
    return lines


def format_text(analysis: PassageAnalysis, verbose: bool = False,
                title: Optional[str] = None) -> str:
    """Format an analysis as human-readable text.

    Consonances are listed only when ``verbose`` is set or when they carry
    a note (repetition, resolution, preparation).
    """
    meter = analysis.context.meter
    lines = [f"=== Dissonance analysis: {title or 'passage'}, {meter[0]}/{meter[1]} ==="]
    lines.append("")

    for result in analysis.results:
        where = beat_label(result.onset, meter)
        if result.is_consonant:
            if not verbose and not result.details:
                continue
            lines.append(f"           {where:<22} {result.interval:<4} "
                         f"{result.category} {result.score:+.2f}")
            for detail in result.details:
                lines.append(f"             - {detail}")
            continue
        lines.append(f"{_category_prefix(result.category)} {where:<22} "
                     f"{result.interval:<4} {result.label:<4} {result.score:+.2f}  "
                     f"{result.description}")
        if verbose:
            for detail in result.details:
                lines.append(f"             - {detail}")

    lines.append("")
    lines.extend(_summary_lines(analysis.summary))
    lines.append("")
    return "\n".join(lines)


def format_summary_text(analysis: PassageAnalysis) -> str:
    return "\n".join(_summary_lines(analysis.summary)) + "\n"


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Fraction):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def analysis_to_dict(analysis: PassageAnalysis) -> Dict[str, Any]:
    summary = asdict(analysis.summary)
    summary["type_counts"] = dict(analysis.summary.type_counts)
    return {
        "meter": list(analysis.context.meter),
        "results": [asdict(r) for r in analysis.results],
        "summary": summary,
    }


def format_json(analysis: PassageAnalysis, summary_only: bool = False) -> str:
    """Format an analysis as JSON; enums by value, onsets as floats."""
    data = analysis_to_dict(analysis)
    if summary_only:
        data = {"meter": data["meter"], "summary": data["summary"]}
    return json.dumps(data, indent=2, default=_json_default)
