"""Dissonance assembly: entry + exit + patterns into one ScoreResult."""

from __future__ import annotations

from typing import Optional

from ..context import AnalysisContext, is_dissonant
from ..metric import is_strong_beat
from ..model import Simultaneity
from .base import (
    DISSONANT_BAD,
    DISSONANT_GOOD,
    DISSONANT_MARGINAL,
    UNPREPARED,
    DissonantResult,
    ScoreResult,
    signed,
)
from .consonance import score_consonance
from .entry import score_entry
from .exit import score_exit
from .history import IntervalHistory
from .patterns import (
    ANTICIPATION,
    APPOGGIATURA,
    CAMBIATA_TYPES,
    ESCAPE_TONE,
    NEIGHBOR,
    PASSING,
    SUSPENSION,
    find_patterns,
    pattern_bonus,
)
from .rests import analyze_rests

MILD_DISSONANCE_BONUS = 0.5

GOOD_THRESHOLD = 1.0
MARGINAL_THRESHOLD = -0.5

UNPREPARED_LABEL = "!"
PATTERN_LABELS = {
    SUSPENSION: "Sus",
    APPOGGIATURA: "App",
    ESCAPE_TONE: "Esc",
    PASSING: "PT",
    NEIGHBOR: "N",
    ANTICIPATION: "Ant",
}


def pattern_label(pattern_type: str) -> str:
    if pattern_type in CAMBIATA_TYPES:
        return "Cam"
    return PATTERN_LABELS.get(pattern_type, UNPREPARED_LABEL)


def dissonance_category(score: float) -> str:
    if score >= GOOD_THRESHOLD:
        return DISSONANT_GOOD
    if score >= MARGINAL_THRESHOLD:
        return DISSONANT_MARGINAL
    return DISSONANT_BAD


def score_dissonance(prev: Optional[Simultaneity], curr: Simultaneity,
                     nxt: Optional[Simultaneity],
                     context: AnalysisContext) -> DissonantResult:
    """Score a dissonant simultaneity from its two neighbors."""
    rests = analyze_rests(prev, curr, nxt)
    entry = score_entry(prev, curr, rests)
    exit_ = score_exit(curr, nxt, entry, context, rests)
    patterns = find_patterns(curr, entry, exit_)
    bonus = pattern_bonus(patterns)

    total = entry.score + exit_.score + bonus
    details = [f"Entry: {d}" for d in entry.details]
    details.extend(f"Exit: {d}" for d in exit_.details)
    details.extend(f"Pattern: {p.description}: {signed(p.bonus)}" for p in patterns)

    if curr.interval.is_perfect_fourth:
        total += MILD_DISSONANCE_BONUS
        details.append(f"Mild dissonance (P4): {signed(MILD_DISSONANCE_BONUS)}")
    details.append(f"Total: {total:.2f}")

    if patterns:
        kind = patterns[0].type
        summary = patterns[0].description
    else:
        kind = UNPREPARED
        summary = "Unprepared dissonance"
    v1_name, v2_name = curr.pitch_names

    return DissonantResult(
        onset=curr.onset,
        interval=curr.interval.name,
        interval_class=curr.interval.interval_class,
        category=dissonance_category(total),
        score=total,
        type=kind,
        label=pattern_label(kind),
        entry=entry,
        exit=exit_,
        patterns=patterns,
        details=tuple(details),
        description=f"{curr.interval}: {v1_name} vs {v2_name} - {summary}",
        v1_pitch=v1_name,
        v2_pitch=v2_name,
        is_strong_beat=is_strong_beat(curr.metric_weight),
    )


def score_simultaneity(prev: Optional[Simultaneity], curr: Simultaneity,
                       nxt: Optional[Simultaneity], history: IntervalHistory,
                       context: AnalysisContext) -> ScoreResult:
    """Dispatch to the consonance or dissonance scorer."""
    if is_dissonant(curr.interval, context):
        return score_dissonance(prev, curr, nxt, context)
    return score_consonance(prev, curr, nxt, history, context)
