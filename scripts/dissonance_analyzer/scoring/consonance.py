"""Consonance scoring: repetition, resolution quality and preparation."""

from __future__ import annotations

from typing import List, Optional

from ..context import AnalysisContext, is_dissonant
from ..model import Simultaneity
from .base import (
    CONSONANT_BAD_RESOLUTION,
    CONSONANT_GOOD_RESOLUTION,
    CONSONANT_NORMAL,
    CONSONANT_REPETITIVE,
    ConsonantResult,
    signed,
)
from .history import IntervalHistory
from .motion import classify_motion

PERFECT_REPEAT_LIMIT = 3
PERFECT_REPEAT_PENALTY = -0.5
IMPERFECT_REPEAT_LIMIT = 4
IMPERFECT_REPEAT_PENALTY = -0.3

_ORDINALS = {1: "st", 2: "nd", 3: "rd"}


def _ordinal(n: int) -> str:
    suffix = "th" if 10 <= n % 100 <= 20 else _ORDINALS.get(n % 10, "th")
    return f"{n}{suffix}"


def consonance_label(interval_class: int) -> str:
    return "U" if interval_class == 1 else str(interval_class)


def score_consonance(prev: Optional[Simultaneity], curr: Simultaneity,
                     nxt: Optional[Simultaneity], history: IntervalHistory,
                     context: AnalysisContext) -> ConsonantResult:
    """Score a consonant simultaneity.

    Only repetition changes the score.  Resolution quality is a category
    (the resolving motion is already counted in the dissonance's exit score)
    and preparation is informational.
    """
    interval = curr.interval
    ic = interval.interval_class
    occurrence = history.run_length(ic) + 1
    score = 0.0
    category = CONSONANT_NORMAL
    details: List[str] = []

    if interval.is_perfect_consonance and occurrence >= PERFECT_REPEAT_LIMIT:
        score += PERFECT_REPEAT_PENALTY
        category = CONSONANT_REPETITIVE
        details.append(f"{_ordinal(occurrence)} consecutive {interval}: {signed(PERFECT_REPEAT_PENALTY)}")
    elif interval.is_imperfect_consonance and occurrence >= IMPERFECT_REPEAT_LIMIT:
        score += IMPERFECT_REPEAT_PENALTY
        category = CONSONANT_REPETITIVE
        details.append(f"{_ordinal(occurrence)} consecutive {interval}: {signed(IMPERFECT_REPEAT_PENALTY)}")

    resolves = prev is not None and is_dissonant(prev.interval, context)
    if resolves:
        motion = classify_motion(prev, curr)
        leaping = [v for v in (1, 2) if motion.moved(v) and abs(motion.interval(v)) > 2]
        if leaping:
            category = CONSONANT_BAD_RESOLUTION
            for voice in leaping:
                details.append(f"V{voice} resolved by leap")
        else:
            category = CONSONANT_GOOD_RESOLUTION
            details.append("Stepwise resolution of preceding dissonance")

    is_preparation = (not resolves and nxt is not None
                      and is_dissonant(nxt.interval, context))
    if is_preparation:
        details.append("Prepares following dissonance")

    return ConsonantResult(
        onset=curr.onset,
        interval=interval.name,
        interval_class=ic,
        category=category,
        score=score,
        label=consonance_label(ic),
        details=tuple(details),
        resolves_dissonance=resolves,
        is_preparation=is_preparation,
        repetition_count=occurrence,
    )
