"""Passage aggregation: score every simultaneity in onset order and summarize."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from numbers import Real
from typing import List, Optional, Sequence, Tuple

from .context import AnalysisContext, legacy_context
from .model import NoteEvent, Simultaneity
from .scoring.base import (
    CONSONANT_REPETITIVE,
    ConsonantResult,
    DissonantResult,
    ScoreResult,
)
from .scoring.dissonance import score_simultaneity
from .scoring.history import IntervalHistory
from .scoring.rests import rest_filled_by_other_voice
from .simultaneity import find_simultaneities, index_voice

logger = logging.getLogger(__name__)

MIN_GROUP_LENGTH = 2


@dataclass(frozen=True)
class PatternInstance:
    """One recognized idiom at a given onset."""
    onset: Real
    type: str
    description: str
    bonus: float
    voice: Optional[int] = None


@dataclass(frozen=True)
class DissonanceGroup:
    """A run of adjacent dissonant simultaneities."""
    start: Real
    end: Real
    onsets: Tuple[Real, ...]
    scores: Tuple[float, ...]

    @property
    def length(self) -> int:
        return len(self.onsets)

    @property
    def total_score(self) -> float:
        return sum(self.scores)


@dataclass(frozen=True)
class PassageSummary:
    total: int = 0
    consonances: int = 0
    dissonances: int = 0
    repetitive_consonances: int = 0
    good_dissonances: int = 0
    bad_dissonances: int = 0
    average_score: float = 0.0
    type_counts: Tuple[Tuple[str, int], ...] = ()  # (type, count) sorted by type
    patterns: Tuple[PatternInstance, ...] = ()
    dissonance_groups: Tuple[DissonanceGroup, ...] = ()


@dataclass
class PassageAnalysis:
    """Per-simultaneity results plus the passage summary."""
    simultaneities: List[Simultaneity]
    results: List[ScoreResult]
    summary: PassageSummary
    context: AnalysisContext

    @property
    def consonances(self) -> List[ConsonantResult]:
        return [r for r in self.results if r.is_consonant]

    @property
    def dissonances(self) -> List[DissonantResult]:
        return [r for r in self.results if not r.is_consonant]


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


def _dissonance_groups(results: Sequence[ScoreResult]) -> List[DissonanceGroup]:
    groups: List[DissonanceGroup] = []
    run: List[DissonantResult] = []

    def close() -> None:
        if len(run) >= MIN_GROUP_LENGTH:
            groups.append(DissonanceGroup(
                start=run[0].onset,
                end=run[-1].onset,
                onsets=tuple(r.onset for r in run),
                scores=tuple(r.score for r in run),
            ))
        run.clear()

    for result in results:
        if result.is_consonant:
            close()
        else:
            run.append(result)
    close()
    return groups


def summarize(results: Sequence[ScoreResult]) -> PassageSummary:
    """Totals, idiom counts and consecutive-dissonance groups for a passage."""
    dissonances = [r for r in results if not r.is_consonant]
    consonances = [r for r in results if r.is_consonant]

    type_counts = Counter(r.type for r in dissonances)
    patterns = [
        PatternInstance(onset=r.onset, type=p.type, description=p.description,
                        bonus=p.bonus, voice=p.voice)
        for r in dissonances for p in r.patterns
    ]
    average = (sum(r.score for r in dissonances) / len(dissonances)
               if dissonances else 0.0)

    return PassageSummary(
        total=len(results),
        consonances=len(consonances),
        dissonances=len(dissonances),
        repetitive_consonances=sum(1 for r in consonances
                                   if r.category == CONSONANT_REPETITIVE),
        good_dissonances=sum(1 for r in dissonances if r.score >= 0),
        bad_dissonances=sum(1 for r in dissonances if r.score < 0),
        average_score=average,
        type_counts=tuple(sorted(type_counts.items())),
        patterns=tuple(patterns),
        dissonance_groups=tuple(_dissonance_groups(results)),
    )


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def analyze_passage(
    simultaneities: Sequence[Simultaneity],
    context: Optional[AnalysisContext] = None,
    voices: Optional[Tuple[List[NoteEvent], List[NoteEvent]]] = None,
    history: Optional[IntervalHistory] = None,
) -> PassageAnalysis:
    """Score a pre-sorted simultaneity sequence.

    Args:
        simultaneities: Simultaneities in onset order.
        context: Analysis configuration; the legacy settings when omitted.
        voices: The two note lists the simultaneities came from.  Needed to
            detect a rest spanned by a whole note of the other voice, which
            breaks repetition counting.
        history: Caller-owned interval history to continue; a fresh one
            when omitted.  It is appended to in place.

    Returns:
        PassageAnalysis with one result per simultaneity.
    """
    if context is None:
        context = legacy_context()
    if history is None:
        history = IntervalHistory()

    sims = list(simultaneities)
    results: List[ScoreResult] = []
    for i, curr in enumerate(sims):
        prev = sims[i - 1] if i > 0 else None
        nxt = sims[i + 1] if i + 1 < len(sims) else None

        if prev is not None and voices is not None \
                and rest_filled_by_other_voice(prev, curr, voices[0], voices[1]):
            logger.debug("onset %s: rest spanned by other voice, history reset", curr.onset)
            history.mark_rest()

        result = score_simultaneity(prev, curr, nxt, history, context)
        logger.debug("onset %s: %s %s %+.2f", curr.onset, result.interval,
                     result.category, result.score)
        results.append(result)
        history.append(curr.interval.interval_class)

    summary = summarize(results)
    logger.debug("passage: %d simultaneities, %d dissonances, average %.2f",
                 summary.total, summary.dissonances, summary.average_score)
    return PassageAnalysis(simultaneities=sims, results=results,
                           summary=summary, context=context)


def analyze_voices(
    voice1: Sequence[NoteEvent],
    voice2: Sequence[NoteEvent],
    context: Optional[AnalysisContext] = None,
) -> PassageAnalysis:
    """Find the simultaneities of two voices and score them."""
    if context is None:
        context = legacy_context()
    v1 = index_voice(voice1)
    v2 = index_voice(voice2)
    sims = find_simultaneities(v1, v2, context.meter)
    return analyze_passage(sims, context, voices=(v1, v2))
