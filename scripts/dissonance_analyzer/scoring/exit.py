"""Exit scoring: how a dissonance is left and resolved.

The score combines four parts:

1. the successor interval (imperfect consonance best, another dissonance
   worst),
2. abandonment and rest validity (a voice falling silent past its phantom
   limit of half its own note),
3. a proportional leap-resolution penalty per moving voice, sized by the
   entry leap and the exit motion,
4. a small extra penalty when a leap keeps going in the same direction.

Leap penalties shrink to a quarter inside a melodic sequence.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..context import AnalysisContext, is_dissonant
from ..metric import is_strong_beat
from ..model import (
    LEAP_MAGNITUDES,
    WIDE_LEAP_MAGNITUDES,
    Magnitude,
    Simultaneity,
    direction,
    interval_magnitude,
)
from .base import (
    NO_RESTS,
    EntryResult,
    ExitResult,
    RestContext,
    VoiceResolution,
    signed,
)
from .motion import classify_motion
from .rests import analyze_rests

UNRESOLVED_SCORE = -1.0

IMPERFECT_RESOLUTION = 1.0
PERFECT_RESOLUTION = 0.5
DISSONANT_SUCCESSOR = -0.75
SHORT_WEAK_DISSONANT_SUCCESSOR = -0.375

ABANDONMENT_PENALTY = -0.5
INVALID_RESOLUTION_PENALTY = -1.0
DELAYED_RESOLUTION_PENALTY = -0.3
PHANTOM_LIMIT_RATIO = 0.5

LEAP_CONTINUATION_PENALTY = -0.25
SEQUENCE_MITIGATION = 0.25

# Exit leap penalties when the voice did not leap in.
_FLAT_LEAP_PENALTIES = {
    Magnitude.SKIP: -0.5,
    Magnitude.PERFECT_LEAP: -0.5,
    Magnitude.LARGE_LEAP: -1.5,
    Magnitude.OCTAVE: -1.5,
}


def leap_resolution_penalty(entry_interval: int, exit_interval: int) -> float:
    """Penalty for leaving a note by ``exit_interval`` after entering by ``entry_interval``.

    Both intervals are signed semitones; an entry of 0 means no entry motion
    was recorded.
    """
    exit_mag = interval_magnitude(exit_interval)
    if exit_mag in (Magnitude.UNISON, Magnitude.STEP):
        return 0.0
    entry_mag = interval_magnitude(entry_interval)
    if entry_mag not in LEAP_MAGNITUDES:
        return _FLAT_LEAP_PENALTIES[exit_mag]

    opposite = direction(exit_interval) == -direction(entry_interval)
    if entry_mag == Magnitude.SKIP:
        if exit_mag == Magnitude.SKIP:
            return -0.5
        if exit_mag == Magnitude.PERFECT_LEAP:
            return -1.0
        return -2.0
    if entry_mag == Magnitude.PERFECT_LEAP:
        if exit_mag == Magnitude.SKIP:
            return -1.0 if opposite else -1.5
        if exit_mag == Magnitude.PERFECT_LEAP and opposite:
            return -1.5
        return -2.0
    if exit_mag == Magnitude.SKIP and opposite:
        return -1.5
    return -2.5


def leap_continuation_penalty(entry_interval: int, exit_interval: int) -> float:
    """Extra penalty when a leap of a fourth or more is not reversed."""
    entry_mag = interval_magnitude(entry_interval)
    if entry_mag != Magnitude.PERFECT_LEAP and entry_mag not in WIDE_LEAP_MAGNITUDES:
        return 0.0
    if exit_interval and direction(exit_interval) == direction(entry_interval):
        return LEAP_CONTINUATION_PENALTY
    return 0.0


def _successor_base(curr: Simultaneity, nxt: Simultaneity,
                    context: AnalysisContext) -> Tuple[float, str]:
    interval = nxt.interval
    if not is_dissonant(interval, context):
        if interval.is_imperfect_consonance:
            return IMPERFECT_RESOLUTION, f"Resolves to imperfect consonance ({interval}): {signed(IMPERFECT_RESOLUTION)}"
        return PERFECT_RESOLUTION, f"Resolves to consonance ({interval}): {signed(PERFECT_RESOLUTION)}"
    short = curr.shortest_duration <= context.meter_profile.short_note_threshold
    if short and not is_strong_beat(curr.metric_weight):
        return (SHORT_WEAK_DISSONANT_SUCCESSOR,
                f"Moves to dissonance ({interval}) from short weak note: "
                f"{signed(SHORT_WEAK_DISSONANT_SUCCESSOR)}")
    return DISSONANT_SUCCESSOR, f"Moves to dissonance ({interval}): {signed(DISSONANT_SUCCESSOR)}"


def _late_voices(curr: Simultaneity, rests: RestContext) -> List[int]:
    """Voices whose rest before the next onset exceeds their phantom limit."""
    late = []
    for voice in (1, 2):
        if not rests.exit_to_rest.rested(voice):
            continue
        phantom_limit = curr.note(voice).duration * PHANTOM_LIMIT_RATIO
        if rests.exit_to_rest.duration(voice) > phantom_limit:
            late.append(voice)
    return late


def score_exit(curr: Simultaneity, nxt: Optional[Simultaneity],
               entry: EntryResult, context: AnalysisContext,
               rests: RestContext = NO_RESTS) -> ExitResult:
    """Score how the dissonance ``curr`` moves on to ``nxt``.

    ``rests`` is the rest context of ``curr`` itself (exit rests and
    abandonment); re-entry on the way to ``nxt`` is worked out here.
    """
    if nxt is None:
        return ExitResult(
            score=UNRESOLVED_SCORE,
            details=(f"No following note, dissonance unresolved: {signed(UNRESOLVED_SCORE)}",),
            base=UNRESOLVED_SCORE,
        )

    next_rests = analyze_rests(curr, nxt)
    motion = classify_motion(curr, nxt, next_rests)

    base, base_detail = _successor_base(curr, nxt, context)
    score = base
    details = [base_detail]

    if rests.resolved_by_abandonment:
        score += ABANDONMENT_PENALTY
        details.append(f"Resolved by abandonment: {signed(ABANDONMENT_PENALTY)}")

    late = _late_voices(curr, rests)
    if len(late) == 2:
        score += INVALID_RESOLUTION_PENALTY
        details.append(
            f"Invalid resolution (both voices rest past phantom limit): "
            f"{signed(INVALID_RESOLUTION_PENALTY)}")
    elif late:
        score += DELAYED_RESOLUTION_PENALTY
        details.append(
            f"Delayed resolution (V{late[0]} rests past phantom limit): "
            f"{signed(DELAYED_RESOLUTION_PENALTY)}")

    in_sequence = context.in_sequence(curr)
    resolutions = {1: None, 2: None}
    leap_total = 0.0
    for voice in (1, 2):
        if not motion.moved(voice) or next_rests.reentry(voice):
            continue
        exit_interval = motion.interval(voice)
        resolutions[voice] = VoiceResolution(exit_interval)
        entry_interval = entry.melodic_interval(voice)
        penalty = leap_resolution_penalty(entry_interval, exit_interval)
        continuation = leap_continuation_penalty(entry_interval, exit_interval)
        if in_sequence:
            penalty *= SEQUENCE_MITIGATION
            continuation *= SEQUENCE_MITIGATION
        mag = interval_magnitude(exit_interval).value
        seq_note = " (in sequence)" if in_sequence else ""
        if penalty:
            details.append(f"V{voice} {mag} exit ({exit_interval:+d} st){seq_note}: {signed(penalty)}")
        if continuation:
            details.append(f"V{voice} leap continues same direction{seq_note}: {signed(continuation)}")
        leap_total += penalty + continuation

    score += leap_total
    return ExitResult(
        score=score,
        details=tuple(details),
        base=base,
        motion=motion,
        v1_resolution=resolutions[1],
        v2_resolution=resolutions[2],
        leap_penalty=leap_total,
        in_sequence=in_sequence,
        resolved=base > 0,
    )
