"""Entry scoring: the approach into a dissonance."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..metric import is_strong_beat
from ..model import Simultaneity
from .base import NO_RESTS, EntryResult, MotionType, RestContext, signed
from .motion import classify_motion

ENTRY_BONUSES: Dict[MotionType, float] = {
    MotionType.OBLIQUE: 0.5,
    MotionType.CONTRARY: 0.5,
}
ENTRY_PENALTIES: Dict[MotionType, float] = {
    MotionType.PARALLEL: -1.5,
    MotionType.SIMILAR_SAME_TYPE: -1.0,
    MotionType.SIMILAR_STEP: -0.5,
    MotionType.SIMILAR: -0.5,
}
# Penalties are halved when a voice enters from a rest.
FROM_REST_MODIFIER = 0.5
STRONG_BEAT_PENALTY = -0.5

_MOTION_NAMES = {
    MotionType.OBLIQUE: "Oblique motion",
    MotionType.CONTRARY: "Contrary motion",
    MotionType.PARALLEL: "Parallel motion",
    MotionType.SIMILAR_SAME_TYPE: "Similar motion (same interval type)",
    MotionType.SIMILAR_STEP: "Similar motion (step)",
    MotionType.SIMILAR: "Similar motion",
}


def score_entry(prev: Optional[Simultaneity], curr: Simultaneity,
                rests: RestContext = NO_RESTS) -> EntryResult:
    """Score the motion from ``prev`` into the dissonance ``curr``.

    Returns the additive score, its detail strings, the motion and each
    voice's signed melodic interval (used later for leap recovery).
    """
    if prev is None:
        return EntryResult(score=0.0, details=("No previous simultaneity",))

    motion = classify_motion(prev, curr, rests)

    if motion.type == MotionType.REENTRY:
        # The re-entering voice has no melodic connection to its old note.
        return EntryResult(
            score=0.0,
            details=("Re-entry after rest: 0",),
            motion=motion,
            v1_melodic_interval=0 if rests.v1_reentry else motion.v1_interval,
            v2_melodic_interval=0 if rests.v2_reentry else motion.v2_interval,
        )

    score = 0.0
    details: List[str] = []
    name = _MOTION_NAMES.get(motion.type)

    if motion.type in ENTRY_BONUSES:
        delta = ENTRY_BONUSES[motion.type]
        score += delta
        details.append(f"{name}: {signed(delta)}")
    elif motion.type in ENTRY_PENALTIES:
        modifier = FROM_REST_MODIFIER if motion.from_rest else 1.0
        delta = ENTRY_PENALTIES[motion.type] * modifier
        score += delta
        suffix = " from rest" if motion.from_rest else ""
        details.append(f"{name}{suffix}: {signed(delta)}")
    elif motion.type == MotionType.STATIC:
        details.append("Static (no voice moved): 0")

    if is_strong_beat(curr.metric_weight):
        score += STRONG_BEAT_PENALTY
        details.append(f"Strong beat: {signed(STRONG_BEAT_PENALTY)}")

    return EntryResult(
        score=score,
        details=tuple(details),
        motion=motion,
        v1_melodic_interval=motion.v1_interval,
        v2_melodic_interval=motion.v2_interval,
    )
