"""Motion classification between two consecutive simultaneities.

The classification is an ordered rule table: the first rule whose predicate
holds names the motion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..model import Simultaneity, direction, interval_magnitude
from .base import MotionInfo, MotionType, RestContext


@dataclass(frozen=True)
class Transition:
    """Raw per-voice movement between two simultaneities."""
    v1_moved: bool
    v2_moved: bool
    v1_interval: int
    v2_interval: int
    is_reentry: bool = False


def _same_magnitude(t: Transition) -> bool:
    return interval_magnitude(t.v1_interval) == interval_magnitude(t.v2_interval)


MotionRule = Tuple[MotionType, Callable[[Transition], bool]]

# Parallel is tested before the step rules: equal motion in the same
# direction is literal parallel motion even by a semitone.
MOTION_RULES: List[MotionRule] = [
    (MotionType.REENTRY, lambda t: t.is_reentry),
    (MotionType.STATIC, lambda t: not t.v1_moved and not t.v2_moved),
    (MotionType.OBLIQUE, lambda t: t.v1_moved != t.v2_moved),
    (MotionType.CONTRARY,
     lambda t: direction(t.v1_interval) == -direction(t.v2_interval)),
    (MotionType.PARALLEL, lambda t: t.v1_interval == t.v2_interval),
    (MotionType.SIMILAR_STEP,
     lambda t: abs(t.v1_interval) <= 2 or abs(t.v2_interval) <= 2),
    (MotionType.SIMILAR_SAME_TYPE, _same_magnitude),
    (MotionType.SIMILAR, lambda t: True),
]


def _voice_moved(prev: Simultaneity, curr: Simultaneity, voice: int) -> bool:
    before, after = prev.note(voice), curr.note(voice)
    return after is not before and after.pitch != before.pitch


def transition(prev: Simultaneity, curr: Simultaneity,
               is_reentry: bool = False) -> Transition:
    v1_moved = _voice_moved(prev, curr, 1)
    v2_moved = _voice_moved(prev, curr, 2)
    return Transition(
        v1_moved=v1_moved,
        v2_moved=v2_moved,
        v1_interval=curr.voice1_note.pitch - prev.voice1_note.pitch if v1_moved else 0,
        v2_interval=curr.voice2_note.pitch - prev.voice2_note.pitch if v2_moved else 0,
        is_reentry=is_reentry,
    )


def match_motion_rule(t: Transition) -> MotionType:
    for motion_type, predicate in MOTION_RULES:
        if predicate(t):
            return motion_type
    return MotionType.SIMILAR


def classify_motion(prev: Optional[Simultaneity], curr: Simultaneity,
                    rests: Optional[RestContext] = None) -> MotionInfo:
    """Classify the motion from ``prev`` into ``curr``.

    Without a predecessor the motion is 'unknown' and both voices count as
    moved.  A re-entry in ``rests`` overrides every other label.
    """
    if prev is None:
        return MotionInfo(type=MotionType.UNKNOWN, v1_moved=True, v2_moved=True)

    from_rest = bool(rests and rests.entry_from_rest.any)
    is_reentry = bool(rests and rests.is_reentry)
    t = transition(prev, curr, is_reentry)
    return MotionInfo(
        type=match_motion_rule(t),
        v1_moved=t.v1_moved,
        v2_moved=t.v2_moved,
        v1_interval=t.v1_interval,
        v2_interval=t.v2_interval,
        from_rest=from_rest,
        is_reentry=is_reentry,
    )
