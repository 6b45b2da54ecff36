"""Rest, re-entry and abandonment detection around a simultaneity."""

from __future__ import annotations

from numbers import Real
from typing import List, Optional

from ..model import NoteEvent, Simultaneity
from .base import RestContext, RestPair

# Gaps at or below this many beats are articulation, not rests.
REST_TOLERANCE = 0.01
# A rest longer than this many beats and than REENTRY_NOTE_RATIO times the
# voice's previous note makes the voice melodically "forget" that note.
REENTRY_MIN_REST = 1.0
REENTRY_NOTE_RATIO = 2


def _gap_pair(notes: List[NoteEvent], onset: Real) -> RestPair:
    gaps = [onset - n.end for n in notes]
    rested = [g > REST_TOLERANCE for g in gaps]
    return RestPair(
        v1=rested[0],
        v2=rested[1],
        v1_duration=gaps[0] if rested[0] else 0,
        v2_duration=gaps[1] if rested[1] else 0,
    )


def entry_rests(prev: Optional[Simultaneity], curr: Simultaneity) -> RestPair:
    """Silence in each voice between the previous simultaneity and this one."""
    if prev is None:
        return RestPair()
    return _gap_pair([prev.voice1_note, prev.voice2_note], curr.onset)


def exit_rests(curr: Simultaneity, nxt: Optional[Simultaneity]) -> RestPair:
    """Silence in each voice between this simultaneity and the next."""
    if nxt is None:
        return RestPair()
    return _gap_pair([curr.voice1_note, curr.voice2_note], nxt.onset)


def is_reentry(rest_duration: Real, previous_note_duration: Real) -> bool:
    """True when a rest is long enough to disconnect a voice from its last note."""
    return (rest_duration > REENTRY_MIN_REST
            and rest_duration > REENTRY_NOTE_RATIO * previous_note_duration)


def is_abandoned(curr: Simultaneity, nxt: Optional[Simultaneity]) -> bool:
    """True when one voice drops out before the other and before the next onset.

    At the end of a passage any difference in the two end times counts.
    """
    end1 = curr.voice1_note.end
    end2 = curr.voice2_note.end
    if abs(end1 - end2) <= REST_TOLERANCE:
        return False
    if nxt is None:
        return True
    return nxt.onset - min(end1, end2) > REST_TOLERANCE


def analyze_rests(prev: Optional[Simultaneity], curr: Simultaneity,
                  nxt: Optional[Simultaneity] = None) -> RestContext:
    """Collect entry rests, exit rests, re-entry and abandonment for ``curr``."""
    entry = entry_rests(prev, curr)
    v1_reentry = v2_reentry = False
    if prev is not None:
        v1_reentry = entry.v1 and is_reentry(entry.v1_duration, prev.voice1_note.duration)
        v2_reentry = entry.v2 and is_reentry(entry.v2_duration, prev.voice2_note.duration)
    return RestContext(
        entry_from_rest=entry,
        exit_to_rest=exit_rests(curr, nxt),
        v1_reentry=v1_reentry,
        v2_reentry=v2_reentry,
        resolved_by_abandonment=is_abandoned(curr, nxt),
    )


def rest_filled_by_other_voice(prev: Simultaneity, curr: Simultaneity,
                               voice1: List[NoteEvent],
                               voice2: List[NoteEvent]) -> bool:
    """True if one voice rested and the other played a whole note inside that rest."""
    entry = entry_rests(prev, curr)
    for resting, other in ((1, voice2), (2, voice1)):
        if not entry.rested(resting):
            continue
        rest_start = prev.note(resting).end
        for n in other:
            if (n.onset >= rest_start - REST_TOLERANCE
                    and n.end <= curr.onset + REST_TOLERANCE):
                return True
    return False
