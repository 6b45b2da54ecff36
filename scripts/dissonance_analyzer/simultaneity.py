"""Pairwise overlap scan producing the simultaneities of two voices."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import replace
from typing import Iterable, List

from .metric import Meter, metric_weight
from .model import NoteEvent, Simultaneity


def index_voice(notes: Iterable[NoteEvent]) -> List[NoteEvent]:
    """Sort a voice by onset and stamp each note with its position."""
    ordered = sorted(notes, key=lambda n: n.onset)
    return [n if n.index == i else replace(n, index=i) for i, n in enumerate(ordered)]


def find_simultaneities(voice1: List[NoteEvent], voice2: List[NoteEvent],
                        meter: Meter = (4, 4)) -> List[Simultaneity]:
    """Find every overlapping note pair between two voices.

    A simultaneity starts at the later of the two note onsets.  The result is
    sorted by onset; pairs sharing an onset keep voice-1 order.
    """
    v2_sorted = sorted(voice2, key=lambda n: n.onset)
    sims: List[Simultaneity] = []
    for n1 in sorted(voice1, key=lambda n: n.onset):
        # Only voice-2 notes starting before n1 ends can overlap it.
        hi = bisect_left(v2_sorted, n1.end, key=lambda n: n.onset)
        for n2 in v2_sorted[:hi]:
            if n2.end <= n1.onset:
                continue
            start = max(n1.onset, n2.onset)
            sims.append(Simultaneity.of(start, n1, n2, metric_weight(start, meter)))
    sims.sort(key=lambda s: s.onset)
    return sims
