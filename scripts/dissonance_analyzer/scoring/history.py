"""Rolling interval-class history used for repetition tracking."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

# Marks a rest that breaks repetition counting.
REST_SENTINEL = None


class IntervalHistory:
    """Interval classes of earlier simultaneities in onset order.

    Append-only within one analysis pass.  ``REST_SENTINEL`` entries stop a
    backward repetition count but keep their place in the chronology.
    """

    def __init__(self, entries: Optional[Iterable[Optional[int]]] = None):
        self.entries: List[Optional[int]] = list(entries or [])

    def append(self, interval_class: int) -> None:
        self.entries.append(interval_class)

    def mark_rest(self) -> None:
        self.entries.append(REST_SENTINEL)

    def run_length(self, interval_class: int) -> int:
        """Count trailing entries equal to ``interval_class``."""
        count = 0
        for entry in reversed(self.entries):
            if entry is REST_SENTINEL or entry != interval_class:
                break
            count += 1
        return count

    def copy(self) -> "IntervalHistory":
        return IntervalHistory(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Optional[int]]:
        return iter(self.entries)

    def __repr__(self) -> str:
        return f"IntervalHistory({self.entries!r})"
