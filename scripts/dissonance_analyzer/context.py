"""Analysis configuration: meter, P4 treatment and melodic-sequence ranges.

One immutable ``AnalysisContext`` is threaded through every scoring call.
The module-level setters at the bottom are kept for callers of the old
process-wide configuration; they only feed ``legacy_context()``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from numbers import Real
from typing import Iterable, Optional, Tuple

from .metric import METER_PROFILES, Meter, MeterProfile, get_meter_profile
from .model import Interval, Simultaneity

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Sequence ranges
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BeatRange:
    """Inclusive beat span covered by a melodic sequence."""
    start: Real
    end: Real

    def contains(self, onset: Real) -> bool:
        return self.start <= onset <= self.end


@dataclass(frozen=True)
class NoteRange:
    """Inclusive note-index span of a melodic sequence.

    ``voice`` is 1 or 2; None matches notes of either voice.
    """
    start: int
    end: int
    voice: Optional[int] = None

    def contains(self, index: Optional[int], voice: int) -> bool:
        if index is None:
            return False
        if self.voice is not None and self.voice != voice:
            return False
        return self.start <= index <= self.end


# ---------------------------------------------------------------------------
# Meters
# ---------------------------------------------------------------------------


def parse_meter(text: str) -> Meter:
    """Parse '6/8' into (6, 8)."""
    parts = text.strip().split("/")
    if len(parts) != 2:
        raise ValueError(f"invalid meter '{text}' (expected e.g. 4/4)")
    try:
        numerator, denominator = int(parts[0]), int(parts[1])
    except ValueError as exc:
        raise ValueError(f"invalid meter '{text}' (expected e.g. 4/4)") from exc
    if numerator <= 0 or denominator <= 0:
        raise ValueError(f"invalid meter '{text}' (values must be positive)")
    meter = (numerator, denominator)
    if f"{numerator}/{denominator}" not in METER_PROFILES:
        logger.info("meter %d/%d has no profile, using generic %s grouping", numerator,
                    denominator, "compound" if get_meter_profile(meter).is_compound else "simple")
    return meter


# ---------------------------------------------------------------------------
# AnalysisContext
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AnalysisContext:
    """Immutable configuration for one analysis call."""

    meter: Meter = (4, 4)
    treat_p4_as_dissonant: bool = True
    sequence_beat_ranges: Tuple[BeatRange, ...] = field(default_factory=tuple)
    sequence_note_ranges: Tuple[NoteRange, ...] = field(default_factory=tuple)

    @property
    def meter_profile(self) -> MeterProfile:
        return get_meter_profile(self.meter)

    def onset_in_sequence(self, onset: Real) -> bool:
        return any(r.contains(onset) for r in self.sequence_beat_ranges)

    def note_in_sequence(self, index: Optional[int], voice: int) -> bool:
        return any(r.contains(index, voice) for r in self.sequence_note_ranges)

    def in_sequence(self, sim: Simultaneity) -> bool:
        """True if the simultaneity falls inside any supplied sequence range."""
        return (
            self.onset_in_sequence(sim.onset)
            or self.note_in_sequence(sim.voice1_note.index, 1)
            or self.note_in_sequence(sim.voice2_note.index, 2)
        )


def is_p4_dissonant(context: AnalysisContext) -> bool:
    """Whether a perfect fourth counts as dissonant.

    The toggle is carried in the context but a two-voice fourth is scored as
    a dissonance whichever way it is set.
    """
    if context.treat_p4_as_dissonant:
        return True
    return True


def is_dissonant(interval: Interval, context: AnalysisContext) -> bool:
    """Dissonance test used by every scorer."""
    if interval.is_perfect_fourth:
        return is_p4_dissonant(context)
    return not interval.is_consonant


# ---------------------------------------------------------------------------
# Legacy process-wide configuration
# ---------------------------------------------------------------------------

_LEGACY_DEFAULTS = {
    "meter": (4, 4),
    "treat_p4_as_dissonant": True,
    "sequence_note_ranges": (),
    "sequence_beat_ranges": (),
}
_legacy = dict(_LEGACY_DEFAULTS)


def set_meter(meter: Meter) -> None:
    _legacy["meter"] = (int(meter[0]), int(meter[1]))


def get_meter() -> Meter:
    return _legacy["meter"]


def set_p4_treatment(dissonant: bool) -> None:
    _legacy["treat_p4_as_dissonant"] = bool(dissonant)


def get_p4_treatment() -> bool:
    return _legacy["treat_p4_as_dissonant"]


def set_sequence_ranges(ranges: Iterable[NoteRange]) -> None:
    _legacy["sequence_note_ranges"] = tuple(ranges)


def get_sequence_ranges() -> Tuple[NoteRange, ...]:
    return _legacy["sequence_note_ranges"]


def set_sequence_beat_ranges(ranges: Iterable[BeatRange]) -> None:
    _legacy["sequence_beat_ranges"] = tuple(ranges)


def get_sequence_beat_ranges() -> Tuple[BeatRange, ...]:
    return _legacy["sequence_beat_ranges"]


def reset_legacy_config() -> None:
    """Restore the legacy settings to their defaults."""
    _legacy.clear()
    _legacy.update(_LEGACY_DEFAULTS)


def legacy_context() -> AnalysisContext:
    """Snapshot the legacy settings as an AnalysisContext."""
    return AnalysisContext(
        meter=_legacy["meter"],
        treat_p4_as_dissonant=_legacy["treat_p4_as_dissonant"],
        sequence_beat_ranges=_legacy["sequence_beat_ranges"],
        sequence_note_ranges=_legacy["sequence_note_ranges"],
    )
