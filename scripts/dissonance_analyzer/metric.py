"""Metric weight and beat classification.

Onsets are in quarter-note units; positions are converted to units of the
meter's denominator before looking up the accent table.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from numbers import Real
from typing import Dict, Tuple

Meter = Tuple[int, int]

STRONG_BEAT_WEIGHT = 0.75
_EPS = 0.01

# Simple meters: accent per whole beat (0-based) other than the downbeat.
_SIMPLE_ACCENTS: Dict[int, Dict[int, float]] = {
    2: {1: 0.5},
    3: {1: 0.5, 2: 0.5},
    4: {1: 0.5, 2: 0.75, 3: 0.5},
    5: {2: 0.6, 3: 0.7},
    6: {3: 0.75},
}
_DEFAULT_BEAT_WEIGHT = 0.5
_OFFBEAT_HALF_WEIGHT = 0.35
_OFFBEAT_OTHER_WEIGHT = 0.25

# Compound meters: weight of a secondary main beat, keyed by main beats per bar.
_COMPOUND_SECONDARY: Dict[int, float] = {2: 0.75, 3: 0.65}


def is_compound(meter: Meter) -> bool:
    """True for 3/8, 6/8, 9/8, 12/8 style meters."""
    numerator, denominator = meter
    return numerator >= 3 and numerator % 3 == 0 and denominator == 8


# ---------------------------------------------------------------------------
# Meter profiles
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MeterProfile:
    """Grouping facts about a time signature."""

    name: str
    meter: Meter
    beats_per_measure: int
    subdivisions: int  # 2 for simple meters, 3 for compound

    @property
    def is_compound(self) -> bool:
        return self.subdivisions == 3

    @property
    def subdivision(self) -> Fraction:
        """Length of one beat subdivision in beats."""
        return Fraction(1, self.subdivisions)

    @property
    def short_note_threshold(self) -> Fraction:
        """Notes at or below this duration count as short (a third of a subdivision)."""
        return self.subdivision / 3


def _profile(numerator: int, denominator: int) -> MeterProfile:
    meter = (numerator, denominator)
    if is_compound(meter):
        return MeterProfile(f"{numerator}/{denominator}", meter, numerator // 3, 3)
    return MeterProfile(f"{numerator}/{denominator}", meter, numerator, 2)


METER_PROFILES: Dict[str, MeterProfile] = {
    p.name: p for p in (
        _profile(2, 4), _profile(3, 4), _profile(4, 4), _profile(5, 4),
        _profile(2, 2), _profile(3, 2), _profile(6, 4),
        _profile(3, 8), _profile(6, 8), _profile(9, 8), _profile(12, 8),
    )
}


def get_meter_profile(meter: Meter) -> MeterProfile:
    """Look up the profile of a meter; unlisted meters get a generic profile."""
    name = f"{meter[0]}/{meter[1]}"
    return METER_PROFILES.get(name) or _profile(meter[0], meter[1])


def _position_in_bar(onset: Real, meter: Meter) -> Real:
    numerator, denominator = meter
    units = onset * denominator / 4
    return units % numerator


def _near(a: Real, b: Real) -> bool:
    return abs(a - b) < _EPS


def metric_weight(onset: Real, meter: Meter = (4, 4)) -> float:
    """Metric strength of an onset in [0, 1].

    1.0 on the downbeat; secondary accents come from the meter's accent table;
    off-beat subdivisions get the lowest weights.
    """
    numerator, _ = meter
    profile = get_meter_profile(meter)
    pos = _position_in_bar(onset, meter)
    if _near(pos, 0) or _near(pos, numerator):
        return 1.0

    if profile.is_compound:
        main_beats = profile.beats_per_measure
        main_pos = int(round(pos) // 3) if _near(pos, round(pos)) else int(pos // 3)
        sub = pos % 3
        if _near(sub, 0) or _near(sub, 3):
            if main_beats == 4:
                return 0.75 if main_pos == 2 else 0.6
            return _COMPOUND_SECONDARY.get(main_beats, 0.6)
        if _near(sub, 1) or _near(sub, 2):
            return 0.3
        return 0.2

    beat = round(pos)
    if _near(pos, beat):
        return _SIMPLE_ACCENTS.get(numerator, {}).get(beat % numerator, _DEFAULT_BEAT_WEIGHT)
    fraction = pos - math.floor(pos)
    if abs(fraction - 0.5) < 0.05:
        return _OFFBEAT_HALF_WEIGHT
    return _OFFBEAT_OTHER_WEIGHT


def is_strong_beat(weight: float) -> bool:
    """Strong-beat test applied uniformly to every meter."""
    return weight >= STRONG_BEAT_WEIGHT


def subdivision(meter: Meter) -> Fraction:
    """Length of one beat subdivision in beats."""
    return get_meter_profile(meter).subdivision


def short_note_threshold(meter: Meter) -> Fraction:
    """Notes at or below this duration count as short."""
    return get_meter_profile(meter).short_note_threshold


def beat_label(onset: Real, meter: Meter = (4, 4)) -> str:
    """Human-readable location, e.g. 'bar 2 beat 3' or 'bar 1 beat 2+0.50'."""
    numerator, denominator = meter
    units = onset * denominator / 4
    bar = int(units // numerator) + 1
    pos = units % numerator
    whole = math.floor(pos)
    fraction = pos - whole
    label = f"bar {bar} beat {whole + 1}"
    if fraction > _EPS:
        label += f"+{float(fraction):.2f}"
    return label
