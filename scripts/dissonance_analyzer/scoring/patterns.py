"""Recognition of contrapuntal idioms from a dissonance's entry and exit.

Rules are tried in the order of ``PATTERN_RULES``.  An *exclusive* rule is
only tried when no earlier rule matched; a *weak_only* rule is skipped on
strong beats.  Per-voice rules stop at the first matching voice, voice 1
first.  Bonuses of all matches add up.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..metric import is_strong_beat
from ..model import Magnitude, Simultaneity, direction, interval_magnitude, is_step
from .base import EntryResult, ExitResult, MotionType, PatternMatch

SUSPENSION = "suspension"
APPOGGIATURA = "appoggiatura"
CAMBIATA_PROPER = "cambiata_proper"
CAMBIATA_INVERTED = "cambiata_inverted"
CAMBIATA_STRONG = "cambiata_strong"
CAMBIATA_INVERTED_STRONG = "cambiata_inverted_strong"
ESCAPE_TONE = "escape_tone"
PASSING = "passing"
NEIGHBOR = "neighbor"
ANTICIPATION = "anticipation"

CAMBIATA_TYPES = frozenset({CAMBIATA_PROPER, CAMBIATA_INVERTED,
                            CAMBIATA_STRONG, CAMBIATA_INVERTED_STRONG})

_APPOGGIATURA_ENTRIES = frozenset({Magnitude.SKIP, Magnitude.PERFECT_LEAP,
                                   Magnitude.OCTAVE, Magnitude.LARGE_LEAP})
_ESCAPE_EXITS = frozenset({Magnitude.SKIP, Magnitude.PERFECT_LEAP, Magnitude.OCTAVE})

# (descending, strong) -> (type, bonus, description)
_CAMBIATA_VARIANTS = {
    (True, False): (CAMBIATA_PROPER, 1.5, "Cambiata (step down, skip down)"),
    (False, False): (CAMBIATA_INVERTED, 1.0, "Inverted cambiata (step up, skip up)"),
    (True, True): (CAMBIATA_STRONG, 0.5, "Cambiata on strong beat"),
    (False, True): (CAMBIATA_INVERTED_STRONG, 0.5, "Inverted cambiata on strong beat"),
}


@dataclass(frozen=True)
class Figure:
    """Entry and exit of one dissonance, as seen by the pattern rules."""
    entry: EntryResult
    exit: ExitResult
    strong: bool

    def entry_interval(self, voice: int) -> int:
        return self.entry.melodic_interval(voice)


@dataclass(frozen=True)
class PatternRule:
    name: str
    match: Callable[[Figure], Optional[PatternMatch]]
    exclusive: bool = False
    weak_only: bool = False


def _first_voice(check: Callable[[Figure, int], Optional[PatternMatch]]):
    def match(fig: Figure) -> Optional[PatternMatch]:
        for voice in (1, 2):
            found = check(fig, voice)
            if found is not None:
                return found
        return None
    return match


def _suspension(fig: Figure) -> Optional[PatternMatch]:
    motion = fig.entry.motion
    if motion.type != MotionType.OBLIQUE or not fig.strong:
        return None
    held = 1 if not motion.v1_moved else 2
    res = fig.exit.resolution(held)
    if res and res.magnitude == Magnitude.STEP and res.direction < 0:
        return PatternMatch(SUSPENSION, 1.5, "Suspension (held voice resolves down by step)", held)
    return None


def _appoggiatura(fig: Figure, voice: int) -> Optional[PatternMatch]:
    if not fig.strong:
        return None
    entry = fig.entry_interval(voice)
    res = fig.exit.resolution(voice)
    if not entry or res is None:
        return None
    if (interval_magnitude(entry) in _APPOGGIATURA_ENTRIES
            and res.magnitude == Magnitude.STEP
            and res.direction == -direction(entry)):
        return PatternMatch(APPOGGIATURA, 2.5,
                            f"Appoggiatura (V{voice} leaps in, steps out opposite)", voice)
    return None


def _cambiata(fig: Figure, voice: int) -> Optional[PatternMatch]:
    entry = fig.entry_interval(voice)
    res = fig.exit.resolution(voice)
    if not is_step(entry) or res is None:
        return None
    if res.size in (3, 4) and res.direction == direction(entry):
        kind, bonus, text = _CAMBIATA_VARIANTS[(entry < 0, fig.strong)]
        return PatternMatch(kind, bonus, f"{text} in V{voice}", voice)
    return None


def _escape_tone(fig: Figure, voice: int) -> Optional[PatternMatch]:
    entry = fig.entry_interval(voice)
    res = fig.exit.resolution(voice)
    if not is_step(entry) or res is None:
        return None
    if res.magnitude in _ESCAPE_EXITS and res.direction == -direction(entry):
        return PatternMatch(ESCAPE_TONE, 0.5,
                            f"Escape tone (V{voice} steps in, leaps out opposite)", voice)
    return None


def _passing(fig: Figure, voice: int) -> Optional[PatternMatch]:
    entry = fig.entry_interval(voice)
    res = fig.exit.resolution(voice)
    if is_step(entry) and res and res.magnitude == Magnitude.STEP \
            and res.direction == direction(entry):
        return PatternMatch(PASSING, 0.0, f"Passing tone (V{voice} stepwise through)", voice)
    return None


def _neighbor(fig: Figure, voice: int) -> Optional[PatternMatch]:
    entry = fig.entry_interval(voice)
    res = fig.exit.resolution(voice)
    if is_step(entry) and res and res.magnitude == Magnitude.STEP \
            and res.direction == -direction(entry):
        return PatternMatch(NEIGHBOR, 0.0, f"Neighbor tone (V{voice} steps out and back)", voice)
    return None


def _anticipation(fig: Figure) -> Optional[PatternMatch]:
    if (not fig.strong
            and fig.entry.motion.type == MotionType.OBLIQUE
            and fig.exit.motion.type == MotionType.OBLIQUE):
        return PatternMatch(ANTICIPATION, 0.0, "Anticipation (oblique entry and exit on weak beat)")
    return None


PATTERN_RULES: List[PatternRule] = [
    PatternRule(SUSPENSION, _suspension),
    PatternRule(APPOGGIATURA, _first_voice(_appoggiatura)),
    PatternRule("cambiata", _first_voice(_cambiata)),
    PatternRule(ESCAPE_TONE, _first_voice(_escape_tone), exclusive=True),
    PatternRule(PASSING, _first_voice(_passing), exclusive=True, weak_only=True),
    PatternRule(NEIGHBOR, _first_voice(_neighbor), exclusive=True, weak_only=True),
    PatternRule(ANTICIPATION, _anticipation, weak_only=True),
]


def find_patterns(curr: Simultaneity, entry: EntryResult,
                  exit: ExitResult) -> Tuple[PatternMatch, ...]:
    """Match the idioms of a dissonance; empty without both neighbors."""
    if entry.motion is None or exit.motion is None:
        return ()
    fig = Figure(entry=entry, exit=exit, strong=is_strong_beat(curr.metric_weight))
    matches: List[PatternMatch] = []
    for rule in PATTERN_RULES:
        if rule.exclusive and matches:
            continue
        if rule.weak_only and fig.strong:
            continue
        found = rule.match(fig)
        if found is not None:
            matches.append(found)
    return tuple(matches)


def pattern_bonus(patterns: Tuple[PatternMatch, ...]) -> float:
    return sum(p.bonus for p in patterns)
