"""Value types shared by the scoring components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import Optional, Tuple, Union

from ..model import Magnitude, direction, interval_magnitude

# Consonant categories
CONSONANT_NORMAL = "consonant_normal"
CONSONANT_REPETITIVE = "consonant_repetitive"
CONSONANT_GOOD_RESOLUTION = "consonant_good_resolution"
CONSONANT_BAD_RESOLUTION = "consonant_bad_resolution"

# Dissonant categories
DISSONANT_GOOD = "dissonant_good"
DISSONANT_MARGINAL = "dissonant_marginal"
DISSONANT_BAD = "dissonant_bad"

UNPREPARED = "unprepared"


def signed(value: float) -> str:
    """Format a score delta with its sign, e.g. +0.5 or -1.5."""
    return f"{value:+g}"


class MotionType(Enum):
    """Between-voice motion from one simultaneity to the next."""
    UNKNOWN = "unknown"
    STATIC = "static"
    REENTRY = "reentry"
    OBLIQUE = "oblique"
    CONTRARY = "contrary"
    PARALLEL = "parallel"
    SIMILAR_STEP = "similar_step"
    SIMILAR_SAME_TYPE = "similar_same_type"
    SIMILAR = "similar"


class ResultKind(Enum):
    CONSONANT = "consonant"
    DISSONANT = "dissonant"


@dataclass(frozen=True)
class MotionInfo:
    """Classified transition; intervals are signed semitones (0 if held)."""
    type: MotionType
    v1_moved: bool
    v2_moved: bool
    v1_interval: int = 0
    v2_interval: int = 0
    from_rest: bool = False
    is_reentry: bool = False

    def moved(self, voice: int) -> bool:
        return self.v1_moved if voice == 1 else self.v2_moved

    def interval(self, voice: int) -> int:
        return self.v1_interval if voice == 1 else self.v2_interval


@dataclass(frozen=True)
class RestPair:
    """Per-voice rest flags with the rest lengths in beats."""
    v1: bool = False
    v2: bool = False
    v1_duration: Real = 0
    v2_duration: Real = 0

    @property
    def any(self) -> bool:
        return self.v1 or self.v2

    def rested(self, voice: int) -> bool:
        return self.v1 if voice == 1 else self.v2

    def duration(self, voice: int) -> Real:
        return self.v1_duration if voice == 1 else self.v2_duration


@dataclass(frozen=True)
class RestContext:
    """Silences around one simultaneity."""
    entry_from_rest: RestPair = field(default_factory=RestPair)
    exit_to_rest: RestPair = field(default_factory=RestPair)
    v1_reentry: bool = False
    v2_reentry: bool = False
    resolved_by_abandonment: bool = False

    @property
    def is_reentry(self) -> bool:
        return self.v1_reentry or self.v2_reentry

    def reentry(self, voice: int) -> bool:
        return self.v1_reentry if voice == 1 else self.v2_reentry


NO_RESTS = RestContext()


@dataclass(frozen=True)
class VoiceResolution:
    """How one voice leaves a dissonance."""
    interval: int

    @property
    def size(self) -> int:
        return abs(self.interval)

    @property
    def direction(self) -> int:
        return direction(self.interval)

    @property
    def magnitude(self) -> Magnitude:
        return interval_magnitude(self.interval)


@dataclass(frozen=True)
class EntryResult:
    """Score of the approach into a dissonance."""
    score: float
    details: Tuple[str, ...] = ()
    motion: Optional[MotionInfo] = None
    v1_melodic_interval: int = 0
    v2_melodic_interval: int = 0

    def melodic_interval(self, voice: int) -> int:
        return self.v1_melodic_interval if voice == 1 else self.v2_melodic_interval


@dataclass(frozen=True)
class ExitResult:
    """Score of the departure from a dissonance.

    ``base`` is the successor-interval component alone.
    """
    score: float
    details: Tuple[str, ...] = ()
    base: float = 0.0
    motion: Optional[MotionInfo] = None
    v1_resolution: Optional[VoiceResolution] = None
    v2_resolution: Optional[VoiceResolution] = None
    leap_penalty: float = 0.0
    in_sequence: bool = False
    resolved: bool = False

    def resolution(self, voice: int) -> Optional[VoiceResolution]:
        return self.v1_resolution if voice == 1 else self.v2_resolution


@dataclass(frozen=True)
class PatternMatch:
    """A recognized contrapuntal idiom."""
    type: str
    bonus: float
    description: str
    voice: Optional[int] = None


@dataclass(frozen=True)
class ConsonantResult:
    onset: Real
    interval: str
    interval_class: int
    category: str
    score: float
    label: str
    details: Tuple[str, ...] = ()
    resolves_dissonance: bool = False
    is_preparation: bool = False
    repetition_count: int = 1
    kind: ResultKind = field(default=ResultKind.CONSONANT, init=False)

    @property
    def is_consonant(self) -> bool:
        return True


@dataclass(frozen=True)
class DissonantResult:
    onset: Real
    interval: str
    interval_class: int
    category: str
    score: float
    type: str
    label: str
    entry: EntryResult
    exit: ExitResult
    patterns: Tuple[PatternMatch, ...] = ()
    details: Tuple[str, ...] = ()
    description: str = ""
    v1_pitch: str = ""
    v2_pitch: str = ""
    is_strong_beat: bool = False
    kind: ResultKind = field(default=ResultKind.DISSONANT, init=False)

    @property
    def is_consonant(self) -> bool:
        return False


ScoreResult = Union[ConsonantResult, DissonantResult]
