"""Note, interval and simultaneity model for two-voice dissonance scoring.

Times are beat positions in quarter-note units.  Loaders produce exact
``fractions.Fraction`` values; plain ints and floats work as well.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from numbers import Real
from typing import Dict, List, Optional, Tuple

# ---------------------------------------------------------------------------
# Interval constants (semitones mod 12)
# ---------------------------------------------------------------------------

UNISON = 0
MINOR_2ND = 1
MAJOR_2ND = 2
MINOR_3RD = 3
MAJOR_3RD = 4
PERFECT_4TH = 5
TRITONE = 6
PERFECT_5TH = 7
MINOR_6TH = 8
MAJOR_6TH = 9
MINOR_7TH = 10
MAJOR_7TH = 11
OCTAVE = 12

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# semitones mod 12 -> (diatonic-like class, quality)
_INTERVAL_TABLE: Dict[int, Tuple[int, str]] = {
    UNISON: (1, "perfect"),
    MINOR_2ND: (2, "minor"),
    MAJOR_2ND: (2, "major"),
    MINOR_3RD: (3, "minor"),
    MAJOR_3RD: (3, "major"),
    PERFECT_4TH: (4, "perfect"),
    TRITONE: (4, "augmented"),
    PERFECT_5TH: (5, "perfect"),
    MINOR_6TH: (6, "minor"),
    MAJOR_6TH: (6, "major"),
    MINOR_7TH: (7, "minor"),
    MAJOR_7TH: (7, "major"),
}

_QUALITY_ABBR = {"perfect": "P", "major": "M", "minor": "m", "augmented": "A", "diminished": "d"}

CONSONANT_CLASSES = frozenset({1, 3, 5, 6, 8})
PERFECT_CLASSES = frozenset({1, 5, 8})
IMPERFECT_CLASSES = frozenset({3, 6})


# ---------------------------------------------------------------------------
# Melodic magnitude
# ---------------------------------------------------------------------------


class Magnitude(Enum):
    """Size category of a melodic interval."""
    UNISON = "unison"
    STEP = "step"
    SKIP = "skip"
    PERFECT_LEAP = "perfect_leap"
    OCTAVE = "octave"
    LARGE_LEAP = "large_leap"


LEAP_MAGNITUDES = frozenset({Magnitude.SKIP, Magnitude.PERFECT_LEAP,
                             Magnitude.OCTAVE, Magnitude.LARGE_LEAP})
WIDE_LEAP_MAGNITUDES = frozenset({Magnitude.LARGE_LEAP, Magnitude.OCTAVE})


def interval_magnitude(semitones: int) -> Magnitude:
    """Classify a melodic interval (sign ignored) by size."""
    size = abs(semitones)
    if size == 0:
        return Magnitude.UNISON
    if size <= 2:
        return Magnitude.STEP
    if size <= 4:
        return Magnitude.SKIP
    if size in (5, 7):
        return Magnitude.PERFECT_LEAP
    if size == 12:
        return Magnitude.OCTAVE
    return Magnitude.LARGE_LEAP


def is_step(semitones: int) -> bool:
    """True for a melodic motion of one or two semitones."""
    return interval_magnitude(semitones) == Magnitude.STEP


def direction(semitones: int) -> int:
    """Sign of a melodic interval: -1, 0 or +1."""
    return (semitones > 0) - (semitones < 0)


def pitch_to_name(pitch: int) -> str:
    """Convert MIDI pitch to note name with octave (e.g., 'C4')."""
    return f"{NOTE_NAMES[pitch % 12]}{pitch // 12 - 1}"


# ---------------------------------------------------------------------------
# NoteEvent / Interval / Simultaneity
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NoteEvent:
    """A single note of one voice.

    ``index`` is the note's position within its voice; it is only needed for
    note-index sequence ranges.
    """
    onset: Real
    duration: Real
    pitch: int
    index: Optional[int] = None

    @property
    def end(self) -> Real:
        return self.onset + self.duration

    @property
    def name(self) -> str:
        return pitch_to_name(self.pitch)


@dataclass(frozen=True)
class Interval:
    """Harmonic interval between two pitches, reduced to one octave."""
    semitones: int
    interval_class: int
    quality: str

    @classmethod
    def between(cls, pitch_a: int, pitch_b: int) -> "Interval":
        semis = abs(pitch_a - pitch_b) % 12
        ic, quality = _INTERVAL_TABLE[semis]
        return cls(semitones=semis, interval_class=ic, quality=quality)

    @property
    def is_consonant(self) -> bool:
        return (self.interval_class in CONSONANT_CLASSES
                and self.quality not in ("augmented", "diminished"))

    @property
    def is_perfect_consonance(self) -> bool:
        return self.is_consonant and self.interval_class in PERFECT_CLASSES

    @property
    def is_imperfect_consonance(self) -> bool:
        return self.interval_class in IMPERFECT_CLASSES

    @property
    def is_perfect_fourth(self) -> bool:
        return self.semitones == PERFECT_4TH

    @property
    def name(self) -> str:
        return f"{_QUALITY_ABBR[self.quality]}{self.interval_class}"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Simultaneity:
    """One note of each voice sounding together."""
    onset: Real
    voice1_note: NoteEvent
    voice2_note: NoteEvent
    interval: Interval
    metric_weight: float

    @classmethod
    def of(cls, onset: Real, voice1_note: NoteEvent, voice2_note: NoteEvent,
           metric_weight: float) -> "Simultaneity":
        return cls(
            onset=onset,
            voice1_note=voice1_note,
            voice2_note=voice2_note,
            interval=Interval.between(voice1_note.pitch, voice2_note.pitch),
            metric_weight=metric_weight,
        )

    def note(self, voice: int) -> NoteEvent:
        """Note of voice 1 or voice 2."""
        return self.voice1_note if voice == 1 else self.voice2_note

    @property
    def shortest_duration(self) -> Real:
        return min(self.voice1_note.duration, self.voice2_note.duration)

    @property
    def pitch_names(self) -> Tuple[str, str]:
        return self.voice1_note.name, self.voice2_note.name


_NAME_OFFSETS = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}
_ACCIDENTALS = {"#": 1, "b": -1}


def name_to_pitch(name: str) -> int:
    """Convert a note name like 'C#4' or 'Bb3' to a MIDI pitch."""
    text = name.strip()
    if not text or text[0].upper() not in _NAME_OFFSETS:
        raise ValueError(f"invalid note name '{name}'")
    pitch = _NAME_OFFSETS[text[0].upper()]
    rest = text[1:]
    while rest and rest[0] in _ACCIDENTALS:
        pitch += _ACCIDENTALS[rest[0]]
        rest = rest[1:]
    try:
        octave = int(rest)
    except ValueError as exc:
        raise ValueError(f"invalid note name '{name}'") from exc
    return pitch + (octave + 1) * 12


# ---------------------------------------------------------------------------
# Passage
# ---------------------------------------------------------------------------


@dataclass
class Passage:
    """Two voices loaded from a file, with the settings stored alongside them."""
    voice1: List[NoteEvent]
    voice2: List[NoteEvent]
    voice_names: Tuple[str, str] = ("voice_1", "voice_2")
    meter: Tuple[int, int] = (4, 4)
    sequence_beat_ranges: Tuple = ()
    sequence_note_ranges: Tuple = ()
    source_file: Optional[str] = None

    @property
    def voices(self) -> Tuple[List[NoteEvent], List[NoteEvent]]:
        return self.voice1, self.voice2

    @property
    def total_notes(self) -> int:
        return len(self.voice1) + len(self.voice2)

    def swapped(self) -> "Passage":
        """The same passage with voice 1 and voice 2 exchanged."""
        return Passage(
            voice1=self.voice2,
            voice2=self.voice1,
            voice_names=(self.voice_names[1], self.voice_names[0]),
            meter=self.meter,
            sequence_beat_ranges=self.sequence_beat_ranges,
            sequence_note_ranges=tuple(
                replace(r, voice=3 - r.voice) if r.voice else r
                for r in self.sequence_note_ranges
            ),
            source_file=self.source_file,
        )
