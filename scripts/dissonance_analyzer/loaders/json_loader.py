"""Load a two-voice Passage from JSON.

Expected shape::

    {
      "meter": "3/4",
      "ticks_per_beat": 480,
      "voices": [
        {"name": "upper", "notes": [{"pitch": "C4", "onset": 0, "duration": 1}, ...]},
        {"name": "lower", "notes": [{"pitch": 55, "start_tick": 0, "duration": 480}, ...]}
      ],
      "sequence_beat_ranges": [[4, 8]],
      "sequence_note_ranges": [{"start": 3, "end": 7, "voice": 1}]
    }

``tracks`` is accepted in place of ``voices``.  Notes with ``onset`` are in
beats (ints, floats or "1/3" strings); notes with ``start_tick`` are in
ticks and their ``duration`` too.  Only the first two voices are read.
"""

from __future__ import annotations

import json
import logging
from fractions import Fraction
from pathlib import Path
from typing import List, Tuple, Union

from ..context import BeatRange, NoteRange, parse_meter
from ..model import NoteEvent, Passage, name_to_pitch

logger = logging.getLogger(__name__)

DEFAULT_TICKS_PER_BEAT = 480


def _beats(value) -> Fraction:
    if isinstance(value, (int, Fraction)):
        return Fraction(value)
    return Fraction(str(value))


def _parse_pitch(value) -> int:
    if isinstance(value, str):
        return name_to_pitch(value)
    return int(value)


def _parse_note(note_data: dict, ticks_per_beat: int) -> NoteEvent:
    """Parse a single note dict."""
    if "start_tick" in note_data:
        onset = Fraction(note_data["start_tick"], ticks_per_beat)
        duration = Fraction(note_data.get("duration", 0), ticks_per_beat)
    else:
        onset = _beats(note_data.get("onset", 0))
        duration = _beats(note_data.get("duration", 0))
    return NoteEvent(onset=onset, duration=duration,
                     pitch=_parse_pitch(note_data.get("pitch", 0)))


def _parse_meter(value) -> Tuple[int, int]:
    if value is None:
        return (4, 4)
    if isinstance(value, str):
        return parse_meter(value)
    if len(value) != 2:
        raise ValueError(f"invalid meter {value!r} (expected [numerator, denominator])")
    return parse_meter(f"{value[0]}/{value[1]}")


def _parse_beat_ranges(items) -> Tuple[BeatRange, ...]:
    ranges = []
    for item in items or []:
        if isinstance(item, dict):
            ranges.append(BeatRange(_beats(item["start"]), _beats(item["end"])))
        else:
            ranges.append(BeatRange(_beats(item[0]), _beats(item[1])))
    return tuple(ranges)


def _parse_note_ranges(items) -> Tuple[NoteRange, ...]:
    ranges = []
    for item in items or []:
        if isinstance(item, dict):
            ranges.append(NoteRange(int(item["start"]), int(item["end"]), item.get("voice")))
        else:
            ranges.append(NoteRange(int(item[0]), int(item[1])))
    return tuple(ranges)


def load_json(source: Union[str, Path, dict]) -> Passage:
    """Load a Passage from a JSON file or pre-parsed dict.

    Args:
        source: File path (str or Path) or already-parsed dict.

    Returns:
        A Passage with both voices sorted by onset.

    Raises:
        ValueError: fewer than two voices, or a malformed meter or pitch.
    """
    if isinstance(source, dict):
        data = source
    else:
        path = Path(source)
        with open(path) as fh:
            data = json.load(fh)

    ticks_per_beat = int(data.get("ticks_per_beat", DEFAULT_TICKS_PER_BEAT))
    voice_data = data.get("voices") or data.get("tracks") or []
    if len(voice_data) < 2:
        raise ValueError(f"expected two voices, found {len(voice_data)}")
    if len(voice_data) > 2:
        logger.warning("%d voices found, only the first two are analyzed", len(voice_data))

    names: List[str] = []
    voices: List[List[NoteEvent]] = []
    for idx, vd in enumerate(voice_data[:2]):
        names.append(vd.get("name", f"voice_{idx + 1}"))
        notes = [_parse_note(nd, ticks_per_beat) for nd in vd.get("notes", [])]
        voices.append(sorted(notes, key=lambda n: n.onset))

    source_file = None if isinstance(source, dict) else str(source)
    logger.info("loaded %d + %d notes from %s", len(voices[0]), len(voices[1]),
                source_file or "dict")

    return Passage(
        voice1=voices[0],
        voice2=voices[1],
        voice_names=(names[0], names[1]),
        meter=_parse_meter(data.get("meter")),
        sequence_beat_ranges=_parse_beat_ranges(data.get("sequence_beat_ranges")),
        sequence_note_ranges=_parse_note_ranges(data.get("sequence_note_ranges")),
        source_file=source_file,
    )
