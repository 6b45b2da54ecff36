"""Load a two-voice Passage from a standard MIDI file using mido."""

from __future__ import annotations

import logging
from fractions import Fraction
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..model import NoteEvent, Passage

logger = logging.getLogger(__name__)

# Channel 10 (index 9) carries percussion in General MIDI.
_DRUM_CHANNEL = 9


def _channel_to_voice_name(channel: int) -> str:
    return f"ch_{channel}"


def load_midi(source: Union[str, Path]) -> Passage:
    """Load a Passage from a .mid file.

    Requires the ``mido`` package.  The two lowest-numbered channels that
    carry notes become voice 1 and voice 2; the meter comes from the first
    time_signature message (4/4 when there is none).

    Args:
        source: Path to a .mid file.

    Returns:
        A Passage with onsets and durations in beats.

    Raises:
        ValueError: fewer than two channels carry notes.
    """
    try:
        import mido
    except ImportError as exc:
        raise ImportError(
            "mido is required for MIDI loading. Install with: pip install mido"
        ) from exc

    mid = mido.MidiFile(str(source))
    ticks_per_beat = mid.ticks_per_beat

    channel_notes: Dict[int, List[NoteEvent]] = {}
    meter: Optional[Tuple[int, int]] = None

    for track in mid.tracks:
        abs_tick = 0
        pending: Dict[int, Dict[int, int]] = {}  # channel -> {note: start_tick}
        for msg in track:
            abs_tick += msg.time
            if msg.type == "time_signature":
                if meter is None:
                    meter = (msg.numerator, msg.denominator)
            elif msg.type == "note_on" and msg.velocity > 0:
                pending.setdefault(msg.channel, {})[msg.note] = abs_tick
            elif msg.type == "note_off" or (msg.type == "note_on" and msg.velocity == 0):
                start = pending.get(msg.channel, {}).pop(msg.note, None)
                if start is not None:
                    channel_notes.setdefault(msg.channel, []).append(NoteEvent(
                        onset=Fraction(start, ticks_per_beat),
                        duration=Fraction(abs_tick - start, ticks_per_beat),
                        pitch=msg.note,
                    ))

    channels = [ch for ch in sorted(channel_notes) if ch != _DRUM_CHANNEL]
    if len(channels) < 2:
        raise ValueError(f"expected two voices, found {len(channels)} channel(s) with notes")
    if len(channels) > 2:
        logger.warning("%d channels carry notes, only %s are analyzed",
                       len(channels), channels[:2])
    logger.info("loaded channels %d and %d from %s", channels[0], channels[1], source)

    first, second = channels[:2]
    return Passage(
        voice1=sorted(channel_notes[first], key=lambda n: n.onset),
        voice2=sorted(channel_notes[second], key=lambda n: n.onset),
        voice_names=(_channel_to_voice_name(first), _channel_to_voice_name(second)),
        meter=meter or (4, 4),
        source_file=str(source),
    )
