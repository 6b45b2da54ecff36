"""Single-file analysis orchestrator."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from .context import AnalysisContext, BeatRange
from .loaders import load_json, load_midi
from .metric import Meter
from .model import Passage
from .passage import PassageAnalysis, analyze_voices

logger = logging.getLogger(__name__)


def load_passage(path: Union[str, Path]) -> Passage:
    """Auto-detect format and load a Passage."""
    p = Path(path)
    if p.suffix.lower() in (".mid", ".midi"):
        return load_midi(p)
    return load_json(p)


def context_for(
    passage: Passage,
    meter: Optional[Meter] = None,
    sequence_beat_ranges: Optional[Iterable[BeatRange]] = None,
) -> AnalysisContext:
    """Build the context for a passage; explicit arguments override the file."""
    beat_ranges = tuple(passage.sequence_beat_ranges)
    if sequence_beat_ranges is not None:
        beat_ranges += tuple(sequence_beat_ranges)
    return AnalysisContext(
        meter=meter or passage.meter,
        sequence_beat_ranges=beat_ranges,
        sequence_note_ranges=tuple(passage.sequence_note_ranges),
    )


def analyze(passage: Passage, context: Optional[AnalysisContext] = None) -> PassageAnalysis:
    """Score a loaded passage."""
    if context is None:
        context = context_for(passage)
    logger.debug("analyzing %s in %d/%d", passage.source_file or "passage",
                 context.meter[0], context.meter[1])
    return analyze_voices(passage.voice1, passage.voice2, context)


def analyze_file(
    path: Union[str, Path],
    meter: Optional[Meter] = None,
    sequence_beat_ranges: Optional[Iterable[BeatRange]] = None,
) -> PassageAnalysis:
    """Load and score a JSON or MIDI file."""
    passage = load_passage(path)
    return analyze(passage, context_for(passage, meter, sequence_beat_ranges))


def overall_passed(analysis: PassageAnalysis) -> bool:
    """True if no dissonance scores below zero."""
    return analysis.summary.bad_dissonances == 0
