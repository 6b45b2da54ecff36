"""Two-voice counterpoint dissonance scoring.

Usage:
    python -m scripts.dissonance_analyzer score passage.json
    python -m scripts.dissonance_analyzer score passage.mid --meter 3/4 --sequence 4-8
    python -m scripts.dissonance_analyzer summary passage.json --json
"""

from .context import AnalysisContext, BeatRange, NoteRange
from .model import Interval, NoteEvent, Passage, Simultaneity
from .passage import PassageAnalysis, PassageSummary, analyze_passage, analyze_voices
from .runner import analyze_file, load_passage
from .simultaneity import find_simultaneities

__all__ = [
    "AnalysisContext",
    "BeatRange",
    "Interval",
    "NoteEvent",
    "NoteRange",
    "Passage",
    "PassageAnalysis",
    "PassageSummary",
    "Simultaneity",
    "analyze_file",
    "analyze_passage",
    "analyze_voices",
    "find_simultaneities",
    "load_passage",
]
