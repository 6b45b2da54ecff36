"""Scoring components: motion, rests, entry, exit, patterns, consonance."""

from .base import (
    ConsonantResult,
    DissonantResult,
    EntryResult,
    ExitResult,
    MotionInfo,
    MotionType,
    PatternMatch,
    RestContext,
    RestPair,
    ResultKind,
    ScoreResult,
    VoiceResolution,
)
from .consonance import score_consonance
from .dissonance import score_dissonance, score_simultaneity
from .entry import score_entry
from .exit import leap_resolution_penalty, score_exit
from .history import IntervalHistory
from .motion import MOTION_RULES, classify_motion
from .patterns import PATTERN_RULES, find_patterns
from .rests import analyze_rests

__all__ = [
    "ConsonantResult",
    "DissonantResult",
    "EntryResult",
    "ExitResult",
    "IntervalHistory",
    "MOTION_RULES",
    "MotionInfo",
    "MotionType",
    "PATTERN_RULES",
    "PatternMatch",
    "RestContext",
    "RestPair",
    "ResultKind",
    "ScoreResult",
    "VoiceResolution",
    "analyze_rests",
    "classify_motion",
    "find_patterns",
    "leap_resolution_penalty",
    "score_consonance",
    "score_dissonance",
    "score_entry",
    "score_exit",
    "score_simultaneity",
]
