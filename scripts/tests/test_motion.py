"""Tests for motion classification."""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from scripts.dissonance_analyzer.model import NoteEvent, Simultaneity
from scripts.dissonance_analyzer.scoring.base import MotionType, RestContext
from scripts.dissonance_analyzer.scoring.motion import (
    MOTION_RULES,
    Transition,
    classify_motion,
    match_motion_rule,
)
from scripts.dissonance_analyzer.scoring.rests import analyze_rests


def _n(pitch, onset, dur=1):
    return NoteEvent(onset=onset, duration=dur, pitch=pitch)


def _sim(onset, n1, n2, weight=0.5):
    return Simultaneity.of(onset, n1, n2, weight)


def _pair(p1, p2, q1, q2):
    """Two consecutive simultaneities with every note re-attacked."""
    return (_sim(0, _n(p1, 0), _n(p2, 0)), _sim(1, _n(q1, 1), _n(q2, 1)))


class TestClassifyMotion(unittest.TestCase):
    def test_no_predecessor(self):
        curr = _sim(0, _n(60, 0), _n(64, 0))
        motion = classify_motion(None, curr)
        self.assertEqual(motion.type, MotionType.UNKNOWN)
        self.assertTrue(motion.v1_moved)
        self.assertTrue(motion.v2_moved)

    def test_static(self):
        motion = classify_motion(*_pair(60, 64, 60, 64))
        self.assertEqual(motion.type, MotionType.STATIC)
        self.assertFalse(motion.v1_moved)
        self.assertFalse(motion.v2_moved)

    def test_held_note_is_static_voice(self):
        held = _n(60, 0, dur=2)
        prev = _sim(0, held, _n(67, 0))
        curr = _sim(1, held, _n(61, 1))
        motion = classify_motion(prev, curr)
        self.assertEqual(motion.type, MotionType.OBLIQUE)
        self.assertFalse(motion.v1_moved)
        self.assertEqual(motion.v2_interval, -6)

    def test_oblique(self):
        motion = classify_motion(*_pair(60, 64, 60, 65))
        self.assertEqual(motion.type, MotionType.OBLIQUE)
        self.assertEqual(motion.v1_interval, 0)
        self.assertEqual(motion.v2_interval, 1)

    def test_contrary(self):
        motion = classify_motion(*_pair(60, 64, 62, 60))
        self.assertEqual(motion.type, MotionType.CONTRARY)

    def test_parallel_by_semitone(self):
        """Equal same-direction motion is parallel even at one semitone."""
        motion = classify_motion(*_pair(60, 64, 61, 65))
        self.assertEqual(motion.type, MotionType.PARALLEL)

    def test_parallel_by_whole_step(self):
        motion = classify_motion(*_pair(60, 67, 58, 65))
        self.assertEqual(motion.type, MotionType.PARALLEL)

    def test_similar_step(self):
        motion = classify_motion(*_pair(60, 64, 62, 68))
        self.assertEqual(motion.type, MotionType.SIMILAR_STEP)

    def test_similar_same_type(self):
        motion = classify_motion(*_pair(60, 64, 63, 68))
        self.assertEqual(motion.type, MotionType.SIMILAR_SAME_TYPE)

    def test_similar(self):
        motion = classify_motion(*_pair(60, 64, 63, 71))
        self.assertEqual(motion.type, MotionType.SIMILAR)

    def test_reentry_overrides_static(self):
        prev, curr = _pair(60, 64, 60, 64)
        motion = classify_motion(prev, curr, RestContext(v1_reentry=True))
        self.assertEqual(motion.type, MotionType.REENTRY)
        self.assertTrue(motion.is_reentry)

    def test_from_rest_flag(self):
        prev = _sim(0, _n(60, 0, dur=0.5), _n(64, 0, dur=0.5))
        curr = _sim(1, _n(62, 1), _n(65, 1))
        motion = classify_motion(prev, curr, analyze_rests(prev, curr))
        self.assertTrue(motion.from_rest)
        self.assertFalse(motion.is_reentry)

    def test_voice_swap_symmetry(self):
        """Swapping voices keeps the motion type and swaps the per-voice data."""
        cases = [(60, 64, 60, 65), (60, 64, 62, 60), (60, 64, 61, 65),
                 (60, 64, 62, 68), (60, 64, 63, 68), (60, 64, 63, 71)]
        for p1, p2, q1, q2 in cases:
            forward = classify_motion(*_pair(p1, p2, q1, q2))
            swapped = classify_motion(*_pair(p2, p1, q2, q1))
            self.assertEqual(forward.type, swapped.type, (p1, p2, q1, q2))
            self.assertEqual(forward.v1_moved, swapped.v2_moved)
            self.assertEqual(forward.v1_interval, swapped.v2_interval)


class TestMotionRules(unittest.TestCase):
    def test_reentry_first(self):
        self.assertEqual(MOTION_RULES[0][0], MotionType.REENTRY)

    def test_parallel_before_step(self):
        order = [motion_type for motion_type, _ in MOTION_RULES]
        self.assertLess(order.index(MotionType.PARALLEL), order.index(MotionType.SIMILAR_STEP))

    def test_match_rule_directly(self):
        t = Transition(v1_moved=True, v2_moved=True, v1_interval=-2, v2_interval=-2)
        self.assertEqual(match_motion_rule(t), MotionType.PARALLEL)
        t = Transition(v1_moved=True, v2_moved=True, v1_interval=5, v2_interval=7)
        self.assertEqual(match_motion_rule(t), MotionType.SIMILAR_SAME_TYPE)


if __name__ == "__main__":
    unittest.main()
