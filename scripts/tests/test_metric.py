"""Tests for metric weights and beat labels."""

import sys
import unittest
from fractions import Fraction
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from scripts.dissonance_analyzer.metric import (
    METER_PROFILES,
    beat_label,
    get_meter_profile,
    is_compound,
    is_strong_beat,
    metric_weight,
    short_note_threshold,
    subdivision,
)


class TestMetricWeight(unittest.TestCase):
    def test_downbeats(self):
        self.assertEqual(metric_weight(0), 1.0)
        self.assertEqual(metric_weight(4), 1.0)
        self.assertEqual(metric_weight(3, (3, 4)), 1.0)

    def test_common_time(self):
        self.assertEqual(metric_weight(1), 0.5)
        self.assertEqual(metric_weight(2), 0.75)
        self.assertEqual(metric_weight(3), 0.5)
        self.assertEqual(metric_weight(Fraction(1, 2)), 0.35)
        self.assertEqual(metric_weight(Fraction(1, 4)), 0.25)

    def test_triple_time(self):
        self.assertEqual(metric_weight(1, (3, 4)), 0.5)
        self.assertEqual(metric_weight(2, (3, 4)), 0.5)
        self.assertFalse(is_strong_beat(metric_weight(2, (3, 4))))

    def test_compound_time(self):
        # 6/8: the second dotted-quarter beat falls at 1.5 quarters.
        self.assertEqual(metric_weight(Fraction(3, 2), (6, 8)), 0.75)
        self.assertEqual(metric_weight(Fraction(1, 2), (6, 8)), 0.3)
        self.assertEqual(metric_weight(3, (6, 8)), 1.0)

    def test_cut_time(self):
        self.assertEqual(metric_weight(2, (2, 2)), 0.5)
        self.assertEqual(metric_weight(4, (2, 2)), 1.0)

    def test_strong_threshold(self):
        self.assertTrue(is_strong_beat(0.75))
        self.assertFalse(is_strong_beat(0.7))


class TestMeterHelpers(unittest.TestCase):
    def test_is_compound(self):
        self.assertTrue(is_compound((6, 8)))
        self.assertTrue(is_compound((12, 8)))
        self.assertFalse(is_compound((3, 4)))
        self.assertFalse(is_compound((6, 4)))

    def test_short_note_threshold(self):
        self.assertEqual(short_note_threshold((4, 4)), Fraction(1, 6))
        self.assertEqual(short_note_threshold((6, 8)), Fraction(1, 9))

    def test_subdivision_from_profile(self):
        self.assertEqual(subdivision((9, 8)), Fraction(1, 3))
        self.assertEqual(subdivision((2, 2)), Fraction(1, 2))
        self.assertEqual(short_note_threshold((6, 8)), get_meter_profile((6, 8)).short_note_threshold)

    def test_beat_label(self):
        self.assertEqual(beat_label(0), "bar 1 beat 1")
        self.assertEqual(beat_label(5), "bar 2 beat 2")
        self.assertEqual(beat_label(Fraction(3, 2)), "bar 1 beat 2+0.50")
        self.assertEqual(beat_label(3, (3, 4)), "bar 2 beat 1")


class TestMeterProfiles(unittest.TestCase):
    def test_profiles(self):
        self.assertTrue(get_meter_profile((6, 8)).is_compound)
        self.assertEqual(get_meter_profile((6, 8)).beats_per_measure, 2)
        self.assertEqual(get_meter_profile((3, 4)).beats_per_measure, 3)
        self.assertIn("12/8", METER_PROFILES)

    def test_unknown_meter_falls_back(self):
        profile = get_meter_profile((7, 8))
        self.assertEqual(profile.name, "7/8")
        self.assertFalse(profile.is_compound)
        self.assertEqual(profile.beats_per_measure, 7)

    def test_compound_weights_follow_profile(self):
        # 12/8 has four main beats; the third is the secondary accent.
        self.assertEqual(metric_weight(3, (12, 8)), 0.75)
        self.assertEqual(metric_weight(Fraction(3, 2), (12, 8)), 0.6)


if __name__ == "__main__":
    unittest.main()
