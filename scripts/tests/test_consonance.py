"""Tests for consonance scoring and the interval history."""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from scripts.dissonance_analyzer.context import AnalysisContext
from scripts.dissonance_analyzer.model import NoteEvent, Simultaneity
from scripts.dissonance_analyzer.scoring.consonance import consonance_label, score_consonance
from scripts.dissonance_analyzer.scoring.history import IntervalHistory

CTX = AnalysisContext()


def _sim(onset, p1, p2, weight=0.5):
    return Simultaneity.of(onset, NoteEvent(onset, 1, p1), NoteEvent(onset, 1, p2), weight)


class TestIntervalHistory(unittest.TestCase):
    def test_run_length(self):
        history = IntervalHistory([3, 5, 5])
        self.assertEqual(history.run_length(5), 2)
        self.assertEqual(history.run_length(3), 0)

    def test_rest_sentinel_breaks_run(self):
        history = IntervalHistory([5, 5])
        history.mark_rest()
        self.assertEqual(history.run_length(5), 0)
        history.append(5)
        self.assertEqual(history.run_length(5), 1)
        self.assertEqual(list(history), [5, 5, None, 5])

    def test_copy_is_independent(self):
        history = IntervalHistory([1])
        clone = history.copy()
        clone.append(1)
        self.assertEqual(len(history), 1)
        self.assertEqual(len(clone), 2)


class TestRepetition(unittest.TestCase):
    def test_first_and_second_perfect_fifth_free(self):
        fifth = _sim(0, 60, 67)
        self.assertEqual(score_consonance(None, fifth, None, IntervalHistory(), CTX).score, 0)
        self.assertEqual(score_consonance(None, fifth, None, IntervalHistory([5]), CTX).score, 0)

    def test_third_perfect_fifth_penalized(self):
        result = score_consonance(None, _sim(0, 60, 67), None, IntervalHistory([5, 5]), CTX)
        self.assertEqual(result.score, -0.5)
        self.assertEqual(result.category, "consonant_repetitive")
        self.assertEqual(result.repetition_count, 3)

    def test_every_later_repeat_penalized_equally(self):
        result = score_consonance(None, _sim(0, 60, 72), None, IntervalHistory([1] * 6), CTX)
        self.assertEqual(result.score, -0.5)

    def test_sentinel_resets_count(self):
        result = score_consonance(None, _sim(0, 60, 67), None, IntervalHistory([5, 5, None]), CTX)
        self.assertEqual(result.score, 0)
        self.assertEqual(result.repetition_count, 1)

    def test_thirds_from_fourth_occurrence(self):
        third = _sim(0, 60, 64)
        self.assertEqual(score_consonance(None, third, None, IntervalHistory([3, 3]), CTX).score, 0)
        self.assertEqual(score_consonance(None, third, None, IntervalHistory([3, 3, 3]), CTX).score, -0.3)

    def test_sixths(self):
        result = score_consonance(None, _sim(0, 60, 69), None, IntervalHistory([6, 6, 6, 6]), CTX)
        self.assertEqual(result.score, -0.3)
        self.assertEqual(result.repetition_count, 5)


class TestResolutionAndPreparation(unittest.TestCase):
    def test_stepwise_resolution(self):
        prev = _sim(0, 60, 62)
        curr = _sim(1, 59, 62)
        result = score_consonance(prev, curr, None, IntervalHistory([2]), CTX)
        self.assertEqual(result.category, "consonant_good_resolution")
        self.assertEqual(result.score, 0)
        self.assertTrue(result.resolves_dissonance)

    def test_leaping_resolution(self):
        prev = _sim(0, 60, 62)
        curr = _sim(1, 55, 62)
        result = score_consonance(prev, curr, None, IntervalHistory([2]), CTX)
        self.assertEqual(result.category, "consonant_bad_resolution")
        self.assertEqual(result.score, 0)

    def test_leap_in_second_voice(self):
        prev = _sim(0, 60, 61)
        curr = _sim(1, 60, 67)
        result = score_consonance(prev, curr, None, IntervalHistory([2]), CTX)
        self.assertEqual(result.category, "consonant_bad_resolution")
        self.assertIn("V2 resolved by leap", result.details)

    def test_preparation(self):
        curr = _sim(0, 60, 67)
        nxt = _sim(1, 60, 61)
        result = score_consonance(None, curr, nxt, IntervalHistory(), CTX)
        self.assertTrue(result.is_preparation)
        self.assertEqual(result.score, 0)
        self.assertEqual(result.category, "consonant_normal")

    def test_resolution_is_not_preparation(self):
        prev = _sim(0, 60, 62)
        curr = _sim(1, 59, 62)
        nxt = _sim(2, 59, 61)
        result = score_consonance(prev, curr, nxt, IntervalHistory([2]), CTX)
        self.assertFalse(result.is_preparation)

    def test_perfect_fourth_neighbor_counts_as_dissonance(self):
        result = score_consonance(None, _sim(0, 60, 67), _sim(1, 60, 65), IntervalHistory(), CTX)
        self.assertTrue(result.is_preparation)


class TestLabels(unittest.TestCase):
    def test_labels(self):
        self.assertEqual(consonance_label(1), "U")
        self.assertEqual(consonance_label(5), "5")
        result = score_consonance(None, _sim(0, 60, 64), None, IntervalHistory(), CTX)
        self.assertEqual(result.label, "3")
        self.assertTrue(result.is_consonant)
        self.assertEqual(result.kind.value, "consonant")


if __name__ == "__main__":
    unittest.main()
