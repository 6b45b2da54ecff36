"""Tests for report generation."""

import json
import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from scripts.dissonance_analyzer.report import (
    analysis_to_dict,
    format_json,
    format_summary_text,
    format_text,
)
from scripts.dissonance_analyzer.runner import analyze_file

FIXTURES = Path(__file__).parent / "fixtures"


class TestTextReport(unittest.TestCase):
    def setUp(self):
        self.analysis = analyze_file(FIXTURES / "scenario_a.json")

    def test_text_contains_header(self):
        text = format_text(self.analysis, title="scenario_a.json")
        self.assertIn("=== Dissonance analysis: scenario_a.json, 4/4 ===", text)

    def test_default_title(self):
        self.assertIn("Dissonance analysis: passage", format_text(self.analysis))

    def test_text_lists_dissonances(self):
        text = format_text(self.analysis)
        self.assertIn("[MARGINAL]", text)
        self.assertIn("[BAD]", text)
        self.assertIn("bar 1 beat 2", text)
        self.assertIn("m2: C4 vs C#4", text)

    def test_text_contains_summary(self):
        text = format_text(self.analysis)
        self.assertIn("Summary:", text)
        self.assertIn("Average score:", text)
        self.assertIn("Consecutive dissonances: 2 from 1 to 2", text)
        self.assertIn("OVERALL: FAIL", text)

    def test_verbose_shows_details(self):
        quiet = format_text(self.analysis)
        verbose = format_text(self.analysis, verbose=True)
        self.assertNotIn("Total: ", quiet)
        self.assertIn("Total: ", verbose)

    def test_summary_text(self):
        text = format_summary_text(self.analysis)
        self.assertTrue(text.startswith("Summary:"))
        self.assertNotIn("===", text)

    def test_passing_passage(self):
        analysis = analyze_file(FIXTURES / "consonant_ticks.json")
        text = format_text(analysis)
        self.assertIn("3/4", text)
        self.assertIn("OVERALL: PASS", text)


class TestJsonReport(unittest.TestCase):
    def setUp(self):
        self.analysis = analyze_file(FIXTURES / "scenario_a.json")

    def test_json_parseable(self):
        data = json.loads(format_json(self.analysis))
        self.assertEqual(data["meter"], [4, 4])
        self.assertEqual(len(data["results"]), 3)

    def test_json_results(self):
        data = json.loads(format_json(self.analysis))
        first, second = data["results"][0], data["results"][1]
        self.assertEqual(first["kind"], "consonant")
        self.assertEqual(second["kind"], "dissonant")
        self.assertEqual(second["onset"], 1.0)
        self.assertEqual(second["type"], "anticipation")
        self.assertEqual(second["entry"]["motion"]["type"], "oblique")
        self.assertEqual(second["score"], -0.25)

    def test_json_summary(self):
        summary = json.loads(format_json(self.analysis))["summary"]
        self.assertEqual(summary["average_score"], -0.625)
        self.assertEqual(summary["bad_dissonances"], 2)
        self.assertEqual(summary["dissonance_groups"][0]["onsets"], [1.0, 2.0])
        self.assertEqual(summary["type_counts"], {"anticipation": 1, "unprepared": 1})

    def test_summary_only(self):
        data = json.loads(format_json(self.analysis, summary_only=True))
        self.assertEqual(set(data), {"meter", "summary"})

    def test_dict_keeps_python_values(self):
        data = analysis_to_dict(self.analysis)
        self.assertEqual(data["results"][1]["onset"], 1)


if __name__ == "__main__":
    unittest.main()
