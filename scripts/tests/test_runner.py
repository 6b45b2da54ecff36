"""Tests for the runner module and the CLI."""

import contextlib
import io
import json
import sys
import tempfile
import unittest
from fractions import Fraction
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from scripts.dissonance_analyzer.__main__ import main
from scripts.dissonance_analyzer.context import BeatRange, NoteRange
from scripts.dissonance_analyzer.runner import (
    analyze,
    analyze_file,
    context_for,
    load_passage,
    overall_passed,
)

FIXTURES = Path(__file__).parent / "fixtures"


class TestRunner(unittest.TestCase):
    def test_load_passage_json(self):
        passage = load_passage(FIXTURES / "scenario_a.json")
        self.assertEqual(len(passage.voice1), 3)
        self.assertEqual(passage.total_notes, 6)

    def test_context_from_file(self):
        passage = load_passage(FIXTURES / "consonant_ticks.json")
        context = context_for(passage)
        self.assertEqual(context.meter, (3, 4))
        self.assertEqual(context.sequence_beat_ranges, (BeatRange(0, 1),))
        self.assertEqual(context.sequence_note_ranges, (NoteRange(0, 1, 1),))

    def test_context_overrides(self):
        passage = load_passage(FIXTURES / "consonant_ticks.json")
        context = context_for(passage, meter=(6, 8),
                              sequence_beat_ranges=[BeatRange(Fraction(4), Fraction(8))])
        self.assertEqual(context.meter, (6, 8))
        self.assertEqual(len(context.sequence_beat_ranges), 2)

    def test_analyze_uses_passage_meter(self):
        analysis = analyze(load_passage(FIXTURES / "consonant_ticks.json"))
        self.assertEqual(analysis.context.meter, (3, 4))

    def test_analyze_file(self):
        analysis = analyze_file(FIXTURES / "scenario_a.json")
        self.assertEqual(analysis.summary.total, 3)
        self.assertEqual(analysis.summary.dissonances, 2)

    def test_overall_passed(self):
        self.assertFalse(overall_passed(analyze_file(FIXTURES / "scenario_a.json")))
        self.assertTrue(overall_passed(analyze_file(FIXTURES / "consonant_ticks.json")))


class TestCli(unittest.TestCase):
    def _run(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_score_failing(self):
        code, out, _ = self._run(["score", str(FIXTURES / "scenario_a.json")])
        self.assertEqual(code, 1)
        self.assertIn("scenario_a.json", out)
        self.assertIn("OVERALL: FAIL", out)

    def test_score_passing(self):
        code, out, _ = self._run(["score", str(FIXTURES / "consonant_ticks.json")])
        self.assertEqual(code, 0)
        self.assertIn("OVERALL: PASS", out)

    def test_score_json(self):
        code, out, _ = self._run(["score", str(FIXTURES / "scenario_a.json"), "--json"])
        self.assertEqual(code, 1)
        self.assertEqual(len(json.loads(out)["results"]), 3)

    def test_meter_override(self):
        code, out, _ = self._run(["score", str(FIXTURES / "scenario_a.json"), "--meter", "3/4"])
        self.assertIn("3/4", out)

    def test_summary_to_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "summary.json"
            code, out, _ = self._run(["summary", str(FIXTURES / "consonant_ticks.json"),
                                      "--json", "-o", str(path)])
            self.assertEqual(code, 0)
            self.assertEqual(out, "")
            data = json.loads(path.read_text())
        self.assertEqual(data["summary"]["total"], 3)
        self.assertNotIn("results", data)

    def test_sequence_option(self):
        code, _, _ = self._run(["summary", str(FIXTURES / "scenario_a.json"),
                                "--sequence", "0-2", "--sequence", "4-8"])
        self.assertEqual(code, 1)

    def test_bad_sequence_range(self):
        code, _, err = self._run(["summary", str(FIXTURES / "scenario_a.json"),
                                  "--sequence", "4"])
        self.assertEqual(code, 1)
        self.assertIn("Error:", err)

    def test_missing_file(self):
        code, _, err = self._run(["score", str(FIXTURES / "nope.json")])
        self.assertEqual(code, 1)
        self.assertIn("Error:", err)

    def test_bad_meter(self):
        code, _, err = self._run(["score", str(FIXTURES / "scenario_a.json"), "--meter", "x"])
        self.assertEqual(code, 1)
        self.assertIn("invalid meter", err)

    def test_no_command_prints_help(self):
        code, out, _ = self._run([])
        self.assertEqual(code, 0)
        self.assertIn("dissonance-analyzer", out)


if __name__ == "__main__":
    unittest.main()
