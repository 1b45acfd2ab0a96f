"""
Tests for run configuration, the spiral driver and JSONL run logging.
"""

import unittest
import contextlib
import importlib.util
import io
import json
import tempfile
import sys
import os
from pathlib import Path
from unittest import mock

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from spiral_rationals.runner import (
    SpiralConfig, config_from_dict, load_config, run_spiral, value_record,
)
from spiral_rationals.logging import SpiralLogger, RunManifest, create_manifest

DEFAULT_CONFIG = Path(__file__).resolve().parents[2] / "configs" / "spiral_default.yaml"
SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "generate_spiral.py"


def _read_jsonl(path):
    with open(path) as f:
        return [json.loads(line) for line in f if line.strip()]


class TestConfig(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def _write(self, text):
        path = self.dir / "config.yaml"
        path.write_text(text)
        return path

    def test_defaults(self):
        self.assertEqual(config_from_dict(None), SpiralConfig())
        self.assertEqual(config_from_dict({}).constructor, "fraction")

    def test_default_file(self):
        cfg = load_config(DEFAULT_CONFIG)
        self.assertEqual(cfg.count, 100)
        self.assertEqual(cfg.constructor, "fraction")

    def test_load_overrides(self):
        path = self._write(
            "spiral:\n"
            "  count: 12\n"
            "  constructor: extended\n"
            "  coverage_bound: 3\n"
        )
        cfg = load_config(path)
        self.assertEqual(cfg.count, 12)
        self.assertEqual(cfg.constructor, "extended")
        self.assertEqual(cfg.coverage_bound, 3)
        self.assertEqual(cfg.dps, SpiralConfig().dps)

    def test_empty_file(self):
        self.assertEqual(load_config(self._write("")), SpiralConfig())

    def test_top_level_not_mapping(self):
        with self.assertRaises(ValueError):
            load_config(self._write("- 1\n- 2\n"))

    def test_unknown_key(self):
        with self.assertRaises(ValueError) as ctx:
            config_from_dict({"count": 3, "depth": 10})
        self.assertIn("depth", str(ctx.exception))

    def test_invalid_values(self):
        for bad in [{"count": -1}, {"start_index": -2}, {"dps": 0},
                    {"metrics_every": 0}, {"count": "ten"},
                    {"constructor": "float"}, {"constructor": ["a"]},
                    {"constructor": None}, {"count": True},
                    {"dps": False}, {"coverage_bound": True}]:
            with self.assertRaises(ValueError, msg=str(bad)):
                config_from_dict(bad)

    def test_spiral_section_not_mapping(self):
        for data in [5, "count", [1, 2]]:
            with self.assertRaises(ValueError, msg=repr(data)):
                config_from_dict(data)
        with self.assertRaises(ValueError):
            load_config(self._write("spiral: 5\n"))

    def test_malformed_yaml(self):
        with self.assertRaises(ValueError) as ctx:
            load_config(self._write("spiral:\n  count: [1, 2\n"))
        self.assertIn("invalid YAML", str(ctx.exception))


def _load_script():
    spec = importlib.util.spec_from_file_location("generate_spiral", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestCommandLine(unittest.TestCase):
    """generate_spiral.py reports bad input as ERROR and exits 1."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.script = _load_script()

    def tearDown(self):
        self.tmp.cleanup()

    def _run(self, *argv):
        out = io.StringIO()
        with mock.patch.object(sys, "argv", ["generate_spiral.py", *argv]), \
                contextlib.redirect_stdout(out):
            try:
                self.script.main()
                code = 0
            except SystemExit as e:
                code = e.code
        return code, out.getvalue()

    def test_bad_configs_exit_with_error(self):
        bad_files = [
            "spiral: 5\n",
            "spiral:\n  constructor: [a]\n",
            "spiral:\n  count: [1, 2\n",
            "spiral:\n  count: true\n",
            "spiral:\n  depth: 3\n",
        ]
        for text in bad_files:
            path = self.dir / "bad.yaml"
            path.write_text(text)
            code, out = self._run("--config", str(path))
            self.assertEqual(code, 1, text)
            self.assertIn("ERROR:", out, text)

    def test_missing_config_file(self):
        code, out = self._run("--config", str(self.dir / "missing.yaml"))
        self.assertEqual(code, 1)
        self.assertIn("ERROR:", out)

    def test_bad_constructor_flag(self):
        code, out = self._run("--config", str(DEFAULT_CONFIG),
                              "--constructor", "decimal")
        self.assertEqual(code, 1)
        self.assertIn("ERROR:", out)

    def test_negative_index(self):
        code, out = self._run("--config", str(DEFAULT_CONFIG), "--index", "-1")
        self.assertEqual(code, 1)
        self.assertIn("Negative index", out)

    def test_index_lookup(self):
        code, out = self._run("--config", str(DEFAULT_CONFIG), "--index", "4")
        self.assertEqual(code, 0)
        self.assertIn("spiral[4] = 1/2", out)

    def test_run_writes_outputs(self):
        out_dir = self.dir / "run"
        code, out = self._run("--config", str(DEFAULT_CONFIG), "--count", "5",
                              "--output-dir", str(out_dir))
        self.assertEqual(code, 0)
        for name in ["manifest.json", "values.jsonl", "metrics.jsonl",
                     "summary.json"]:
            self.assertTrue((out_dir / name).exists(), name)
        self.assertEqual(len(_read_jsonl(out_dir / "values.jsonl")), 5)


class TestRunSpiral(unittest.TestCase):

    def test_counters(self):
        s = run_spiral(SpiralConfig(count=5))
        self.assertEqual(s["first"], "0")
        self.assertEqual(s["last"], "1/2")
        self.assertEqual(s["emitted"], 5)
        self.assertEqual(s["lattice_steps"], 11)
        self.assertEqual(s["skipped_zero"], 2)
        self.assertEqual(s["skipped_duplicate"], 4)
        self.assertNotIn("coverage", s)

    def test_start_index(self):
        s = run_spiral(SpiralConfig(count=3, start_index=2))
        self.assertEqual(s["first"], "-1")
        self.assertEqual(s["last"], "1/2")

    def test_zero_count(self):
        s = run_spiral(SpiralConfig(count=0))
        self.assertIsNone(s["first"])
        self.assertEqual(s["lattice_steps"], 0)

    def test_coverage(self):
        s = run_spiral(SpiralConfig(count=1, coverage_bound=2))
        self.assertEqual(s["coverage"]["steps_to_cover"], 7)

    def test_invalid_config(self):
        with self.assertRaises(ValueError):
            run_spiral(SpiralConfig(constructor="nope"))

    def test_value_record(self):
        from fractions import Fraction
        import sympy as sp

        for value in [Fraction(-1, 2), sp.Rational(-1, 2)]:
            rec = value_record(3, value, dps=10)
            self.assertEqual(rec["index"], 3)
            self.assertEqual(rec["numerator"], -1)
            self.assertEqual(rec["denominator"], 2)
            self.assertEqual(rec["value"], "-1/2")
            self.assertEqual(rec["value_float"], -0.5)


class TestLogging(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_run_writes_jsonl(self):
        cfg = SpiralConfig(count=5, metrics_every=2, constructor="extended")
        with SpiralLogger(self.dir) as logger:
            run_spiral(cfg, logger)
            self.assertEqual(logger.summary,
                             {"values_logged": 5, "metrics_logged": 3})

        values = _read_jsonl(self.dir / "values.jsonl")
        self.assertEqual([v["index"] for v in values], [0, 1, 2, 3, 4])
        self.assertEqual(values[0]["numerator"], 0)
        self.assertEqual(values[0]["denominator"], 1)
        self.assertEqual(values[3]["value"], "-1/2")
        self.assertEqual(values[3]["value_float"], -0.5)

        metrics = _read_jsonl(self.dir / "metrics.jsonl")
        self.assertEqual(len(metrics), 3)
        self.assertEqual([m["emitted"] for m in metrics], [2, 4, 5])
        self.assertTrue(metrics[-1]["final"])
        self.assertEqual(metrics[-1]["lattice_steps"], 11)
        self.assertEqual(metrics[-1]["direction"], "E")
        self.assertIn("timestamp", metrics[0])

    def test_append_mode(self):
        for _ in range(2):
            with SpiralLogger(self.dir) as logger:
                run_spiral(SpiralConfig(count=3), logger)
        self.assertEqual(len(_read_jsonl(self.dir / "values.jsonl")), 6)

    def test_close_twice(self):
        logger = SpiralLogger(self.dir)
        logger.close()
        logger.close()

    def test_manifest(self):
        config = SpiralConfig(count=7).to_dict()
        m = create_manifest("run_test", config)
        self.assertIsInstance(m, RunManifest)
        self.assertEqual(m.config, config)
        self.assertEqual(m.config_hash,
                         create_manifest("other", dict(config)).config_hash)
        self.assertTrue(m.git_commit)

        path = self.dir / "nested" / "manifest.json"
        m.save(path)
        with open(path) as f:
            data = json.load(f)
        self.assertEqual(data["run_id"], "run_test")
        self.assertEqual(data["config"]["count"], 7)


if __name__ == "__main__":
    unittest.main()
