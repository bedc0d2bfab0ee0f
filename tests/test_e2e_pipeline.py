"""Integration tests for the run pipeline and the run_delta.py entry point."""

import json
import subprocess
import sys
from pathlib import Path

import pytest

from dyngraph.config import DeltaConfig, GraphSourceConfig, RunConfig
from dyngraph.config.serialization import config_to_json
from dyngraph.delta import DeltaGenerator
from dyngraph.pipeline import build_initial_graph, run_pipeline, run_rounds
from dyngraph.reproducibility import make_rng

ROOT = Path(__file__).resolve().parent.parent

# Small config for fast end-to-end runs.
TINY_CONFIG = RunConfig(
    graph=GraphSourceConfig(n=60, initial_edges=300),
    delta=DeltaConfig(model="preferential_mixed", count=40, insert_fraction=0.5),
    rounds=4,
    seed=42,
    description="E2E pipeline test",
    tags=("test", "e2e"),
)

SCENARIO_MTX = """%%MatrixMarket matrix coordinate pattern general
6 6 6
1 2
1 3
2 3
3 1
3 4
4 4
"""


def _write_config(tmp_path: Path, config: RunConfig = TINY_CONFIG) -> Path:
    config_path = tmp_path / "config.json"
    config_path.write_text(config_to_json(config))
    return config_path


class TestPipeline:

    def test_initial_random_graph(self) -> None:
        g = build_initial_graph(TINY_CONFIG.graph, make_rng(0))
        assert g.order == 60
        assert g.size == 300
        assert g.validate() == []

    def test_initial_graph_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "g.mtx"
        path.write_text(SCENARIO_MTX)
        g = build_initial_graph(GraphSourceConfig(path=str(path)), make_rng(0))
        assert (g.order, g.size) == (6, 6)

    def test_balanced_rounds_keep_size(self) -> None:
        g = build_initial_graph(TINY_CONFIG.graph, make_rng(0))
        stats = run_rounds(g, TINY_CONFIG, DeltaGenerator(1))
        assert [s.round for s in stats] == [0, 1, 2, 3]
        for s in stats:
            assert (s.insertions, s.deletions) == (20, 20)
            assert s.size == 300
            assert s.order == 60
        assert g.validate() == []

    def test_on_delta_callback_sees_every_round(self) -> None:
        g = build_initial_graph(TINY_CONFIG.graph, make_rng(0))
        seen: list[int] = []
        run_rounds(g, TINY_CONFIG, DeltaGenerator(1), lambda i, d: seen.append(len(d)))
        assert seen == [40, 40, 40, 40]

    def test_run_pipeline_reproducible(self) -> None:
        g1, s1 = run_pipeline(TINY_CONFIG)
        g2, s2 = run_pipeline(TINY_CONFIG)
        assert g1.all_edges() == g2.all_edges()
        assert [s.size for s in s1] == [s.size for s in s2]

    def test_attachment_rounds_grow_graph(self) -> None:
        from dataclasses import replace

        cfg = replace(
            TINY_CONFIG, delta=DeltaConfig(model="preferential_attachment", count=10)
        )
        _, stats = run_pipeline(cfg)
        assert [s.size for s in stats] == [310, 320, 330, 340]


class TestDryRun:

    def test_dry_run_exits_cleanly(self, tmp_path: Path) -> None:
        config_path = _write_config(tmp_path)
        result = subprocess.run(
            [sys.executable, str(ROOT / "run_delta.py"), "--config", str(config_path), "--dry-run"],
            capture_output=True,
            text=True,
            timeout=60,
            cwd=ROOT,
        )
        assert result.returncode == 0
        assert "dry-run" in result.stdout.lower()
        assert "model=preferential_mixed" in result.stdout

    def test_missing_config_exits_with_error(self, tmp_path: Path) -> None:
        result = subprocess.run(
            [sys.executable, str(ROOT / "run_delta.py"), "--config", str(tmp_path / "none.json")],
            capture_output=True,
            text=True,
            timeout=60,
            cwd=ROOT,
        )
        assert result.returncode == 1
        assert "config file not found" in result.stderr


class TestMain:

    def test_main_writes_summary(self, tmp_path: Path) -> None:
        from run_delta import main

        config_path = _write_config(tmp_path)
        output = tmp_path / "out" / "summary.json"
        main(["--config", str(config_path), "--output", str(output), "--rounds", "2"])

        summary = json.loads(output.read_text())
        assert summary["config"]["rounds"] == 2
        assert len(summary["rounds"]) == 2
        assert summary["final"]["order"] == 60
        assert len(summary["config_hash"]) == 16

    def test_main_graph_override_and_print(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        from run_delta import main

        graph_path = tmp_path / "g.mtx"
        graph_path.write_text(SCENARIO_MTX)
        cfg = RunConfig(
            delta=DeltaConfig(model="uniform_mixed", count=2, insert_fraction=1.0),
            rounds=1,
        )
        config_path = _write_config(tmp_path, cfg)
        main(["--config", str(config_path), "--graph", str(graph_path), "--print-delta"])

        out = capsys.readouterr().out
        assert "order=6, size=6" in out
        assert out.count("+ (") == 2
