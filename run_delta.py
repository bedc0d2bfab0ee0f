#!/usr/bin/env python3
"""Entry point for running delta workloads against a directed graph.

Builds or loads the initial graph, then runs rounds of delta generation and
application, reporting order and size after every round.

Usage:
    python run_delta.py --config config.json
    python run_delta.py --config config.json --graph web.mtx --rounds 5
    python run_delta.py --config config.json --output summary.json --verbose
    python run_delta.py --config config.json --dry-run
"""

import argparse
import json
import logging
import sys
import time
from contextlib import contextmanager
from dataclasses import asdict, replace
from pathlib import Path
from typing import Generator

from dyngraph.config import RunConfig, config_from_json, config_to_dict, run_config_hash
from dyngraph.delta import DeltaGenerator, GraphDelta
from dyngraph.pipeline import build_initial_graph, run_rounds
from dyngraph.reproducibility import DELTA_STREAM, GRAPH_STREAM, spawn_rngs

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def run(config: RunConfig, output: Path | None, print_delta: bool) -> dict:
    """Execute the run and return the summary dictionary.

    Args:
        config: Run configuration.
        output: Optional path for the summary JSON.
        print_delta: Print every delta before it is applied.

    Returns:
        Summary with the config, its hash and per-round stats.
    """
    rngs = spawn_rngs(config.seed, 2)

    with stage_timer("Initial Graph"):
        graph = build_initial_graph(config.graph, rngs[GRAPH_STREAM])
        print(f"order={graph.order}, size={graph.size}")

    def show(round_idx: int, delta: GraphDelta) -> None:
        print(f"--- round {round_idx} ---")
        if len(delta):
            print(delta.render())

    with stage_timer(f"Delta Rounds ({config.delta.model})"):
        generator = DeltaGenerator(rngs[DELTA_STREAM])
        stats = run_rounds(
            graph, config, generator, on_delta=show if print_delta else None
        )
        for s in stats:
            print(
                f"round {s.round:>4}: +{s.insertions:<6} -{s.deletions:<6} "
                f"order={s.order:<8} size={s.size:<10} {s.elapsed * 1000:.1f}ms"
            )

    summary = {
        "config": config_to_dict(config),
        "config_hash": run_config_hash(config),
        "final": {"order": graph.order, "size": graph.size},
        "rounds": [asdict(s) for s in stats],
    }

    if output is not None:
        with stage_timer("Write Summary"):
            output.parent.mkdir(parents=True, exist_ok=True)
            with open(output, "w") as f:
                json.dump(summary, f, indent=2)
            log.info("Summary written to %s", output)

    return summary


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Generate and apply insertion/deletion deltas on a directed graph"
    )
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to run config JSON file",
    )
    parser.add_argument(
        "--graph",
        type=str,
        default=None,
        help="Matrix Market (.mtx) file overriding graph.path",
    )
    parser.add_argument(
        "--rounds",
        type=int,
        default=None,
        help="Number of rounds overriding the config",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Path for the summary JSON",
    )
    parser.add_argument(
        "--print-delta",
        action="store_true",
        help="Print every delta before applying it",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the run plan without running it",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_path = Path(args.config)
    if not config_path.exists():
        print(f"Error: config file not found: {config_path}", file=sys.stderr)
        sys.exit(1)

    config = config_from_json(config_path.read_text())
    if args.graph is not None:
        config = replace(config, graph=replace(config.graph, path=args.graph))
    if args.rounds is not None:
        config = replace(config, rounds=args.rounds)

    print(f"Config hash: {run_config_hash(config)}")
    if config.graph.path:
        print(f"Graph:  {config.graph.path} (weighted={config.graph.weighted})")
    else:
        print(f"Graph:  random, n={config.graph.n}, "
              f"initial_edges={config.graph.initial_edges}")
    d = config.delta
    print(f"Delta:  model={d.model}, count={d.count}, "
          f"insert_fraction={d.insert_fraction}, alpha={d.alpha}, "
          f"beta={d.beta}, lam={d.lam}")
    print(f"        strict_preferential={d.strict_preferential}, "
          f"strict_delta={d.strict_delta}")
    print(f"Rounds: {config.rounds}, seed={config.seed}")

    if args.dry_run:
        print("\n[dry-run] Config loaded successfully. Exiting.")
        return

    try:
        run(
            config,
            Path(args.output) if args.output else None,
            args.print_delta,
        )
    except Exception:
        log.exception("Run failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
