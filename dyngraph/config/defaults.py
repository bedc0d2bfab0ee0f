"""Anchor configuration: the default run parameters."""

from dyngraph.config.run import RunConfig

# n=1000 random vertices, 5000 initial edges, 10 rounds of 100 preferential
# mixed changes (half insertions), alpha=0, beta=1, lam=0, seed=42.
ANCHOR_CONFIG = RunConfig()
