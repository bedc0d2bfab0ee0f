"""Random generator construction from a single master seed.

Every sampling entry point takes an explicit numpy Generator; nothing in the
package draws from a global or module-level random state.
"""

import numpy as np

# Generator offsets within a run, so graph construction and delta sampling
# draw from independent streams of the same master seed.
GRAPH_STREAM = 0
DELTA_STREAM = 1


def make_rng(
    seed: int | np.random.SeedSequence | np.random.Generator | None = None,
) -> np.random.Generator:
    """Return a numpy Generator for seed.

    An existing Generator is passed through unchanged; None seeds from OS
    entropy and is therefore not reproducible.
    """
    return np.random.default_rng(seed)


def spawn_rngs(seed: int, n: int) -> list[np.random.Generator]:
    """Derive n statistically independent Generators from one master seed.

    Args:
        seed: Master seed (e.g., RunConfig.seed).
        n: Number of generators.

    Returns:
        List of Generators; the same seed always yields the same streams.
    """
    children = np.random.SeedSequence(seed).spawn(n)
    return [np.random.default_rng(child) for child in children]
