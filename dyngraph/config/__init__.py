"""Run configuration system with frozen, hashable, serializable dataclasses."""

from dyngraph.config.defaults import ANCHOR_CONFIG
from dyngraph.config.hashing import config_hash, run_config_hash
from dyngraph.config.run import (
    DELTA_MODELS,
    DeltaConfig,
    GraphSourceConfig,
    RunConfig,
)
from dyngraph.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
)

__all__ = [
    "ANCHOR_CONFIG",
    "DELTA_MODELS",
    "DeltaConfig",
    "GraphSourceConfig",
    "RunConfig",
    "config_from_dict",
    "config_from_json",
    "config_hash",
    "config_to_dict",
    "config_to_json",
    "run_config_hash",
]
