"""JSON serialization and deserialization for run configs."""

import json
from dataclasses import asdict
from typing import Any

from dacite import Config as DaciteConfig
from dacite import from_dict

from dyngraph.config.run import RunConfig

_DACITE_CONFIG = DaciteConfig(cast=[tuple, float], check_types=True, strict=True)


def config_to_json(config: RunConfig) -> str:
    """Serialize a RunConfig to a JSON string with sorted keys and 2-space indent."""
    return json.dumps(asdict(config), indent=2, sort_keys=True)


def config_from_json(json_str: str) -> RunConfig:
    """Deserialize a JSON string to a RunConfig.

    Uses dacite with strict=True to reject unknown keys, cast=[tuple] to
    turn JSON arrays back into tuples and cast=[float] so integral JSON
    numbers are accepted for float fields. Missing keys take their defaults.
    """
    return config_from_dict(json.loads(json_str))


def config_to_dict(config: RunConfig) -> dict[str, Any]:
    return asdict(config)


def config_from_dict(d: dict[str, Any]) -> RunConfig:
    return from_dict(data_class=RunConfig, data=d, config=_DACITE_CONFIG)
