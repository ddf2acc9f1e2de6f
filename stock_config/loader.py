"""
Configuration Loader (``stock_config.loader``).

Responsibility
--------------
Reads a YAML mapping and turns it into a frozen ``StoreConfig``.  Every
field is required; there is no silent fallback for a missing key.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing key  -> ``KeyError``.
* Unknown key, wrong type or inconsistent bounds  -> ``ValueError``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from stock_kernel.domain.config import StoreConfig
from stock_kernel.utils.hashing import hash_payload


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping, got {type(data).__name__}")
    return data


def parse_store_config(data: dict[str, Any]) -> StoreConfig:
    """Build a StoreConfig from a parsed mapping."""
    expected = StoreConfig.field_names()
    unknown = sorted(set(data) - set(expected))
    if unknown:
        raise ValueError(f"Unknown store config keys: {', '.join(unknown)}")

    values: dict[str, int] = {}
    for name in expected:
        if name not in data:
            raise KeyError(f"Missing store config key: {name}")
        values[name] = data[name]
    return StoreConfig(**values)


def load_store_config(path: Path | str) -> StoreConfig:
    """Load and validate a StoreConfig from a YAML file."""
    return parse_store_config(load_yaml_file(Path(path)))


def compute_checksum(config: StoreConfig) -> str:
    """Deterministic SHA-256 identity of a configuration."""
    return hash_payload(config.to_dict())
