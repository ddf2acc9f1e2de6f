"""
stock_config -- public entrypoint for store configuration.

Responsibility:
    Provides ``get_active_config()``, the way shell code obtains the
    ``StoreConfig`` it passes to the stores.  The kernel never imports this
    package; it only receives the resulting frozen value.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``store_config_loaded`` log entry carrying the source path and the
    config checksum.
"""

from __future__ import annotations

from pathlib import Path

from stock_config.loader import (
    compute_checksum,
    load_store_config,
    load_yaml_file,
    parse_store_config,
)
from stock_kernel.domain.config import StoreConfig
from stock_kernel.logging_config import get_logger

_logger = get_logger("config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults" / "store.yaml"


def get_active_config(config_path: Path | str | None = None) -> StoreConfig:
    """
    Load the StoreConfig used to build the stores.

    Args:
        config_path: YAML file to read.  Defaults to the bundled
            ``stock_config/defaults/store.yaml``.

    Raises:
        FileNotFoundError, KeyError, ValueError: see stock_config.loader.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    config = load_store_config(path)
    _logger.info(
        "store_config_loaded",
        extra={"config_path": str(path), "checksum": compute_checksum(config)},
    )
    return config


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "StoreConfig",
    "compute_checksum",
    "get_active_config",
    "load_store_config",
    "load_yaml_file",
    "parse_store_config",
]
