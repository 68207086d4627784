"""
inventory_config -- single public entrypoint for ledger configuration.

Responsibility:
    Provides the ONLY way to obtain ledger settings at runtime through
    ``get_active_settings()``.  YAML loading is internal tooling and
    ``inventory_kernel`` never imports this package; ``bridges`` turns
    settings into kernel objects.

Failure modes:
    - ``FileNotFoundError`` -- the settings file does not exist.
    - ``yaml.YAMLError`` -- the file is not valid YAML.
    - ``KeyError`` / ``ValueError`` -- structural validation failures.

Audit relevance:
    Every successful ``get_active_settings()`` call emits an
    ``INVENTORY_CONFIG_TRACE`` log entry with the source path and checksum,
    tying a running ledger to the exact settings that configured it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from inventory_config.loader import load_yaml_file, parse_settings
from inventory_config.schema import DemoAdjustmentDef, DemoItemDef, LedgerSettings

_logger = logging.getLogger("inventory_kernel.config")

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "defaults" / "ledger.yaml"


def get_active_settings(path: Path | None = None) -> LedgerSettings:
    """
    Load and validate ledger settings.

    Args:
        path: Settings file. Defaults to the packaged ``defaults/ledger.yaml``.

    Returns:
        Frozen ``LedgerSettings``.
    """
    source = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    settings = parse_settings(load_yaml_file(source))

    _logger.info(
        "INVENTORY_CONFIG_TRACE",
        extra={
            "trace_type": "INVENTORY_CONFIG_TRACE",
            "source": str(source),
            "checksum": settings.checksum,
            "seed_demo_data": settings.seed_demo_data,
            "demo_item_count": len(settings.demo_items),
        },
    )
    return settings


__all__ = [
    "DEFAULT_SETTINGS_PATH",
    "DemoAdjustmentDef",
    "DemoItemDef",
    "LedgerSettings",
    "get_active_settings",
]
