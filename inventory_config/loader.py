"""
Configuration Loader (``inventory_config.loader``).

Responsibility
--------------
Loads a YAML settings file and parses it into the typed
``inventory_config.schema`` dataclasses.  Runtime callers go through
``inventory_config.get_active_settings()`` instead of calling this directly.

Invariants enforced
-------------------
* Parse errors raise ``ValueError`` or ``KeyError`` with descriptive
  messages; no silent defaults for required fields.
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys in parsed dict  -> ``KeyError`` propagates.
* Unknown transaction kind or log level  -> ``ValueError``.
* Non-integer (or boolean) quantity  -> ``ValueError``.
* Empty section (``ledger:`` with no body)  -> treated as absent.
"""

from __future__ import annotations

import hashlib
import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from inventory_config.schema import DemoAdjustmentDef, DemoItemDef, LedgerSettings
from inventory_kernel.domain.dtos import TransactionKind

_ADJUSTMENT_KINDS = {
    "add": TransactionKind.ADD_STOCK,
    "remove": TransactionKind.REMOVE_STOCK,
}


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_decimal(value: Any) -> Decimal:
    """Parse a price from YAML; floats go through ``str`` to keep their digits."""
    if isinstance(value, bool):
        raise ValueError(f"Cannot parse decimal from {value!r}")
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, (int, str, Decimal)):
        return Decimal(value)
    raise ValueError(f"Cannot parse decimal from {value!r}")


def parse_quantity(value: Any) -> int:
    """Accept a YAML integer only; floats and booleans are refused."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Quantity must be an integer, got {value!r}")
    return value


def parse_demo_item(data: dict[str, Any]) -> DemoItemDef:
    """Parse a ``DemoItemDef``; every field is required."""
    return DemoItemDef(
        sku=data["sku"],
        name=data["name"],
        category=data["category"],
        quantity=parse_quantity(data["quantity"]),
        unit_price=parse_decimal(data["unit_price"]),
    )


def parse_demo_adjustment(data: dict[str, Any]) -> DemoAdjustmentDef:
    """Parse a ``DemoAdjustmentDef``; ``kind`` is ``add`` or ``remove``."""
    kind_name = data["kind"]
    if kind_name not in _ADJUSTMENT_KINDS:
        raise ValueError(
            f"Unknown adjustment kind {kind_name!r}; expected one of "
            f"{sorted(_ADJUSTMENT_KINDS)}"
        )
    return DemoAdjustmentDef(
        sku=data["sku"],
        kind=_ADJUSTMENT_KINDS[kind_name],
        quantity=parse_quantity(data["quantity"]),
        note=data.get("note", ""),
    )


def parse_default_notes(data: dict[str, Any]) -> dict[TransactionKind, str]:
    """Map ``KIND: note`` pairs onto ``TransactionKind`` keys."""
    notes: dict[TransactionKind, str] = {}
    for kind_name, note in data.items():
        try:
            kind = TransactionKind(kind_name)
        except ValueError:
            raise ValueError(f"Unknown transaction kind in default_notes: {kind_name!r}") from None
        notes[kind] = str(note)
    return notes


def parse_settings(data: dict[str, Any]) -> LedgerSettings:
    """
    Parse ``LedgerSettings`` from the top-level YAML mapping.

    Postconditions:
        - Returns a fully populated ``LedgerSettings`` with ``checksum`` set
          to the checksum of ``data``.
    """
    ledger = data.get("ledger") or {}
    logging_data = data.get("logging") or {}
    demo = data.get("demo") or {}

    log_level = str(logging_data.get("level", "INFO")).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Unknown log level: {log_level!r}")

    prefix = ledger.get("transaction_id_prefix", "TXN")
    if not prefix:
        raise ValueError("transaction_id_prefix must be non-empty")

    return LedgerSettings(
        transaction_id_prefix=prefix,
        system_actor=ledger.get("system_actor", "system"),
        log_level=log_level,
        default_notes=parse_default_notes(ledger.get("default_notes") or {}),
        seed_demo_data=bool(demo.get("enabled", False)),
        demo_items=tuple(parse_demo_item(i) for i in demo.get("items") or ()),
        demo_adjustments=tuple(
            parse_demo_adjustment(a) for a in demo.get("adjustments") or ()
        ),
        checksum=compute_checksum(data),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
