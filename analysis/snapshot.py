"""Deterministischer Inhalts-Hash für strukturierte Zustände.

FNV-1a (32 Bit) über die kanonische JSON-Darstellung. Kein kryptographischer
Hash: reicht für die Erkennung ungespeicherter Änderungen, Kollisionen sind
möglich und werden in Kauf genommen.
"""

from __future__ import annotations

import json
import math
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel

HASH_BITS = 32
HASH_MAX = (1 << HASH_BITS) - 1

_FNV_OFFSET_BASIS = 0x811C9DC5
_FNV_PRIME = 0x01000193


def _canonical_key(key: Any) -> str:
    """Dict-Schlüssel als String, wie JSON sie kodiert (1 → "1", True → "true")."""
    if isinstance(key, Enum):
        key = key.value
    if isinstance(key, str):
        return key
    if key is None or isinstance(key, (bool, int, float)):
        return json.dumps(_canonicalize(key))
    return str(key)


def _canonicalize(value: Any) -> Any:
    """Bringt einen Wert in eine JSON-Form, in der gleiche Inhalte gleich serialisieren.

    - Pydantic-Modelle → ``model_dump(mode="json")``
    - Dict-Schlüssel → Strings
    - ganzzahlige Floats → int (``1.0`` und ``1`` sind gleich), NaN/Inf → None
    - Mengen → sortierte Listen
    """
    if isinstance(value, BaseModel):
        return _canonicalize(value.model_dump(mode="json"))
    if isinstance(value, Enum):
        return _canonicalize(value.value)
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value) if value.is_integer() else value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {_canonical_key(k): _canonicalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_canonicalize(v) for v in value]
    if isinstance(value, (set, frozenset)):
        items = [_canonicalize(v) for v in value]
        return sorted(items, key=lambda v: json.dumps(v, sort_keys=True, ensure_ascii=False))
    raise TypeError(f"Nicht hashbarer Wert vom Typ {type(value).__name__}")


def canonical_json(value: Any) -> str:
    """Kanonische Serialisierung: Schlüssel sortiert, Listen in Originalreihenfolge."""
    return json.dumps(
        _canonicalize(value),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def fnv1a_32(data: bytes) -> int:
    h = _FNV_OFFSET_BASIS
    for byte in data:
        h ^= byte
        h = (h * _FNV_PRIME) & HASH_MAX
    return h


def hash_snapshot(value: Any) -> int:
    """Hash eines beliebigen Zustands im Bereich [0, 2**32).

    Gleiche logische Werte ergeben gleiche Hashes, unabhängig von der
    Schlüsselreihenfolge in Dicts. Die Reihenfolge von Listen zählt.
    """
    return fnv1a_32(canonical_json(value).encode("utf-8"))
