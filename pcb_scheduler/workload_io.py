from __future__ import annotations

import csv
import json
import re
from pathlib import Path
from typing import List

BURST_KEYS = ("burst", "burst_time")


def load_bursts(path: str | Path) -> List[int]:
    """
    Load CPU burst lengths from a JSON or CSV file.

    JSON may hold a plain list of integers or a list of objects with a
    ``burst`` (or ``burst_time``) field. CSV needs a ``burst`` or
    ``burst_time`` column. File order is process order.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def parse_bursts(text: str) -> List[int]:
    """
    Parse bursts given inline, e.g. ``"5,3,8"`` or ``"5 3 8"``.
    """
    tokens = [t for t in re.split(r"[,\s]+", text.strip()) if t]
    return [_to_burst(t) for t in tokens]


def _load_json(path: Path) -> List[int]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of bursts or process objects")

    bursts: List[int] = []
    for entry in raw:
        if isinstance(entry, dict):
            bursts.append(_burst_from_mapping(entry))
        else:
            bursts.append(_to_burst(entry))

    return bursts


def _load_csv(path: Path) -> List[int]:
    bursts: List[int] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            bursts.append(_burst_from_mapping(row))
    return bursts


def _burst_from_mapping(mapping) -> int:
    for key in BURST_KEYS:
        if key in mapping:
            return _to_burst(mapping[key])
    raise ValueError(f"Invalid process entry (no burst field): {mapping!r}")


def _to_burst(value) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid burst: {value!r}")
    try:
        burst = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid burst: {value!r}") from exc
    if isinstance(value, float) and value != burst:
        raise ValueError(f"Invalid burst: {value!r}")
    if burst < 0:
        raise ValueError(f"Burst must be non-negative: {value!r}")
    return burst
