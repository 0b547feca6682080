"""Performance sentinel benchmarks for record validation."""

from __future__ import annotations

import os
from time import perf_counter
from typing import List, Tuple

from swissqr.api import verify_lines


def _budget_from_env(var_name: str, default_ms: float) -> float:
    raw = os.getenv(var_name)
    if not raw:
        return default_ms
    try:
        return float(raw)
    except ValueError:
        return default_ms


MAX_VALIDATE_MS = _budget_from_env("SWISSQR_MAX_VALIDATE_MS", 1000.0)

SENTINEL_RECORD_COUNT = 2000

# Valid QRR bill with structured addresses; every rule runs to the end
SENTINEL_RECORD: Tuple[str, ...] = (
    "SPC", "0200", "1", "CH4431999123000889012",
    "S", "Robert Schneider AG", "Rue du Lac", "1268", "2501", "Biel", "CH",
    "", "", "", "", "", "", "",
    "1949.75", "CHF",
    "S", "Pia-Maria Rutschmann-Schnyder", "Grosse Marktgasse", "28", "9400", "Rorschach", "CH",
    "QRR", "210000000003139471430009017",
    "Order of 15 June 2020", "EPD",
    "//S1/10/10201409/11/200701/20/140.000-53/30/102673831/31/200615/32/7.7/33/7.7:139.40/40/0:30",
    "Name AV1: UV;UltraPay005;12345", "Name AV2: XY;XYService;54321",
)


def sentinel_records(count: int = SENTINEL_RECORD_COUNT) -> List[List[str]]:
    """Return ``count`` copies of the sentinel record, each with leading noise."""
    return [["scanner noise"] + list(SENTINEL_RECORD) for _ in range(count)]


def run_validation_sentinel(count: int = SENTINEL_RECORD_COUNT) -> Tuple[float, int]:
    """Validate ``count`` records; return elapsed ms and number accepted."""
    records = sentinel_records(count)
    start = perf_counter()
    accepted = sum(1 for lines in records if verify_lines(lines).ok)
    elapsed_ms = (perf_counter() - start) * 1000.0
    return elapsed_ms, accepted
