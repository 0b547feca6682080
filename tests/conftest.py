"""Pytest configuration for tests.

No sys.path hacks - tests should import from installed swissqr package.
"""

from pathlib import Path
from typing import Dict, List

import pytest


FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"

# Minimal valid record: no structured reference, structured addresses,
# no amount, optional trailing lines after EPD omitted.
MINIMAL_RECORD: Dict[int, str] = {
    0: "SPC",
    1: "0200",
    2: "1",
    3: "CH9300762011623852957",
    4: "S",
    5: "Muster Krankenkasse",
    6: "Musterstrasse",
    7: "12a",
    8: "8000",
    9: "Seldwyla",
    10: "CH",
    18: "",
    19: "CHF",
    20: "S",
    21: "Sarah Beispiel",
    22: "Mustergasse",
    23: "1",
    24: "3600",
    25: "Thun",
    26: "CH",
    27: "NON",
    28: "",
    29: "",
    30: "EPD",
}


def pytest_addoption(parser):
    """Add gated perf test option."""
    parser.addoption(
        "--run-perf",
        action="store_true",
        default=False,
        help="Run performance sentinel benchmarks (gated)."
    )


def pytest_collection_modifyitems(config, items):
    """Skip perf-marked tests unless --run-perf is set."""
    if config.getoption("--run-perf"):
        return
    skip_perf = pytest.mark.skip(reason="perf tests gated; pass --run-perf")
    for item in items:
        if "perf" in item.keywords:
            item.add_marker(skip_perf)


@pytest.fixture
def make_record():
    """Factory for records derived from MINIMAL_RECORD.

    Overrides map line index to content; lines past the last index are
    padded with "" when ``length`` is given.
    """
    def _make(overrides: Dict[int, str] = None, length: int = None) -> List[str]:
        lines = dict(MINIMAL_RECORD)
        lines.update(overrides or {})
        size = max(lines) + 1 if length is None else length
        return [lines.get(i, "") for i in range(size)]
    return _make


@pytest.fixture
def payloads_dir() -> Path:
    return FIXTURES / "payloads"
