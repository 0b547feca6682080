"""Canonical JSON serialization for reports written by the CLI.

Byte-stable output makes per-file reports diffable between runs.
"""

import json
from typing import Any


def canonical_dumps(obj: Any) -> str:
    """
    Canonical JSON serialization.

    Rules:
    - UTF-8 (no ASCII escaping), names and addresses keep their accents
    - Sorted keys
    - Stable separators (",", ":")
    - No trailing whitespace
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False
    )
