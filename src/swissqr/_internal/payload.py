"""Turn decoded QR text into record lines.

The QR decoder hands back the symbol's text; a scanner may prepend noise
lines before the ``SPC`` header. These helpers split and trim that text
before it reaches the kernel.
"""

import re
from typing import List, Sequence

from swissqr.kernel.schema import HEADER_VALUE


TRAILER = "EPD"
# EPD is followed by at most the additional-info and two alternative-procedure lines
TRAILER_WINDOW = 4
# str.strip() keeps U+FEFF, so a BOM would glue itself to the SPC header
BOM = "\ufeff"

_LINE_BREAK = re.compile(r"\r\n|\n|\r")


def split_payload(text: str) -> List[str]:
    """Split decoded QR text into stripped lines.

    A leading byte order mark is dropped. A single trailing line break does
    not add an empty last line.
    """
    if text.startswith(BOM):
        text = text[len(BOM):]
    if text.endswith("\r\n"):
        text = text[:-2]
    elif text.endswith(("\n", "\r")):
        text = text[:-1]
    if not text:
        return []
    return [line.strip() for line in _LINE_BREAK.split(text)]


def trim_to_payload(lines: Sequence[str]) -> List[str]:
    """Drop lines before the ``SPC`` header; empty when there is none."""
    for index, line in enumerate(lines):
        if line == HEADER_VALUE:
            return list(lines[index:])
    return []


def looks_like_payload(lines: Sequence[str]) -> bool:
    """Cheap candidate filter: SPC header and EPD among the last four lines.

    Callers that decode several symbols from one document use it to pick the
    QR-bill among them before verifying; ``verify_lines`` logs when a record
    fails it.
    """
    if not lines or lines[0] != HEADER_VALUE:
        return False
    return TRAILER in lines[-TRAILER_WINDOW:]
