"""Public API for swissqr package.

High-level functions that take decoded QR text (or its lines) and return
complete, structured results. Callers should use these instead of wiring
the kernel modules together themselves.
"""

import os
from pathlib import Path
from typing import List, Optional, Sequence, Union

from swissqr.adapters.bexio import OutgoingPayment, outgoing_payment_from_record
from swissqr.contracts import ValidationResult
from swissqr.kernel.record import normalize
from swissqr.kernel.schema import VERSION_LINE, Schema, SchemaNotFound, resolve
from swissqr.kernel.validator import validate
from swissqr._internal.payload import TRAILER_WINDOW, looks_like_payload, split_payload, trim_to_payload
from swissqr.logger import get_logger

logger = get_logger("api")


class RecordRejected(Exception):
    """Raised when a payment is requested for a record that fails validation."""
    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(
            f"QR-bill rejected: [{result.tag.value}/{result.reason.value}] {result.issue.message}"
        )


def _normalize_path(path: Union[str, os.PathLike, Path]) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


def _schema_for(record: Sequence[str]) -> Optional[Schema]:
    version = record[VERSION_LINE] if len(record) > VERSION_LINE else None
    try:
        return resolve(version)
    except SchemaNotFound:
        # validate() reports the version problem with its tag
        return None


def verify_lines(lines: Sequence[str]) -> ValidationResult:
    """
    Validate the lines of a decoded QR-bill payload.

    Leading lines before the ``SPC`` header are discarded, the record is
    normalized with the schema of its version and then validated.

    Args:
        lines: Stripped lines of the decoded QR text, in order

    Returns:
        ValidationResult; ``result.record`` holds the normalized record when ok.

    This is READ-ONLY - no side effects besides logging.
    """
    record: List[str] = trim_to_payload(lines)
    if len(record) != len(lines):
        logger.debug("Discarded %d line(s) before the SPC header", len(lines) - len(record))
    if record and not looks_like_payload(record):
        logger.debug("No EPD trailer within the last %d lines", TRAILER_WINDOW)

    schema = _schema_for(record)
    normalized = normalize(record, schema) if schema is not None else tuple(record)
    result = validate(normalized, schema)

    if result.ok:
        logger.debug("QR-bill accepted (version %s)", schema.version)
    else:
        logger.info(
            "QR-bill rejected: %s/%s: %s",
            result.tag.value,
            result.reason.value,
            result.issue.message,
        )
    return result


def verify_text(text: str) -> ValidationResult:
    """Validate decoded QR text (lines separated by CRLF or LF)."""
    return verify_lines(split_payload(text))


def verify_file(path: Union[str, os.PathLike, Path]) -> ValidationResult:
    """Validate a UTF-8 text file holding decoded QR text."""
    path = _normalize_path(path)
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        text = f.read()
    return verify_text(text)


def payment_from_lines(
    lines: Sequence[str],
    bill_id: Optional[str] = None,
    country: str = "CH",
) -> OutgoingPayment:
    """
    Validate a payload and map it to a Bexio outgoing payment.

    Raises:
        RecordRejected: if the payload fails validation.
        AdapterError: if the record cannot be mapped.
    """
    result = verify_lines(lines)
    if not result.ok:
        raise RecordRejected(result)
    schema = resolve(result.record[VERSION_LINE])
    return outgoing_payment_from_record(result.record, schema, bill_id=bill_id, country=country)


def payment_from_text(
    text: str,
    bill_id: Optional[str] = None,
    country: str = "CH",
) -> OutgoingPayment:
    """Like ``payment_from_lines`` for decoded QR text."""
    return payment_from_lines(split_payload(text), bill_id=bill_id, country=country)
