"""Business rules of the Swiss QR-bill payload.

Rules run in a fixed order and the first failure wins, so the same record
always yields the same tag and reason.
"""

from typing import Optional, Sequence

from swissqr.codes import FieldTag, Reason
from swissqr.contracts import ValidationResult
from swissqr.kernel.checksum import creditor_reference_verify, iban_verify, swiss_mod10_verify
from swissqr.kernel.record import AddressType, ReferenceType
from swissqr.kernel.schema import HEADER_LINE, HEADER_VALUE, VERSION_LINE, Schema, SchemaNotFound, resolve


CODING_UTF8 = "1"
TRAILER = "EPD"

MAX_NAME_LEN = 70
MAX_STREET_LINE1_LEN = 70
MAX_LINE2_LEN = 70
MAX_HOUSE_LEN = 16
MAX_NPA_LEN = 16
MAX_CITY_LEN = 35
MAX_COMM_LEN = 140
MAX_ALT_PROCEDURE_LEN = 100
COUNTRY_LEN = 2

QRR_IBAN_NUMBER_POS = 4
QRR_IBAN_DIGIT = "3"
QRR_CURRENCIES = ("CHF", "EUR")
QRR_REFERENCE_LEN = 27
SCOR_REFERENCE_MIN_LEN = 5
SCOR_REFERENCE_MAX_LEN = 25

MANDATORY_FIELDS = (
    FieldTag.IBAN,
    FieldTag.CURRENCY,
    FieldTag.ADDR_CREDITOR_TYPE,
    FieldTag.ADDR_DEBITOR_TYPE,
    FieldTag.ADDR_CREDITOR_NAME,
    FieldTag.ADDR_DEBITOR_NAME,
    FieldTag.ADDR_CREDITOR_COUNTRY,
    FieldTag.ADDR_DEBITOR_COUNTRY,
)

ADDRESS_BLOCKS = ("ADDR_CREDITOR", "ADDR_DEBITOR")

OPTIONAL_TEXT_LIMITS = (
    (FieldTag.ADDITIONNAL_INFO, MAX_COMM_LEN),
    (FieldTag.COMMUNICATION, MAX_COMM_LEN),
    (FieldTag.ALT_PROCEDURE1, MAX_ALT_PROCEDURE_LEN),
    (FieldTag.ALT_PROCEDURE2, MAX_ALT_PROCEDURE_LEN),
)


class KernelValidationError(Exception):
    """Base exception for kernel validation errors."""
    pass


class FieldValidationFailure(KernelValidationError):
    """Raised by a rule when a field breaks the QR-bill standard."""
    def __init__(self, tag: FieldTag, reason: Reason, message: str):
        self.tag = tag
        self.reason = reason
        self.message = message
        super().__init__(f"[{tag.value}/{reason.value}] {message}")


def _require(record: Sequence[str], schema: Schema, tag: FieldTag, max_len: Optional[int] = None) -> str:
    value = schema.value(record, tag)
    if not value:
        raise FieldValidationFailure(tag, Reason.MISSING, f"{tag.value} is mandatory")
    if max_len is not None and len(value) > max_len:
        raise FieldValidationFailure(
            tag, Reason.TOO_LONG, f"{tag.value} exceeds {max_len} characters ({len(value)})"
        )
    return value


def _optional(record: Sequence[str], schema: Schema, tag: FieldTag, max_len: int) -> str:
    value = schema.value(record, tag)
    if value and len(value) > max_len:
        raise FieldValidationFailure(
            tag, Reason.TOO_LONG, f"{tag.value} exceeds {max_len} characters ({len(value)})"
        )
    return value


def _forbid(record: Sequence[str], schema: Schema, tag: FieldTag, context: str) -> None:
    if schema.value(record, tag):
        raise FieldValidationFailure(tag, Reason.FORBIDDEN, f"{tag.value} must be empty {context}")


def _check_header(record: Sequence[str], schema: Optional[Schema]) -> Schema:
    """Sentinel, version, coding. Returns the schema to validate against."""
    if not record:
        raise FieldValidationFailure(FieldTag.SPC, Reason.MISSING, "Record is empty")
    if record[HEADER_LINE] != HEADER_VALUE:
        raise FieldValidationFailure(
            FieldTag.SPC, Reason.BAD_VALUE, f"Record must start with {HEADER_VALUE!r}"
        )

    version = record[VERSION_LINE] if len(record) > VERSION_LINE else ""
    if not version:
        raise FieldValidationFailure(FieldTag.VERSION, Reason.MISSING, "Version is mandatory")
    try:
        resolved = resolve(version)
    except SchemaNotFound as e:
        raise FieldValidationFailure(FieldTag.VERSION, Reason.UNSUPPORTED_VERSION, str(e))
    if schema is None:
        schema = resolved

    if schema.value(record, FieldTag.CODING) != CODING_UTF8:
        raise FieldValidationFailure(
            FieldTag.CODING, Reason.BAD_VALUE, f"Coding must be {CODING_UTF8!r} (UTF-8)"
        )
    return schema


def _check_reference(record: Sequence[str], schema: Schema, iban: str) -> None:
    raw_type = schema.value(record, FieldTag.REFERENCE_TYPE)
    reference = schema.value(record, FieldTag.REFERENCE)
    reference_type = ReferenceType.parse(raw_type)

    if reference_type is ReferenceType.SCOR:
        if not SCOR_REFERENCE_MIN_LEN <= len(reference) <= SCOR_REFERENCE_MAX_LEN:
            raise FieldValidationFailure(
                FieldTag.REFERENCE,
                Reason.BAD_LENGTH,
                f"Creditor reference must be {SCOR_REFERENCE_MIN_LEN} to "
                f"{SCOR_REFERENCE_MAX_LEN} characters ({len(reference)})",
            )
        if not creditor_reference_verify(reference):
            raise FieldValidationFailure(
                FieldTag.REFERENCE, Reason.BAD_CHECKSUM, "Creditor reference check digits do not match"
            )
    elif reference_type is ReferenceType.QRR:
        if iban[QRR_IBAN_NUMBER_POS:QRR_IBAN_NUMBER_POS + 1] != QRR_IBAN_DIGIT:
            raise FieldValidationFailure(
                FieldTag.IBAN, Reason.NOT_QR_IBAN, "QR reference requires a QR-IBAN"
            )
        currency = schema.value(record, FieldTag.CURRENCY)
        if currency not in QRR_CURRENCIES:
            raise FieldValidationFailure(
                FieldTag.CURRENCY, Reason.BAD_VALUE, f"QR reference is only allowed for {', '.join(QRR_CURRENCIES)}"
            )
        if len(reference) != QRR_REFERENCE_LEN:
            raise FieldValidationFailure(
                FieldTag.REFERENCE,
                Reason.BAD_LENGTH,
                f"QR reference must be {QRR_REFERENCE_LEN} digits ({len(reference)})",
            )
        if not swiss_mod10_verify(reference):
            raise FieldValidationFailure(
                FieldTag.REFERENCE, Reason.BAD_CHECKSUM, "QR reference check digit does not match"
            )
    elif reference_type is ReferenceType.NON:
        _forbid(record, schema, FieldTag.REFERENCE, "without a structured reference")
    else:
        raise FieldValidationFailure(
            FieldTag.REFERENCE_TYPE, Reason.BAD_TYPE, f"Unknown reference type {raw_type!r}"
        )


def _check_address(record: Sequence[str], schema: Schema, block: str) -> None:
    def tag(suffix: str) -> FieldTag:
        return FieldTag(f"{block}_{suffix}")

    _require(record, schema, tag("NAME"), MAX_NAME_LEN)
    country = _require(record, schema, tag("COUNTRY"))
    if len(country) != COUNTRY_LEN:
        raise FieldValidationFailure(
            tag("COUNTRY"), Reason.BAD_LENGTH, f"Country must be a 2-letter code, got {country!r}"
        )

    raw_type = schema.value(record, tag("TYPE"))
    address_type = AddressType.parse(raw_type)
    if address_type is AddressType.STRUCTURED:
        _require(record, schema, tag("NPA"), MAX_NPA_LEN)
        _require(record, schema, tag("CITY"), MAX_CITY_LEN)
        _require(record, schema, tag("HOUSE_OR_LINE2"), MAX_HOUSE_LEN)
        _optional(record, schema, tag("STREET_OR_LINE1"), MAX_STREET_LINE1_LEN)
    elif address_type is AddressType.COMBINED:
        _forbid(record, schema, tag("NPA"), "in a combined address")
        _forbid(record, schema, tag("CITY"), "in a combined address")
        _require(record, schema, tag("HOUSE_OR_LINE2"), MAX_LINE2_LEN)
        _optional(record, schema, tag("STREET_OR_LINE1"), MAX_STREET_LINE1_LEN)
    else:
        raise FieldValidationFailure(tag("TYPE"), Reason.BAD_TYPE, f"Unknown address type {raw_type!r}")


def check_record(record: Sequence[str], schema: Optional[Schema] = None) -> Schema:
    """Run every rule against ``record``, raising on the first failure.

    ``record`` should already be normalized. When ``schema`` is None it is
    resolved from the record's version field.

    Returns:
        The schema the record was checked against.

    Raises:
        FieldValidationFailure: naming the first failing field and rule.
    """
    schema = _check_header(record, schema)

    trailer = schema.value(record, FieldTag.EPD)
    if trailer != TRAILER:
        reason = Reason.MISSING if not trailer else Reason.BAD_VALUE
        raise FieldValidationFailure(FieldTag.EPD, reason, f"Trailer must be {TRAILER!r}")

    for index, value in zip(schema.reserved, schema.reserved_values(record)):
        if value:
            raise FieldValidationFailure(
                FieldTag.RESERVED, Reason.FORBIDDEN, f"Line {index} is reserved and must be empty"
            )

    for tag in MANDATORY_FIELDS:
        _require(record, schema, tag)

    iban = schema.value(record, FieldTag.IBAN)
    if not iban_verify(iban):
        raise FieldValidationFailure(FieldTag.IBAN, Reason.BAD_CHECKSUM, "IBAN check digits do not match")

    _check_reference(record, schema, iban)

    for block in ADDRESS_BLOCKS:
        _check_address(record, schema, block)

    for tag, max_len in OPTIONAL_TEXT_LIMITS:
        _optional(record, schema, tag, max_len)

    return schema


def validate(record: Sequence[str], schema: Optional[Schema] = None) -> ValidationResult:
    """Validate a normalized record.

    Returns:
        ``ValidationResult`` that is either ok (carrying the record) or
        names the first failing field and a reason code.
    """
    try:
        check_record(record, schema)
    except FieldValidationFailure as e:
        return ValidationResult.invalid(e.tag, e.reason, e.message)
    return ValidationResult.valid(tuple(record))
