"""Field tags and reason codes reported by swissqr validation.

These constants prevent stringly-typed error codes and ensure
client code compares against the correct tags. Both enums mix in
``str`` so ``result.tag == "IBAN"`` works as expected.
"""

from enum import Enum


class FieldTag(str, Enum):
    """Stable names of QR-bill fields, as reported in validation issues."""

    # Header
    SPC = "SPC"
    VERSION = "VERSION"
    CODING = "CODING"

    # Creditor account
    IBAN = "IBAN"

    # Creditor
    ADDR_CREDITOR_TYPE = "ADDR_CREDITOR_TYPE"
    ADDR_CREDITOR_NAME = "ADDR_CREDITOR_NAME"
    ADDR_CREDITOR_STREET_OR_LINE1 = "ADDR_CREDITOR_STREET_OR_LINE1"
    ADDR_CREDITOR_HOUSE_OR_LINE2 = "ADDR_CREDITOR_HOUSE_OR_LINE2"
    ADDR_CREDITOR_NPA = "ADDR_CREDITOR_NPA"
    ADDR_CREDITOR_CITY = "ADDR_CREDITOR_CITY"
    ADDR_CREDITOR_COUNTRY = "ADDR_CREDITOR_COUNTRY"

    # Ultimate creditor block, reserved for future use
    RESERVED = "_RESERVED"

    # Amount
    AMOUNT = "AMOUNT"
    CURRENCY = "CURRENCY"

    # Ultimate debtor
    ADDR_DEBITOR_TYPE = "ADDR_DEBITOR_TYPE"
    ADDR_DEBITOR_NAME = "ADDR_DEBITOR_NAME"
    ADDR_DEBITOR_STREET_OR_LINE1 = "ADDR_DEBITOR_STREET_OR_LINE1"
    ADDR_DEBITOR_HOUSE_OR_LINE2 = "ADDR_DEBITOR_HOUSE_OR_LINE2"
    ADDR_DEBITOR_NPA = "ADDR_DEBITOR_NPA"
    ADDR_DEBITOR_CITY = "ADDR_DEBITOR_CITY"
    ADDR_DEBITOR_COUNTRY = "ADDR_DEBITOR_COUNTRY"

    # Payment reference
    REFERENCE_TYPE = "REFERENCE_TYPE"
    REFERENCE = "REFERENCE"

    # Additional information
    COMMUNICATION = "COMMUNICATION"
    EPD = "EPD"
    ADDITIONNAL_INFO = "ADDITIONNAL_INFO"

    # Alternative procedures
    ALT_PROCEDURE1 = "ALT_PROCEDURE1"
    ALT_PROCEDURE2 = "ALT_PROCEDURE2"


class Reason(str, Enum):
    """Why a field was rejected."""

    MISSING = "MISSING"  # mandatory field empty or beyond the end of the record
    TOO_LONG = "TOO_LONG"
    BAD_LENGTH = "BAD_LENGTH"  # exact length or length range not met
    BAD_VALUE = "BAD_VALUE"  # literal value mismatch (SPC, CODING, EPD, currency)
    BAD_CHECKSUM = "BAD_CHECKSUM"
    BAD_TYPE = "BAD_TYPE"  # unknown address or reference type
    FORBIDDEN = "FORBIDDEN"  # field must be empty for this record
    UNSUPPORTED_VERSION = "UNSUPPORTED_VERSION"
    NOT_QR_IBAN = "NOT_QR_IBAN"  # QRR reference without a QR-IBAN
