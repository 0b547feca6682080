"""Record model: address/reference type enums and field normalization."""

from enum import Enum
from typing import Optional, Sequence, Tuple

from swissqr.codes import FieldTag
from swissqr.kernel.schema import Schema


# Compared case-insensitively by the validator and the adapter
UPPERCASE_FIELDS: Tuple[FieldTag, ...] = (
    FieldTag.REFERENCE_TYPE,
    FieldTag.CURRENCY,
    FieldTag.ADDR_CREDITOR_COUNTRY,
    FieldTag.ADDR_DEBITOR_COUNTRY,
)


class AddressType(str, Enum):
    """How an address block splits its lines."""
    STRUCTURED = "S"  # street, house number, postcode, city in separate fields
    COMBINED = "K"  # two free-form address lines

    @classmethod
    def parse(cls, value: str) -> Optional["AddressType"]:
        """Return the member for ``value``, or None if it is not a known type."""
        try:
            return cls(value)
        except ValueError:
            return None


class ReferenceType(str, Enum):
    """Payment reference regimes."""
    QRR = "QRR"  # QR reference, Swiss MOD-10
    SCOR = "SCOR"  # ISO 11649 creditor reference, MOD 97-10
    NON = "NON"  # no structured reference

    @classmethod
    def parse(cls, value: str) -> Optional["ReferenceType"]:
        """Return the member for ``value``, or None if it is not a known type."""
        try:
            return cls(value)
        except ValueError:
            return None


def normalize(raw: Sequence[str], schema: Schema) -> Tuple[str, ...]:
    """Return a copy of ``raw`` with the case-insensitive fields upper-cased.

    Lines are neither trimmed nor length-checked. Fields beyond the end of a
    short record are left absent; the validator reports them as missing.
    """
    record = list(raw)
    for tag in UPPERCASE_FIELDS:
        index = schema.line(tag)
        if index < len(record):
            record[index] = record[index].upper()
    return tuple(record)
