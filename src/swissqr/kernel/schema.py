"""Field layout of the Swiss QR-bill payload, keyed by payload version.

Follows the SIX Group implementation guidelines for the QR-bill, version 2.2.
Only the ``0200`` layout is documented; any version starting with ``02`` is
read with that layout (swico/www.swiss-qr-invoice.org issue #14).
"""

from types import MappingProxyType
from typing import Dict, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from swissqr.codes import FieldTag


HEADER_LINE = 0
HEADER_VALUE = "SPC"
VERSION_LINE = 1
COMPATIBLE_PREFIX = "02"


class SchemaError(Exception):
    """Base exception for schema lookup errors."""
    pass


class SchemaNotFound(SchemaError):
    """Raised when no field layout exists for a version string."""
    def __init__(self, version: Optional[str]):
        self.version = version
        super().__init__(f"Unsupported QR-bill version: {version!r}")


class Schema(BaseModel):
    """Immutable mapping of field tags to zero-based line indices."""
    version: str
    fields: Mapping[FieldTag, int]
    reserved: Tuple[int, ...] = Field(default=(), description="Lines that must be empty")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("fields", mode="after")
    @classmethod
    def freeze_fields(cls, value: Mapping[FieldTag, int]) -> Mapping[FieldTag, int]:
        # Schemas are shared process-wide; the layout must not be edited in place
        return MappingProxyType(dict(value))

    @model_validator(mode="after")
    def validate_layout(self) -> "Schema":
        """Reject layouts that put two fields (or a field and a reserved slot) on one line."""
        lines = list(self.fields.values()) + list(self.reserved)
        if HEADER_LINE in lines:
            raise ValueError(f"Line {HEADER_LINE} is reserved for the {HEADER_VALUE} header")
        duplicates = sorted({line for line in lines if lines.count(line) > 1})
        if duplicates:
            raise ValueError(f"Lines mapped more than once: {duplicates}")
        return self

    @property
    def min_lines(self) -> int:
        """Number of lines a complete record of this version has."""
        return max(list(self.fields.values()) + list(self.reserved)) + 1

    def line(self, tag: FieldTag) -> int:
        """Return the line index of ``tag``."""
        return self.fields[tag]

    def value(self, record: Sequence[str], tag: FieldTag) -> str:
        """Return the content of ``tag`` in ``record``, or "" past its end."""
        index = self.fields[tag]
        if index < len(record):
            return record[index]
        return ""

    def reserved_values(self, record: Sequence[str]) -> Tuple[str, ...]:
        return tuple(record[i] if i < len(record) else "" for i in self.reserved)


SCHEMA_0200 = Schema(
    version="0200",
    reserved=(11, 12, 13, 14, 15, 16, 17),
    fields={
        FieldTag.VERSION: 1,
        FieldTag.CODING: 2,
        FieldTag.IBAN: 3,
        FieldTag.ADDR_CREDITOR_TYPE: 4,
        FieldTag.ADDR_CREDITOR_NAME: 5,
        FieldTag.ADDR_CREDITOR_STREET_OR_LINE1: 6,
        FieldTag.ADDR_CREDITOR_HOUSE_OR_LINE2: 7,
        FieldTag.ADDR_CREDITOR_NPA: 8,
        FieldTag.ADDR_CREDITOR_CITY: 9,
        FieldTag.ADDR_CREDITOR_COUNTRY: 10,
        FieldTag.AMOUNT: 18,
        FieldTag.CURRENCY: 19,
        FieldTag.ADDR_DEBITOR_TYPE: 20,
        FieldTag.ADDR_DEBITOR_NAME: 21,
        FieldTag.ADDR_DEBITOR_STREET_OR_LINE1: 22,
        FieldTag.ADDR_DEBITOR_HOUSE_OR_LINE2: 23,
        FieldTag.ADDR_DEBITOR_NPA: 24,
        FieldTag.ADDR_DEBITOR_CITY: 25,
        FieldTag.ADDR_DEBITOR_COUNTRY: 26,
        FieldTag.REFERENCE_TYPE: 27,
        FieldTag.REFERENCE: 28,
        FieldTag.COMMUNICATION: 29,
        FieldTag.EPD: 30,
        FieldTag.ADDITIONNAL_INFO: 31,
        FieldTag.ALT_PROCEDURE1: 32,
        FieldTag.ALT_PROCEDURE2: 33,
    },
)

SCHEMAS: Dict[str, Schema] = {
    SCHEMA_0200.version: SCHEMA_0200,
}

SUPPORTED_VERSIONS: Tuple[str, ...] = tuple(sorted(SCHEMAS))


def resolve(version: Optional[str]) -> Schema:
    """Return the field layout for ``version``.

    Exact matches win; otherwise any ``02xx`` version falls back to ``0200``.

    Raises:
        SchemaNotFound: for empty or unrecognized versions.
    """
    if not version:
        raise SchemaNotFound(version)
    schema = SCHEMAS.get(version)
    if schema is not None:
        return schema
    if version[:2] == COMPATIBLE_PREFIX:
        return SCHEMAS["0200"]
    raise SchemaNotFound(version)
