"""Map a validated QR-bill record to a Bexio outgoing payment.

See https://docs.bexio.com/#tag/Outgoing-Payment/operation/ApiOutgoingPayment_POST

The result is a starting point: callers complete it (execution date,
sender account, ...) according to what they are doing.
"""

from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict

from swissqr.codes import FieldTag
from swissqr.kernel.record import AddressType, ReferenceType
from swissqr.kernel.schema import Schema


NO_STREET = "-"


class AdapterError(ValueError):
    """Raised when a record cannot be mapped to a payment."""
    pass


class OutgoingPayment(BaseModel):
    """Bexio outgoing payment body, as far as a QR-bill can fill it."""
    bill_id: Optional[str] = None
    payment_type: str  # "QR" | "IBAN"
    reference_no: Optional[str] = None
    message: Optional[str] = None
    currency_code: str
    amount: str  # as encoded in the bill, may be empty
    is_salary_payment: bool = False
    fee_type: str  # "NO_FEE" | "BREAKDOWN"
    receiver_iban: str
    receiver_name: str
    receiver_country_code: str
    receiver_street: str
    receiver_house_no: Optional[str] = None
    receiver_postcode: str
    receiver_city: str

    model_config = ConfigDict(extra="forbid")

    def to_payload(self) -> dict:
        """JSON-ready dict without unset optional keys."""
        return self.model_dump(exclude_none=True)


def outgoing_payment_from_record(
    record: Sequence[str],
    schema: Schema,
    bill_id: Optional[str] = None,
    country: str = "CH",
) -> OutgoingPayment:
    """Build an outgoing payment from a normalized, validated record.

    Args:
        record: Normalized record that passed validation
        schema: Schema the record was validated against
        bill_id: Optional Bexio bill the payment settles
        country: Home country of the paying account; fees can only be waived
            for domestic payments

    Raises:
        AdapterError: if the reference or creditor address type is unknown.
    """
    def value(tag: FieldTag) -> str:
        return schema.value(record, tag)

    fields = {}
    if bill_id:
        fields["bill_id"] = bill_id

    reference_type = ReferenceType.parse(value(FieldTag.REFERENCE_TYPE))
    if reference_type in (ReferenceType.QRR, ReferenceType.SCOR):
        fields["payment_type"] = "QR"
        fields["reference_no"] = value(FieldTag.REFERENCE)
    elif reference_type is ReferenceType.NON:
        fields["payment_type"] = "IBAN"
        fields["message"] = value(FieldTag.COMMUNICATION)
    else:
        raise AdapterError(f"Unknown reference type {value(FieldTag.REFERENCE_TYPE)!r}")

    iban = value(FieldTag.IBAN)
    fields["currency_code"] = value(FieldTag.CURRENCY)
    fields["amount"] = value(FieldTag.AMOUNT)
    fields["receiver_iban"] = iban
    fields["receiver_name"] = value(FieldTag.ADDR_CREDITOR_NAME)
    fields["receiver_country_code"] = value(FieldTag.ADDR_CREDITOR_COUNTRY)
    fields["receiver_street"] = value(FieldTag.ADDR_CREDITOR_STREET_OR_LINE1) or NO_STREET

    address_type = AddressType.parse(value(FieldTag.ADDR_CREDITOR_TYPE))
    if address_type is AddressType.COMBINED:
        # Line 2 of a combined address reads "<postcode> <city>"
        postcode, _, city = value(FieldTag.ADDR_CREDITOR_HOUSE_OR_LINE2).partition(" ")
        fields["receiver_postcode"] = postcode.strip()
        fields["receiver_city"] = city.strip()
    elif address_type is AddressType.STRUCTURED:
        fields["receiver_house_no"] = value(FieldTag.ADDR_CREDITOR_HOUSE_OR_LINE2)
        fields["receiver_postcode"] = value(FieldTag.ADDR_CREDITOR_NPA)
        fields["receiver_city"] = value(FieldTag.ADDR_CREDITOR_CITY)
    else:
        raise AdapterError(f"Unknown creditor address type {value(FieldTag.ADDR_CREDITOR_TYPE)!r}")

    fields["fee_type"] = "NO_FEE" if iban[:2] == country else "BREAKDOWN"
    return OutgoingPayment(**fields)
