"""Test that stable API modules work independently of root exports.

swissqr.api, swissqr.contracts and swissqr.codes are the stable surface.
The string values of tags and reasons are part of that surface: reports
written to disk and downstream callers compare against them.
"""

from swissqr.codes import FieldTag, Reason


EXPECTED_TAGS = {
    "SPC", "VERSION", "CODING", "IBAN",
    "ADDR_CREDITOR_TYPE", "ADDR_CREDITOR_NAME", "ADDR_CREDITOR_STREET_OR_LINE1",
    "ADDR_CREDITOR_HOUSE_OR_LINE2", "ADDR_CREDITOR_NPA", "ADDR_CREDITOR_CITY",
    "ADDR_CREDITOR_COUNTRY",
    "AMOUNT", "CURRENCY",
    "ADDR_DEBITOR_TYPE", "ADDR_DEBITOR_NAME", "ADDR_DEBITOR_STREET_OR_LINE1",
    "ADDR_DEBITOR_HOUSE_OR_LINE2", "ADDR_DEBITOR_NPA", "ADDR_DEBITOR_CITY",
    "ADDR_DEBITOR_COUNTRY",
    "REFERENCE_TYPE", "REFERENCE", "COMMUNICATION", "EPD", "ADDITIONNAL_INFO",
    "ALT_PROCEDURE1", "ALT_PROCEDURE2", "_RESERVED",
}

EXPECTED_REASONS = {
    "MISSING", "TOO_LONG", "BAD_LENGTH", "BAD_VALUE", "BAD_CHECKSUM",
    "BAD_TYPE", "FORBIDDEN", "UNSUPPORTED_VERSION", "NOT_QR_IBAN",
}


def test_field_tag_values_are_stable():
    assert {tag.value for tag in FieldTag} == EXPECTED_TAGS


def test_reason_values_are_stable():
    assert {reason.value for reason in Reason} == EXPECTED_REASONS


def test_stable_api_modules_work_independently():
    """Import directly from stable modules (not from root)."""
    from swissqr.api import verify_lines, RecordRejected
    from swissqr.contracts import ValidationIssue, ValidationResult

    assert callable(verify_lines)
    assert isinstance(RecordRejected, type)
    assert isinstance(ValidationResult, type)

    issue = ValidationIssue(tag=FieldTag.EPD, reason=Reason.MISSING, message="EPD is mandatory")
    result = ValidationResult.invalid(issue.tag, issue.reason, issue.message)
    assert result.issue == issue
    assert result.record is None


def test_result_serializes_with_string_codes():
    from swissqr.contracts import ValidationResult

    dumped = ValidationResult.invalid(FieldTag.IBAN, Reason.BAD_CHECKSUM, "x").model_dump(mode="json")
    assert dumped == {
        "ok": False,
        "record": None,
        "issue": {"tag": "IBAN", "reason": "BAD_CHECKSUM", "message": "x"},
    }
