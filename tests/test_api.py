"""Tests for the high-level swissqr.api functions."""

import logging

import pytest

from swissqr.api import (
    RecordRejected,
    payment_from_lines,
    payment_from_text,
    verify_file,
    verify_lines,
    verify_text,
)
from swissqr.codes import FieldTag, Reason
from swissqr.contracts import ValidationResult


def test_verify_file_qrr(payloads_dir):
    result = verify_file(payloads_dir / "valid_qrr.txt")
    assert isinstance(result, ValidationResult)
    assert result.ok is True
    assert result.record[27] == "QRR"
    assert len(result.record) == 34


def test_verify_file_crlf_scor_combined(payloads_dir):
    result = verify_file(str(payloads_dir / "valid_scor_combined.txt"))
    assert result.ok is True
    assert result.record[0] == "SPC"
    assert not any(line.endswith("\r") for line in result.record)


def test_verify_file_noise_and_lowercase(payloads_dir):
    """Leading lines are dropped and case-insensitive codes normalized."""
    result = verify_file(payloads_dir / "noisy_non.txt")
    assert result.ok is True
    assert result.record[0] == "SPC"
    assert result.record[19] == "CHF"
    assert result.record[26] == "CH"
    assert result.record[27] == "NON"


def test_verify_file_bad_iban(payloads_dir):
    result = verify_file(payloads_dir / "bad_iban.txt")
    assert result.ok is False
    assert result.tag is FieldTag.IBAN
    assert result.reason is Reason.BAD_CHECKSUM


def test_verify_file_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        verify_file(tmp_path / "missing.txt")


def test_verify_text_without_header():
    result = verify_text("BCD\n002\n1\nSCT\n")
    assert result.tag is FieldTag.SPC
    assert result.reason is Reason.MISSING


def test_verify_lines_unsupported_version(make_record):
    result = verify_lines(make_record({1: "0100"}))
    assert result.tag is FieldTag.VERSION
    assert result.reason is Reason.UNSUPPORTED_VERSION


def test_verify_lines_forward_compatible_version(make_record):
    assert verify_lines(make_record({1: "0210", 27: "non"})).ok is True


def test_rejection_is_logged(make_record, caplog):
    with caplog.at_level(logging.INFO, logger="swissqr"):
        verify_lines(make_record({30: ""}))
    assert "EPD/MISSING" in caplog.text


def test_payment_from_text(payloads_dir):
    text = (payloads_dir / "valid_scor_combined.txt").read_text(encoding="utf-8")
    payment = payment_from_text(text, bill_id="17")

    assert payment.payment_type == "QR"
    assert payment.reference_no == "RF18539007547034"
    assert payment.currency_code == "EUR"
    assert payment.receiver_postcode == "2501"
    assert payment.receiver_city == "Biel"
    assert payment.bill_id == "17"
    assert payment.fee_type == "NO_FEE"


def test_payment_from_rejected_record(make_record):
    with pytest.raises(RecordRejected) as excinfo:
        payment_from_lines(make_record({3: "CH9300762011623852958"}))
    assert excinfo.value.result.tag is FieldTag.IBAN
    assert "IBAN/BAD_CHECKSUM" in str(excinfo.value)


def test_verify_file_with_byte_order_mark(payloads_dir, tmp_path):
    text = (payloads_dir / "valid_qrr.txt").read_text(encoding="utf-8")
    bom_file = tmp_path / "bom.txt"
    bom_file.write_bytes(b"\xef\xbb\xbf" + text.encode("utf-8"))

    result = verify_file(bom_file)
    assert result.ok is True
    assert result.record[0] == "SPC"


def test_verify_text_with_byte_order_mark(payloads_dir):
    text = (payloads_dir / "noisy_non.txt").read_text(encoding="utf-8")
    assert verify_text("\ufeff" + text).ok is True


def test_missing_trailer_frame_is_logged(make_record, caplog):
    with caplog.at_level(logging.DEBUG, logger="swissqr"):
        verify_lines(make_record({30: ""}, length=40))
    assert "No EPD trailer" in caplog.text


def test_framed_record_not_flagged(make_record, caplog):
    with caplog.at_level(logging.DEBUG, logger="swissqr"):
        verify_lines(make_record())
    assert "No EPD trailer" not in caplog.text
