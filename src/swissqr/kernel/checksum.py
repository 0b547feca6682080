"""Check-digit algorithms used by Swiss QR-bill payloads.

Two independent algorithms live here:

- ISO 7064 MOD 97-10, used for IBANs and ISO 11649 creditor references
  ("SCOR" references, starting with ``RF``).
- Swiss recursive MOD-10, used for 27-digit QR references ("QRR").

Both are pure functions over module-level constant tables.
"""

from typing import Dict


ISO7064_MODULUS = 97
MAX_TOTAL = 999_999_999


class MalformedChecksumInput(ValueError):
    """Raised when a checksum is computed over characters outside its alphabet."""
    def __init__(self, value: str, position: int, algorithm: str):
        self.value = value
        self.position = position
        self.algorithm = algorithm
        super().__init__(
            f"{algorithm}: unsupported character {value[position]!r} at position {position}"
        )


def _build_alphabet() -> Dict[str, int]:
    alphabet = {str(d): d for d in range(10)}
    for offset in range(26):
        alphabet[chr(ord("A") + offset)] = 10 + offset
        alphabet[chr(ord("a") + offset)] = 10 + offset
    return alphabet


ISO7064_ALPHABET: Dict[str, int] = _build_alphabet()

SWISS_MOD10_TABLE = (
    (0, 9, 4, 6, 8, 2, 7, 1, 3, 5),
    (9, 4, 6, 8, 2, 7, 1, 3, 5, 0),
    (4, 6, 8, 2, 7, 1, 3, 5, 0, 9),
    (6, 8, 2, 7, 1, 3, 5, 0, 9, 4),
    (8, 2, 7, 1, 3, 5, 0, 9, 4, 6),
    (2, 7, 1, 3, 5, 0, 9, 4, 6, 8),
    (7, 1, 3, 5, 0, 9, 4, 6, 8, 2),
    (1, 3, 5, 0, 9, 4, 6, 8, 2, 7),
    (3, 5, 0, 9, 4, 6, 8, 2, 7, 1),
    (5, 0, 9, 4, 6, 8, 2, 7, 1, 3),
)

SWISS_MOD10_CHECK_DIGITS = (0, 9, 8, 7, 6, 5, 4, 3, 2, 1)


def _rotate(value: str) -> str:
    """Move the leading country/check (or RF/check) quadruple to the end."""
    return value[4:] + value[:4]


def iso7064_mod97_10(value: str) -> int:
    """Compute the ISO 7064 MOD 97-10 remainder of an alphanumeric string.

    Letters count as two-digit numbers (A=10 ... Z=35, case-insensitive).
    The running total is reduced modulo 97 whenever it exceeds MAX_TOTAL,
    so arbitrarily long inputs stay within a bounded integer.

    Raises:
        MalformedChecksumInput: if ``value`` contains a character that is
            neither an ASCII digit nor an ASCII letter.
    """
    total = 0
    for position, char in enumerate(value):
        digit = ISO7064_ALPHABET.get(char)
        if digit is None:
            raise MalformedChecksumInput(value, position, "ISO 7064 MOD 97-10")
        total = (total * 100 if digit > 9 else total * 10) + digit
        if total > MAX_TOTAL:
            total = total % ISO7064_MODULUS
    return total % ISO7064_MODULUS


def iso7064_verify(reference: str) -> bool:
    """Verify an IBAN-style reference (check pair in positions 2-3).

    The first four characters are rotated to the end and the remainder of
    the rotated string must equal 1. Malformed input is never valid.
    """
    try:
        return iso7064_mod97_10(_rotate(reference)) == 1
    except MalformedChecksumInput:
        return False


def iso7064_check_digits(value: str) -> str:
    """Return the two check digits for ``value``.

    ``value`` carries a placeholder check pair in positions 2-3 (for example
    ``"CH00..."`` or ``"RF00..."``); that pair is ignored.
    """
    rotated = value[4:] + value[:2] + "00"
    return "%02d" % (ISO7064_MODULUS + 1 - iso7064_mod97_10(rotated))


def iban_verify(iban: str) -> bool:
    """Verify the check digits of an IBAN (no country-specific length check)."""
    return iso7064_verify(iban)


def creditor_reference_verify(reference: str) -> bool:
    """Verify an ISO 11649 creditor reference such as ``RF18539007547034``."""
    return iso7064_verify(reference)


def creditor_reference(body: str) -> str:
    """Build an ISO 11649 creditor reference (``RF`` + check pair + body)."""
    return "RF" + iso7064_check_digits("RF00" + body) + body


def swiss_mod10(digits: str) -> int:
    """Compute the Swiss recursive MOD-10 check digit over ``digits``.

    Raises:
        MalformedChecksumInput: if ``digits`` contains a non-ASCII-digit.
    """
    carry = 0
    for position, char in enumerate(digits):
        if char not in "0123456789":
            raise MalformedChecksumInput(digits, position, "Swiss MOD-10")
        carry = SWISS_MOD10_TABLE[carry][ord(char) - ord("0")]
    return SWISS_MOD10_CHECK_DIGITS[carry]


def swiss_mod10_verify(reference: str) -> bool:
    """Verify a reference whose last digit is its Swiss MOD-10 check digit."""
    if not reference or not (reference.isascii() and reference.isdigit()):
        return False
    return swiss_mod10(reference[:-1]) == int(reference[-1])


def qr_reference_with_check_digit(digits: str) -> str:
    """Append the Swiss MOD-10 check digit to ``digits``."""
    return digits + str(swiss_mod10(digits))
