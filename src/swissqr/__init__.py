"""swissqr: Swiss QR-bill payload verification."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("swissqr")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from swissqr.api import verify_lines, verify_text, verify_file, payment_from_text, RecordRejected
from swissqr.contracts import ValidationIssue, ValidationResult
from swissqr.codes import FieldTag, Reason

__all__ = [
    "__version__",
    "verify_lines",
    "verify_text",
    "verify_file",
    "payment_from_text",
    "RecordRejected",
    "ValidationIssue",
    "ValidationResult",
    "FieldTag",
    "Reason",
]
