"""swissqr CLI: verify decoded QR-bill payloads."""

import argparse
import json
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import Optional


STDIN = "-"


def _read_payload(path: str) -> str:
    if path == STDIN:
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        return f.read()


def main():
    """Main CLI entry point for swissqr commands."""
    try:
        swissqr_version = get_version("swissqr")
    except PackageNotFoundError:
        swissqr_version = "dev"

    parser = argparse.ArgumentParser(
        prog="swissqr",
        description="swissqr: Validate Swiss QR-bill payloads against the SIX implementation guidelines"
    )
    parser.add_argument("--version", action="version", version=f"swissqr {swissqr_version}")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (logs go to stderr)"
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file"
    )
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # verify command
    verify_parser = subparsers.add_parser(
        "verify",
        help="Validate decoded QR-bill payload files",
        parents=[parent_parser]
    )
    verify_parser.add_argument(
        "payload_paths",
        nargs="+",
        help="Text files holding the decoded QR payload ('-' for stdin)"
    )
    verify_parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Write one JSON report per payload into this directory"
    )

    # payment command
    payment_parser = subparsers.add_parser(
        "payment",
        help="Print the Bexio outgoing payment for a valid payload",
        parents=[parent_parser]
    )
    payment_parser.add_argument(
        "payload_path",
        help="Text file holding the decoded QR payload ('-' for stdin)"
    )
    payment_parser.add_argument(
        "--bill-id",
        default=None,
        help="Bexio bill the payment settles"
    )
    payment_parser.add_argument(
        "--country",
        default="CH",
        help="Country of the paying account (fees are waived for domestic payments)"
    )

    # schema command
    schema_parser = subparsers.add_parser(
        "schema",
        help="Print the field layout of a QR-bill version",
        parents=[parent_parser]
    )
    schema_parser.add_argument(
        "schema_version",
        nargs="?",
        default="0200",
        help="Version string as found on line 2 of the payload (default: 0200)"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    from .logger import setup_logging
    setup_logging(args.log_level, str(args.log_file) if args.log_file else None)

    if args.command == "verify":
        from .api import verify_text
        from ._internal.canonical_json import canonical_dumps

        output_dir: Optional[Path] = args.output_dir.resolve() if args.output_dir else None
        failed = 0
        for index, payload_path in enumerate(args.payload_paths):
            try:
                result = verify_text(_read_payload(payload_path))
            except (OSError, UnicodeDecodeError) as e:
                print(f"Error: {payload_path}: {e}", file=sys.stderr)
                failed += 1
                continue

            if not result.ok:
                failed += 1
            if output_dir is not None:
                output_dir.mkdir(parents=True, exist_ok=True)
                stem = "stdin" if payload_path == STDIN else Path(payload_path).stem
                report_out = output_dir / f"{index:03d}_{stem}.json"
                report_out.write_text(canonical_dumps(result.model_dump(mode="json")) + "\n", encoding="utf-8")
            if not args.quiet:
                status = "OK" if result.ok else "FAILED"
                print(f"[{status}] {payload_path}")
                if not result.ok:
                    print(f"  Field: {result.tag.value}")
                    print(f"  Reason: {result.reason.value}")
                    print(f"  Message: {result.issue.message}")
                if output_dir is not None:
                    print(f"  Report: {report_out}")
        sys.exit(1 if failed else 0)

    elif args.command == "payment":
        from .api import payment_from_text, RecordRejected
        from .adapters.bexio import AdapterError

        try:
            payment = payment_from_text(
                _read_payload(args.payload_path),
                bill_id=args.bill_id,
                country=args.country.upper()
            )
        except (RecordRejected, AdapterError, OSError, UnicodeDecodeError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        if not args.quiet:
            print(json.dumps(payment.to_payload(), indent=2, ensure_ascii=False))
        sys.exit(0)

    elif args.command == "schema":
        from .kernel.schema import resolve, SchemaNotFound

        try:
            schema = resolve(args.schema_version)
        except SchemaNotFound as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        if not args.quiet:
            layout = {
                "version": schema.version,
                "fields": {tag.value: line for tag, line in sorted(schema.fields.items(), key=lambda item: item[1])},
                "reserved": list(schema.reserved),
            }
            print(json.dumps(layout, indent=2))
        sys.exit(0)


if __name__ == "__main__":
    main()
