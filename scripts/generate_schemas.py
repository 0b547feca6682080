"""Generate JSON schemas from Pydantic models and save to schemas/ directory."""

import json
from pathlib import Path

from swissqr.adapters.bexio import OutgoingPayment
from swissqr.contracts import ValidationResult


def generate_schemas():
    """Generate JSON schemas for the models swissqr emits."""
    schemas_dir = Path(__file__).parent.parent / "schemas"
    schemas_dir.mkdir(exist_ok=True)

    # Validation report schema (swissqr verify --output-dir)
    result_schema = ValidationResult.model_json_schema()
    result_schema_path = schemas_dir / "validation_result.schema.json"
    with open(result_schema_path, 'w', encoding='utf-8') as f:
        json.dump(result_schema, f, indent=2, ensure_ascii=False)
    print(f"Generated: {result_schema_path}")

    # Outgoing payment schema (swissqr payment)
    payment_schema = OutgoingPayment.model_json_schema()
    payment_schema_path = schemas_dir / "outgoing_payment.schema.json"
    with open(payment_schema_path, 'w', encoding='utf-8') as f:
        json.dump(payment_schema, f, indent=2, ensure_ascii=False)
    print(f"Generated: {payment_schema_path}")

    print("\nSchema generation complete!")


if __name__ == "__main__":
    generate_schemas()
