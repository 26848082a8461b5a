"""
Single email inspector - shows extracted fields, validation result and JSON payload.
Usage: python inspect_email.py samples/email_01_fcl_complete.txt
"""
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from extract import parse_email, read_text_file, setup_logging
from schemas import ShipmentRecord
from validate import get_validation_summary, validate_record

console = Console()


def flatten_fields(record: ShipmentRecord) -> List[Tuple[str, str]]:
    """(label, display value) pairs for every extracted field, in output order."""
    shipment = record.shipment
    cargo = shipment.cargo

    def show(value) -> str:
        if value is None:
            return "null"
        if value == "":
            return "(empty)"
        return str(value)

    containers = ", ".join(f"{c.qty}x{c.type}" for c in cargo.containers)
    return [
        ("subject", show(record.source.subject)),
        ("mode", shipment.mode.value),
        ("service", shipment.service.value),
        ("incoterm", shipment.incoterm.value),
        ("origin.city", show(shipment.origin.city)),
        ("origin.country", show(shipment.origin.country)),
        ("destination.city", show(shipment.destination.city)),
        ("destination.country", show(shipment.destination.country)),
        ("ready_date", show(shipment.ready_date)),
        ("cargo.commodity", show(cargo.commodity)),
        ("cargo.gross_weight_kg", show(cargo.gross_weight_kg)),
        ("cargo.volume_cbm", show(cargo.volume_cbm)),
        ("cargo.containers", show(containers)),
        ("parties.shipper", show(shipment.parties.shipper)),
        ("parties.consignee", show(shipment.parties.consignee)),
    ]


def print_fields_table(record: ShipmentRecord) -> None:
    table = Table(title=f"Extracted fields: {escape(record.source.received_text_file)}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for label, value in flatten_fields(record):
        style = "dim" if value in ("null", "(empty)", "unknown") else None
        table.add_row(label, escape(value), style=style)
    console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    """Inspect a single email file."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        console.print("Usage: python inspect_email.py <email.txt>")
        console.print("\nExample:")
        console.print("  python inspect_email.py samples/email_01_fcl_complete.txt")
        return 1

    setup_logging()
    path = Path(argv[0])
    try:
        content = read_text_file(path)
    except OSError as e:
        console.print(f"[red]Could not read {escape(str(path))}: {escape(str(e))}[/red]")
        return 1

    # 1. Extraction
    record = parse_email(content, path.name)
    print_fields_table(record)

    # 2. Validation
    validate_record(record)
    summary = get_validation_summary(record)
    if record.validation.errors:
        border = "red"
    elif record.validation.warnings:
        border = "yellow"
    else:
        border = "green"
    console.print(Panel(escape(summary), title="Validation", border_style=border))

    # 3. Payload, as the batch run would write it
    console.print_json(json.dumps(record.model_dump(mode="json"), ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
