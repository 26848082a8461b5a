"""
Completeness rules for extracted shipments.
Blocking errors mean the request cannot be quoted as is; warnings flag
information a forwarder would still want to confirm.

Run directly to re-validate the JSON records in the outputs directory.
"""
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from patterns import RELATIVE_DATE_KEYWORDS
from schemas import Incoterm, ServiceType, Shipment, ShipmentRecord, TransportMode, Validation

logger = logging.getLogger(__name__)

PASS_MESSAGE = "Validation passed - No errors or warnings"

# Blocking
ORIGIN_MISSING = "Origin location is missing or incomplete"
DESTINATION_MISSING = "Destination location is missing or incomplete"
MODE_UNKNOWN = "Transport mode could not be determined"
SHIPPER_MISSING = "Shipper information is missing"

# Non-blocking
INCOTERM_UNKNOWN = "Incoterm could not be determined or is not standard"
READY_DATE_VAGUE = 'Ready date is relative or unknown: "{ready_date}"'
COMMODITY_MISSING = "Commodity description is missing"
CONSIGNEE_MISSING = "Consignee information is missing"
WEIGHT_MISSING = "Gross weight information is missing"
VOLUME_MISSING = "Volume information is missing"
CONTAINERS_MISSING = "Container information is missing for ocean shipment"
SERVICE_UNKNOWN = "Service type could not be determined"


def is_relative_date(date_str: str) -> bool:
    """True for phrases like 'next week' or 'tomorrow'."""
    lower = date_str.lower()
    return any(keyword in lower for keyword in RELATIVE_DATE_KEYWORDS)


def validate_shipment(shipment: Shipment) -> Validation:
    """
    Check a shipment for completeness.
    Every rule is evaluated; messages come out in rule order.

    Returns:
        A new Validation; the shipment itself is not touched.
    """
    errors: List[str] = []
    warnings: List[str] = []

    # 1. Blocking
    if not shipment.origin.city or not shipment.origin.country:
        errors.append(ORIGIN_MISSING)
    if not shipment.destination.city or not shipment.destination.country:
        errors.append(DESTINATION_MISSING)
    if shipment.mode == TransportMode.UNKNOWN:
        errors.append(MODE_UNKNOWN)
    if not shipment.parties.shipper:
        errors.append(SHIPPER_MISSING)

    # 2. Non-blocking
    if shipment.incoterm == Incoterm.UNKNOWN:
        warnings.append(INCOTERM_UNKNOWN)
    if shipment.ready_date == "unknown" or is_relative_date(shipment.ready_date):
        warnings.append(READY_DATE_VAGUE.format(ready_date=shipment.ready_date))
    if not shipment.cargo.commodity:
        warnings.append(COMMODITY_MISSING)
    if not shipment.parties.consignee:
        warnings.append(CONSIGNEE_MISSING)
    if shipment.cargo.gross_weight_kg is None:
        warnings.append(WEIGHT_MISSING)
    if shipment.cargo.volume_cbm is None:
        warnings.append(VOLUME_MISSING)
    if shipment.service in (ServiceType.FCL, ServiceType.LCL) and not shipment.cargo.containers:
        warnings.append(CONTAINERS_MISSING)
    if shipment.service == ServiceType.UNKNOWN:
        warnings.append(SERVICE_UNKNOWN)

    return Validation(errors=errors, warnings=warnings)


def validate_record(record: ShipmentRecord) -> ShipmentRecord:
    """Replace record.validation with a fresh result and return the record."""
    record.validation = validate_shipment(record.shipment)
    logger.debug(
        "%s: %d error(s), %d warning(s)",
        record.source.received_text_file,
        len(record.validation.errors),
        len(record.validation.warnings),
    )
    return record


def get_validation_summary(record: ShipmentRecord) -> str:
    """Human-readable numbered list of errors and warnings."""
    errors = record.validation.errors
    warnings = record.validation.warnings

    if not errors and not warnings:
        return PASS_MESSAGE

    lines = []
    if errors:
        lines.append(f"{len(errors)} Error(s):")
        lines.extend(f"   {i}. {error}" for i, error in enumerate(errors, 1))
    if warnings:
        lines.append(f"{len(warnings)} Warning(s):")
        lines.extend(f"   {i}. {warning}" for i, warning in enumerate(warnings, 1))

    return "\n".join(lines).rstrip()


def load_record(path) -> ShipmentRecord:
    with open(path, "r", encoding="utf-8") as f:
        return ShipmentRecord.model_validate(json.load(f))


def report(outputs_dir) -> Table:
    """
    Re-validate every JSON record in outputs_dir.
    Files that cannot be read or do not match the schema are listed as unreadable.
    """
    table = Table(title=f"Validation report: {outputs_dir}")
    table.add_column("File")
    table.add_column("Errors", justify="right")
    table.add_column("Warnings", justify="right")
    table.add_column("Status")

    total_errors = 0
    total_warnings = 0
    blocked = 0

    for path in sorted(Path(outputs_dir).glob("*.json")):
        try:
            record = validate_record(load_record(path))
        except (OSError, ValueError) as e:
            logger.warning("Skipping %s: %s", path.name, e)
            table.add_row(escape(path.name), "-", "-", "[yellow]unreadable[/yellow]")
            continue

        n_errors = len(record.validation.errors)
        n_warnings = len(record.validation.warnings)
        total_errors += n_errors
        total_warnings += n_warnings
        if n_errors:
            blocked += 1
            status = "[red]BLOCKED[/red]"
        elif n_warnings:
            status = "[yellow]REVIEW[/yellow]"
        else:
            status = "[green]OK[/green]"
        table.add_row(escape(path.name), str(n_errors), str(n_warnings), status)

    table.caption = f"{blocked} blocked | {total_errors} errors | {total_warnings} warnings"
    return table


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    argv = sys.argv[1:] if argv is None else argv
    outputs_dir = argv[0] if argv else os.getenv("OUTPUTS_DIR", "outputs")

    console = Console()
    if not Path(outputs_dir).is_dir():
        console.print(f"[red]Error: {escape(str(outputs_dir))} not found. Run extract.py first.[/red]")
        return 1

    console.print(report(outputs_dir))
    return 0


if __name__ == "__main__":
    sys.exit(main())
