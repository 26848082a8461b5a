"""
Main extraction script.
Parses freight-forwarding emails into shipment records with pattern-based
extractors, validates them, and writes one JSON file per email.
"""
import json
import logging
import os
import sys
from pathlib import Path
from typing import Callable, List, NamedTuple, Optional, Tuple

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

import patterns
from schemas import (
    Cargo,
    Container,
    Incoterm,
    Location,
    Parties,
    ServiceType,
    Shipment,
    ShipmentRecord,
    Source,
    TransportMode,
)
from validate import get_validation_summary, validate_record

# Load environment variables
load_dotenv()
console = Console()
logger = logging.getLogger(__name__)

# Configuration
SAMPLES_DIR = os.getenv("SAMPLES_DIR", "samples")
OUTPUTS_DIR = os.getenv("OUTPUTS_DIR", "outputs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

DEFAULT_SUBJECT = "No subject"
UNKNOWN_DATE = "unknown"


class Route(NamedTuple):
    origin: Location
    destination: Location


class BatchResult(NamedTuple):
    processed: int
    errors: int


def setup_logging(level: str = LOG_LEVEL) -> None:
    """
    Route log records through rich so they interleave cleanly with console output.
    An unrecognised level name falls back to WARNING.
    """
    resolved = logging.getLevelName(level.upper())
    known = isinstance(resolved, int)
    logging.basicConfig(
        level=resolved if known else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
    if not known:
        logger.warning("Unknown LOG_LEVEL %r, using WARNING", level)


# --- Field extractors ---

def normalize_text(text: str) -> str:
    """Collapse Windows/old-Mac line endings to \\n and trim the ends."""
    return text.replace("\r\n", "\n").replace("\r", "\n").strip()


def _to_number(raw: str) -> float:
    return float(raw.replace(",", ""))


def _location(match) -> Location:
    return Location(city=match.group(1).strip(), country=match.group(2).strip())


def extract_subject(text: str) -> str:
    """First 'Subject:' line of the raw (non-normalized) email."""
    match = patterns.SUBJECT_LINE.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return DEFAULT_SUBJECT


def extract_mode(text: str) -> TransportMode:
    """
    Classify the transport mode by keyword.
    Categories are checked in priority order (ocean, air, ground);
    the first category with any keyword present wins.
    """
    lower = text.lower()
    for mode, keywords in patterns.MODE_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return mode
    return TransportMode.UNKNOWN


def extract_service(text: str) -> ServiceType:
    lower = text.lower()
    for service, pattern in patterns.SERVICE_PATTERNS:
        if pattern.search(lower):
            return service
    return ServiceType.UNKNOWN


def extract_incoterm(text: str) -> Incoterm:
    upper = text.upper()
    for incoterm, pattern in patterns.INCOTERM_PATTERNS:
        if pattern.search(upper):
            return incoterm
    return Incoterm.UNKNOWN


def extract_route(text: str) -> Route:
    """
    Find origin and destination.

    Tries, in order:
      1. "from <city>, <country> to <city>, <country>" on one line
      2. "Origin: <city>, <country>" and "Destination: <city>, <country>"
      3. "From: <city>, <country>" and "To: <city>, <country>" at line start

    Tiers 2 and 3 need both sides to win. When nothing wins, whatever
    side tier 2 did find is kept and the other side is left empty.
    """
    # 1. Single sentence
    match = patterns.ROUTE_SENTENCE.search(text)
    if match:
        logger.debug("Route matched 'from ... to ...' sentence")
        return Route(
            origin=Location(city=match.group(1).strip(), country=match.group(2).strip()),
            destination=Location(city=match.group(3).strip(), country=match.group(4).strip()),
        )

    # 2. Origin / Destination labels
    origin_match = patterns.ORIGIN_LINE.search(text)
    dest_match = patterns.DESTINATION_LINE.search(text)
    if origin_match and dest_match:
        logger.debug("Route matched Origin:/Destination: lines")
        return Route(origin=_location(origin_match), destination=_location(dest_match))

    # 3. From / To labels
    from_match = patterns.FROM_LINE.search(text)
    to_match = patterns.TO_LINE.search(text)
    if from_match and to_match:
        logger.debug("Route matched From:/To: lines")
        return Route(origin=_location(from_match), destination=_location(to_match))

    # A lone Origin:/Destination: side is only kept after the From:/To: tier has failed too
    if origin_match or dest_match:
        logger.debug("Route incomplete, keeping the labelled side that was found")
    return Route(
        origin=_location(origin_match) if origin_match else Location(),
        destination=_location(dest_match) if dest_match else Location(),
    )


def normalize_container_type(raw: str) -> str:
    """40'hc -> 40HC, 20ft -> 20"""
    cleaned = patterns.CONTAINER_TYPE_NOISE.sub("", raw.upper())
    return patterns.CONTAINER_FT_SUFFIX.sub("", cleaned, count=1)


def extract_containers(text: str) -> List[Container]:
    containers = []
    for match in patterns.CONTAINER_TOKEN.finditer(text):
        qty = int(match.group(1))
        if qty < 1:
            logger.debug("Skipping container token with zero quantity: %r", match.group(0))
            continue
        containers.append(Container(qty=qty, type=normalize_container_type(match.group(2))))
    return containers


def extract_weight(text: str) -> Optional[float]:
    """
    Gross weight in kg.
    A labelled weight ("Gross weight: 18,500 kg") wins over the first bare "<n> kg".
    """
    for pattern in patterns.WEIGHT_PATTERNS:
        match = pattern.search(text)
        if match:
            return _to_number(match.group(1))
    return None


def extract_volume(text: str) -> Optional[float]:
    match = patterns.VOLUME_PATTERN.search(text)
    if match:
        return _to_number(match.group(1))
    return None


def extract_date(text: str) -> str:
    """
    Ready date.
    ISO date anywhere > text after "Ready date:"/"Available:" (kept verbatim,
    relative phrases included; the validator flags those) > "unknown".
    """
    iso_match = patterns.ISO_DATE.search(text)
    if iso_match:
        return iso_match.group(1)

    label_match = patterns.READY_DATE_LABEL.search(text)
    if label_match and label_match.group(1).strip():
        return label_match.group(1).strip()

    return UNKNOWN_DATE


def _capture(pattern, text: str) -> str:
    match = pattern.search(text)
    return match.group(1).strip() if match else ""


def extract_parties(text: str) -> Parties:
    return Parties(
        shipper=_capture(patterns.SHIPPER, text),
        consignee=_capture(patterns.CONSIGNEE, text),
    )


def extract_commodity(text: str) -> str:
    return _capture(patterns.COMMODITY, text)


# --- Record assembly ---

def parse_email(email_text: str, filename: str) -> ShipmentRecord:
    """
    Build a ShipmentRecord from raw email text.
    Never raises on missing data: each field falls back to its empty/unknown default.
    Validation starts empty; run validate_record() afterwards.
    """
    normalized = normalize_text(email_text)
    route = extract_route(normalized)

    shipment = Shipment(
        mode=extract_mode(normalized),
        service=extract_service(normalized),
        incoterm=extract_incoterm(normalized),
        origin=route.origin,
        destination=route.destination,
        ready_date=extract_date(normalized),
        cargo=Cargo(
            commodity=extract_commodity(normalized),
            pieces=None,
            gross_weight_kg=extract_weight(normalized),
            volume_cbm=extract_volume(normalized),
            containers=extract_containers(normalized),
        ),
        parties=extract_parties(normalized),
    )

    return ShipmentRecord(
        source=Source(
            channel="email",
            subject=extract_subject(email_text),
            received_text_file=filename,
        ),
        shipment=shipment,
    )


# --- File helpers ---

def get_text_files(directory) -> List[Path]:
    """All .txt files in a directory, sorted by name."""
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Input directory not found: {directory}")
    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == ".txt")


def read_text_file(path) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def write_json_file(path, record: ShipmentRecord) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(record.model_dump(mode="json"), f, indent=2, ensure_ascii=False)


def get_output_path(input_path, output_dir) -> Path:
    return Path(output_dir) / f"{Path(input_path).stem}.json"


def process_email(content: str, filename: str) -> ShipmentRecord:
    """Parse + validate one email and print its validation summary."""
    logger.info("Processing %s", filename)
    record = validate_record(parse_email(content, filename))

    summary = get_validation_summary(record)
    console.print(f"Processing: {filename}", markup=False, highlight=False)
    console.print("   " + summary.replace("\n", "\n   "), markup=False, highlight=False)
    console.print()
    return record


def process_all_text_files(
    input_dir,
    output_dir,
    process_function: Callable[[str, str], ShipmentRecord] = process_email,
) -> BatchResult:
    """
    Process every .txt file in input_dir and write <stem>.json into output_dir.
    A failure on one file is logged and counted; the rest of the batch still runs.

    Returns:
        BatchResult(processed, errors)
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    processed = 0
    errors = 0
    for file_path in get_text_files(input_dir):
        try:
            content = read_text_file(file_path)
            record = process_function(content, file_path.name)
            write_json_file(get_output_path(file_path, output_dir), record)
            processed += 1
        except (OSError, ValueError):
            logger.exception("Error processing %s", file_path)
            errors += 1

    return BatchResult(processed=processed, errors=errors)


def resolve_dirs(argv: List[str]) -> Tuple[str, str]:
    """Positional args override SAMPLES_DIR / OUTPUTS_DIR."""
    samples_dir = argv[0] if len(argv) > 0 else SAMPLES_DIR
    outputs_dir = argv[1] if len(argv) > 1 else OUTPUTS_DIR
    return samples_dir, outputs_dir


def main(argv: Optional[List[str]] = None) -> int:
    """Process all emails in the samples directory."""
    setup_logging()
    samples_dir, outputs_dir = resolve_dirs(sys.argv[1:] if argv is None else argv)

    console.print("[bold]Shipment validator starting[/bold]\n")
    try:
        result = process_all_text_files(samples_dir, outputs_dir)
    except FileNotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        return 1

    console.print("[bold green]Processing complete:[/bold green]")
    console.print(f"   - Files processed: {result.processed}")
    console.print(f"   - Errors: {result.errors}")
    console.print(f"   Results saved to {escape(str(outputs_dir))}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
