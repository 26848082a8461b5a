"""
Keyword sets and regular expressions used by the field extractors.
Every table is ordered: extractors walk it top to bottom and stop at the
first hit, so the order here is the priority order.
"""
import re

from schemas import Incoterm, ServiceType, TransportMode

# Plain number with optional thousands separators and decimals: 18,500 / 3.2
NUMBER = r"\d+(?:,\d+)*(?:\.\d+)?"

# --- Mode (substring match on lower-cased text) ---

MODE_KEYWORDS = [
    (TransportMode.OCEAN, ("fcl", "lcl", "ocean", "sea", "container", "40hc", "20ft")),
    (TransportMode.AIR, ("air", "flight", "airfreight")),
    (TransportMode.GROUND, ("ftl", "ltl", "truck", "ground", "road")),
]

# --- Service (word boundaries, lower-cased text) ---

SERVICE_PATTERNS = [
    (ServiceType.FCL, re.compile(r"\bfcl\b")),
    (ServiceType.LCL, re.compile(r"\blcl\b")),
    (ServiceType.AIR, re.compile(r"\b(?:air|airfreight)\b")),
]

# --- Incoterm (word boundaries, upper-cased text) ---

INCOTERM_PATTERNS = [
    (Incoterm.EXW, re.compile(r"\bEXW\b")),
    (Incoterm.FOB, re.compile(r"\bFOB\b")),
    (Incoterm.CIF, re.compile(r"\bCIF\b")),
    (Incoterm.DAP, re.compile(r"\bDAP\b")),
    (Incoterm.DDP, re.compile(r"\bDDP\b")),
]

# --- Route ---

# Tier 1: "from San Jose, Costa Rica to Rotterdam, NL." on a single line
ROUTE_SENTENCE = re.compile(
    r"\bfrom[ \t]+([^,\n]+),[ \t]*([^\n]+?)[ \t]+to[ \t]+([^,\n]+),[ \t]*([^\n.]+)",
    re.IGNORECASE,
)

# Tier 2: labelled lines, anywhere in the line
ORIGIN_LINE = re.compile(r"origin[:\s]+([^,\n]+),[ \t]*([^\n]+)", re.IGNORECASE)
DESTINATION_LINE = re.compile(r"destination[:\s]+([^,\n]+),[ \t]*([^\n]+)", re.IGNORECASE)

# Tier 3: "From:" / "To:" labels at the start of a line
FROM_LINE = re.compile(r"^from[:\s]+([^,\n]+),[ \t]*([^\n]+)", re.IGNORECASE | re.MULTILINE)
TO_LINE = re.compile(r"^to[:\s]+([^,\n]+),[ \t]*([^\n]+)", re.IGNORECASE | re.MULTILINE)

# --- Cargo ---

# 1x40HC, 2 x 20ft, 3x40'HC
CONTAINER_TOKEN = re.compile(r"(\d+)\s*x\s*(\d+(?:['’]|ft)?h?c?)\b", re.IGNORECASE)
CONTAINER_TYPE_NOISE = re.compile(r"['’]")
CONTAINER_FT_SUFFIX = re.compile(r"ft", re.IGNORECASE)

WEIGHT_PATTERNS = [
    re.compile(r"(?:weight|gross)[:\s]+(" + NUMBER + r")\s*kg", re.IGNORECASE),
    re.compile(r"(" + NUMBER + r")\s*kg", re.IGNORECASE),
]

VOLUME_PATTERN = re.compile(r"(?:volume[:\s]+)?(" + NUMBER + r")\s*(?:cbm|m3|m³)", re.IGNORECASE)

# --- Dates ---

ISO_DATE = re.compile(r"(\d{4}-\d{2}-\d{2})")
READY_DATE_LABEL = re.compile(r"(?:ready\s+date|available)[:\s]+(.+?)(?:\n|$)", re.IGNORECASE)

RELATIVE_DATE_KEYWORDS = (
    "next week",
    "next month",
    "tomorrow",
    "today",
    "next",
    "this week",
    "this month",
)

# --- Free-text fields ---

SUBJECT_LINE = re.compile(r"(?:^|\r)Subject:[ \t]*([^\r\n]+)", re.IGNORECASE | re.MULTILINE)
SHIPPER = re.compile(r"shipper[:\s]+(.+?)(?:\n|consignee|$)", re.IGNORECASE)
CONSIGNEE = re.compile(r"consignee[:\s]+(.+?)(?:\n|shipper|$)", re.IGNORECASE)
COMMODITY = re.compile(r"commodity[:\s]+(.+?)(?:\n|$)", re.IGNORECASE)
