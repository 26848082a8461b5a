"""
Pydantic models for extracted shipment records.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class TransportMode(str, Enum):
    OCEAN = "ocean"
    AIR = "air"
    GROUND = "ground"
    UNKNOWN = "unknown"


class ServiceType(str, Enum):
    FCL = "FCL"
    LCL = "LCL"
    AIR = "AIR"
    UNKNOWN = "unknown"


class Incoterm(str, Enum):
    EXW = "EXW"
    FOB = "FOB"
    CIF = "CIF"
    DAP = "DAP"
    DDP = "DDP"
    UNKNOWN = "unknown"


class Location(BaseModel):
    """City/country pair. Empty strings mean the side was not found."""

    city: str = ""
    country: str = ""


class Container(BaseModel):
    qty: int = Field(..., ge=1)
    type: str = Field(..., description="Normalized size/type token, e.g. 40HC or 20")


class Cargo(BaseModel):
    commodity: str = ""
    pieces: Optional[int] = None
    gross_weight_kg: Optional[float] = Field(None, ge=0)
    volume_cbm: Optional[float] = Field(None, ge=0)
    containers: List[Container] = Field(default_factory=list)


class Parties(BaseModel):
    shipper: str = ""
    consignee: str = ""


class Shipment(BaseModel):
    """Schema for the shipment details extracted from one email."""

    mode: TransportMode = TransportMode.UNKNOWN
    service: ServiceType = ServiceType.UNKNOWN
    incoterm: Incoterm = Incoterm.UNKNOWN
    origin: Location = Field(default_factory=Location)
    destination: Location = Field(default_factory=Location)
    ready_date: str = Field("unknown", description="ISO date, relative phrase, or 'unknown'")
    cargo: Cargo = Field(default_factory=Cargo)
    parties: Parties = Field(default_factory=Parties)


class Source(BaseModel):
    channel: str = "email"
    subject: str = "No subject"
    received_text_file: str


class Validation(BaseModel):
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class ShipmentRecord(BaseModel):
    """Complete output unit: where it came from, what was found, what is missing."""

    source: Source
    shipment: Shipment
    validation: Validation = Field(default_factory=Validation)
