"""
Pytest Configuration and Shared Fixtures
"""
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# ============================================================
# SAMPLE EMAILS
# ============================================================

@pytest.fixture
def fcl_email():
    """Complete FCL request - no errors, no warnings"""
    return """Subject: Request quotation - Export FCL

Body:
Hi team,
Please quote for 1x40HC from San Jose, Costa Rica to Rotterdam, NL.
Commodity: canned food
Incoterm: FOB
Ready date: 2026-02-20
Gross weight: 18,500 kg
Volume: 58 cbm
Shipper: Alimentos Ticos S.A.
Consignee: Euro Imports BV"""


@pytest.fixture
def air_email():
    """Complete air freight request"""
    return """Subject: Urgent airfreight quote needed

Hello,
We need an air freight quote for the following shipment:

Route: from Miami, USA to Sao Paulo, Brazil
Commodity: Electronics - mobile phones
Incoterm: DDP
Ready date: 2026-02-15
Gross weight: 450 kg
Volume: 3.2 cbm
Shipper: Tech Solutions Inc.
Consignee: Brasil Electronics Ltda"""


@pytest.fixture
def incomplete_email():
    """No mode, no origin, no shipper"""
    return """Subject: Need shipping info

Hi,
Can you help me ship some cargo?

I need to send merchandise to London, UK.
Ready date: next week
Volume: 25 cbm

Please let me know the cost."""


@pytest.fixture
def lcl_relative_date_email():
    """LCL with From:/To: lines and a relative ready date"""
    return """Subject: LCL shipment - partial info

Team,
Please quote for LCL shipment:

From: Shanghai, China
To: Los Angeles, USA
Ready date: next week
Gross weight: 2,800 kg
Shipper: Dragon Exports Co.
Consignee: Pacific Imports LLC"""


@pytest.fixture
def samples_dir(tmp_path, fcl_email, incomplete_email):
    """Directory with two emails and one non-email file"""
    directory = tmp_path / "samples"
    directory.mkdir()
    (directory / "email_fcl.txt").write_text(fcl_email, encoding="utf-8")
    (directory / "email_incomplete.txt").write_text(incomplete_email, encoding="utf-8")
    (directory / "notes.md").write_text("not an email", encoding="utf-8")
    return directory
