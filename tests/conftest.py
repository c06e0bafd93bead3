"""
Pytest configuration and fixtures.
"""
import pytest

from night_audit.config import get_settings
from night_audit.parsing import AccountLineParser


SAMPLE_REPORT = """\
Night Audit Report
GUEST LEDGER|$21,084.73|$20,100.00
ADVANCE DEPOSITS|($7,095.60)|$0.00
VISA/MASTER|($13,616.46)|($216,739.79)
AMEX|($2,486.57)|($20,217.07)
Total Rm Rev|$9,949.23|$228,339.12
ADR|$216.29|$221.90|$222.55
Detail Listing
RC|ROOM CHRG REVENUE|50|$10,107.15|$231,259.82
RD|RATE DISCOUNT REV|10|($157.92)|($2,920.70)
AX|PAYMENT AMEX|6|($2,486.57)|($19,441.87)
8A|REFUND AD AMEX|1|($100.00)|($100.00)
GL ROOM TAX REV|9|CITY LODGING TAX|49|$980.63|$20,000.00
Guest 021|X3|PET CHARGE|3|$60.00|$600.00
Detail Listing Summary
GL ROOM REV|50|$10,107.15|$231,259.82
CL DB CONTROL|6|$393.02|$1,000.00
DIRECT BILLS|3|$385.36|$2,000.00
Occupied|46|1,026
Occupancy %|51.11|81.75
Occupied|46|1,026|897
"""


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reset cached settings so environment overrides apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def parser() -> AccountLineParser:
    """Parser with default options."""
    return AccountLineParser()


@pytest.fixture
def sample_report() -> str:
    """A small report covering every line shape."""
    return SAMPLE_REPORT
