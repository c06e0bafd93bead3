"""
Section tracking for night-audit reports.

"Detail Listing" and "Detail Listing Summary" headers change how
delimiter-poor GL/CL lines are read until the next header.
"""
import re
from enum import Enum
from typing import Tuple


class SectionState(str, Enum):
    """Report section the parser is currently in."""
    UNKNOWN = "unknown"
    DETAIL_LISTING = "detail-listing"
    DETAIL_LISTING_SUMMARY = "detail-listing-summary"


DETAIL_LISTING_SUMMARY_PATTERN = re.compile(r"Detail\s+Listing\s+Summary", re.IGNORECASE)
DETAIL_LISTING_PATTERN = re.compile(r"^Detail\s+Listing\s*$", re.IGNORECASE)


def next_section(line: str, state: SectionState) -> Tuple[SectionState, bool]:
    """
    Compute the section state after ``line``.

    Args:
        line: Trimmed report line.
        state: Current section state.

    Returns:
        Tuple of (new state, whether the line was a header and is consumed).
    """
    if DETAIL_LISTING_SUMMARY_PATTERN.search(line):
        return SectionState.DETAIL_LISTING_SUMMARY, True
    if DETAIL_LISTING_PATTERN.match(line):
        return SectionState.DETAIL_LISTING, True
    return state, False
