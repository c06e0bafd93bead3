"""
Card-brand detection for report lines.
"""
import re
from typing import Optional, Tuple

# A brand token must not touch another letter on either side. Pipes, spaces,
# slashes, digits and line ends all count as boundaries.
_BOUNDARY_START = r"(?<![A-Za-z])"
_BOUNDARY_END = r"(?![A-Za-z])"


def _brand(alternatives: str) -> re.Pattern:
    return re.compile(_BOUNDARY_START + "(?:" + alternatives + ")" + _BOUNDARY_END, re.IGNORECASE)


# Priority order: first match wins.
PAYMENT_METHOD_PATTERNS: Tuple[Tuple[str, re.Pattern], ...] = (
    ("VISA", _brand(r"VISA\s*CARD|VISA")),
    ("MASTER", _brand(r"MASTER\s*CARD|MASTERCARD|MASTER|MC")),
    ("DISCOVER", _brand(r"DISCOVER")),
    ("AMEX", _brand(r"AMERICAN\s*EXPRESS|AMEX")),
)


def detect_payment_method(line: str) -> Optional[str]:
    """
    Detect the card brand mentioned in a line.

    Args:
        line: Raw report line.

    Returns:
        "VISA", "MASTER", "DISCOVER", "AMEX", or None.
    """
    if not line:
        return None
    for method, pattern in PAYMENT_METHOD_PATTERNS:
        if pattern.search(line):
            return method
    return None
