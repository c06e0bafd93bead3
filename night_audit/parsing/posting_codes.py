"""
Posting-code extraction for delimiter-poor report text.

When a short code runs straight into its description ("91CITY TAX"), the
whitelist of valid codes decides where the code ends. The longest valid
prefix wins, so "91" is preferred over "9" when both are valid.
"""
import re
from dataclasses import dataclass
from typing import AbstractSet, Optional

from night_audit.parsing.models import MAX_POSTING_CODE_LENGTH

FALLBACK_CODE_PATTERN = re.compile(r"^([A-Z0-9]{1,2})", re.IGNORECASE)


@dataclass(frozen=True)
class PostingCode:
    """A posting code split from the text that follows it."""
    code: str
    remaining_text: str


def extract_valid_posting_code(
    text: str,
    whitelist: Optional[AbstractSet[str]] = None,
) -> Optional[PostingCode]:
    """
    Split a posting code from the start of ``text``.

    Args:
        text: Candidate text starting with a code.
        whitelist: Valid codes, uppercased. Without one, the first one or two
            alphanumeric characters are taken as the code.

    Returns:
        PostingCode, or None when no valid code starts the text.
    """
    trimmed = text.strip()

    if not whitelist:
        match = FALLBACK_CODE_PATTERN.match(trimmed)
        if not match:
            return None
        code = match.group(1)
        return PostingCode(code=code, remaining_text=trimmed[len(code):].strip())

    for length in range(min(MAX_POSTING_CODE_LENGTH, len(trimmed)), 0, -1):
        candidate = trimmed[:length].upper()
        if candidate in whitelist:
            return PostingCode(code=candidate, remaining_text=trimmed[length:].strip())

    return None
