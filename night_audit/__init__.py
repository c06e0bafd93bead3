"""
Night-audit report parser.

Converts the extracted text of hotel night-audit reports into typed account
lines for journal-entry generation.
"""

from night_audit.parsing import AccountLine, AccountLineParser, ParserConfig

__version__ = "1.0.0"
__all__ = [
    "AccountLine",
    "AccountLineParser",
    "ParserConfig",
]
