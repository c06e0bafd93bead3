"""
Data structures for parsed night-audit report lines.

- AccountLine: one typed record extracted from a report line
- LineKind: which cascade rule produced a record
- PaymentMethodGroup: payment-method lines combined under a group name
- ParsingStats: diagnostic totals for one parse
- ParserConfig: immutable options for one parser instance
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator

from night_audit.exceptions import ConfigurationError

# Longest source code the whitelist extractor will try.
MAX_POSTING_CODE_LENGTH = 8

LEDGER_DESCRIPTION = "Ledger Balance"
PAYMENT_TOTAL_DESCRIPTION = "Payment Method Total"
SUMMARY_DESCRIPTION = "Summary Total"
STATISTICAL_DESCRIPTION = "Statistical Data"


class LineKind(str, Enum):
    """Line shapes recognized by the classifier, in cascade order."""
    LEDGER = "ledger"
    PAYMENT_TOTAL = "payment_total"
    SUMMARY = "summary"
    EMBEDDED = "embedded"
    GLCL_CODED = "glcl_coded"
    GLCL_SUMMARY = "glcl_summary"
    STATISTICAL = "statistical"
    CATEGORY_DETAIL = "category_detail"
    CATEGORY_SUMMARY = "category_summary"
    COMBINED = "combined"  # Synthetic consolidated payment line


@dataclass(frozen=True)
class AccountLine:
    """A parsed account line from report text."""
    source_code: str
    description: str
    amount: Decimal
    original_line: str
    line_number: int
    payment_method: Optional[str] = None
    kind: LineKind = LineKind.EMBEDDED


@dataclass
class PaymentMethodGroup:
    """Payment-method lines combined under one group name."""
    group_name: str
    payment_methods: List[str] = field(default_factory=list)
    total_amount: Decimal = Decimal("0")
    account_lines: List[AccountLine] = field(default_factory=list)


@dataclass
class ParsingStats:
    """Diagnostic statistics for one parse."""
    total_lines: int
    parsed_lines: int
    payment_method_lines: int
    total_amount: Decimal
    payment_method_amount: Decimal
    lines_by_kind: Dict[str, int] = field(default_factory=dict)


def _default_payment_groups() -> Dict[str, Tuple[str, ...]]:
    return {"Credit Cards": ("VISA/MASTER", "AMEX")}


class ParserConfig(BaseModel):
    """Options for an AccountLineParser. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    combine_payment_methods: bool = True
    payment_method_groups: Mapping[str, Tuple[str, ...]] = Field(
        default_factory=_default_payment_groups, validate_default=True
    )
    minimum_amount: Decimal = Decimal("0.01")
    include_zero_amounts: bool = False
    valid_source_codes: Optional[FrozenSet[str]] = None

    @field_validator("payment_method_groups", mode="before")
    @classmethod
    def _check_payment_method_groups(cls, value: Any) -> Any:
        if not isinstance(value, Mapping):
            raise ValueError("payment_method_groups must map group names to method lists")
        groups = {}
        for group_name, members in value.items():
            if isinstance(members, str):
                raise ValueError(f"members of group {group_name!r} must be a list, not a string")
            groups[str(group_name)] = tuple(str(member) for member in members)
        return groups

    @field_validator("payment_method_groups")
    @classmethod
    def _freeze_payment_method_groups(cls, value: Mapping[str, Tuple[str, ...]]) -> Mapping:
        return MappingProxyType(dict(value))

    @field_serializer("payment_method_groups")
    def _serialize_payment_method_groups(self, value: Mapping[str, Tuple[str, ...]]) -> Dict[str, List[str]]:
        return {group_name: list(members) for group_name, members in value.items()}

    @field_validator("minimum_amount")
    @classmethod
    def _check_minimum_amount(cls, value: Decimal) -> Decimal:
        if value < 0:
            raise ValueError("minimum_amount must not be negative")
        return value

    @field_validator("valid_source_codes", mode="before")
    @classmethod
    def _normalize_source_codes(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            raise ValueError("valid_source_codes must be a collection of codes, not a string")
        codes = set()
        for code in value:
            code = str(code).strip().upper()
            if not code or len(code) > MAX_POSTING_CODE_LENGTH:
                raise ValueError(
                    f"source code {code!r} must be 1-{MAX_POSTING_CODE_LENGTH} characters"
                )
            codes.add(code)
        return frozenset(codes)

    @classmethod
    def build(cls, **options: Any) -> "ParserConfig":
        """
        Build a config, reporting invalid options as ConfigurationError.

        Args:
            **options: ParserConfig field values.

        Returns:
            Validated ParserConfig.
        """
        try:
            return cls(**options)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid parser configuration",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e

    @classmethod
    def from_settings(cls, settings: Any, **overrides: Any) -> "ParserConfig":
        """Build a config from application settings, with per-call overrides."""
        options: Dict[str, Any] = {
            "minimum_amount": settings.minimum_amount,
            "include_zero_amounts": settings.include_zero_amounts,
            "combine_payment_methods": settings.combine_payment_methods,
        }
        options.update(overrides)
        return cls.build(**options)
