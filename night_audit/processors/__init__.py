"""Processors package."""
from night_audit.processors.credit_cards import (
    CreditCardDeposit,
    CreditCardProcessor,
    CreditCardTotals,
)

__all__ = ["CreditCardDeposit", "CreditCardProcessor", "CreditCardTotals"]
