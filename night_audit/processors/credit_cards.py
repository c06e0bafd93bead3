"""
Credit card deposit processor.

Builds deposit records from the card-brand totals printed on the report's
summary page. VISA/MASTER and DISCOVER settle together and become one
deposit; AMEX settles separately.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

import structlog

from night_audit.config import get_settings
from night_audit.exceptions import CreditCardProcessingError
from night_audit.parsing.models import AccountLine

logger = structlog.get_logger(__name__)

DEPOSIT_TARGET_DESCRIPTION = "Cash in Bank : Credit Card Deposits"

# Card summaries match by prefix (VISA/MASTER, MASTERCARD); transaction
# codes match exactly so that e.g. "DIRECT BILLS" is kept.
CREDIT_CARD_BRANDS = ("VISA", "MASTER", "AMEX", "DISCOVER")
CREDIT_CARD_TRANSACTION_CODES = frozenset({"VS", "AV", "AX", "7V", "DI"})


@dataclass
class CreditCardTotals:
    """Card-brand totals from the summary page."""
    visa_master: Decimal = Decimal("0")
    amex: Decimal = Decimal("0")
    discover: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return self.visa_master + self.amex + self.discover


@dataclass(frozen=True)
class CreditCardDeposit:
    """A deposit record for the journal entry."""
    source_code: str
    source_description: str
    amount: Decimal
    target_code: str
    target_description: str
    payment_method: str


class CreditCardProcessor:
    """Replaces card transaction lines with deposit records."""

    def extract_card_totals(self, account_lines: Sequence[AccountLine]) -> CreditCardTotals:
        """
        Read card-brand totals from parsed lines.

        Args:
            account_lines: Parsed account lines.

        Returns:
            Absolute totals per brand; a later line overrides an earlier one.
        """
        totals = CreditCardTotals()

        for line in account_lines:
            source_code = line.source_code.upper().strip()
            amount = abs(line.amount)

            if source_code in ("VISA/MASTER", "VISA"):
                totals.visa_master = amount
            elif source_code == "AMEX":
                totals.amex = amount
            elif source_code == "DISCOVER":
                totals.discover = amount

        logger.info(
            "Extracted credit card totals",
            visa_master=str(totals.visa_master),
            amex=str(totals.amex),
            discover=str(totals.discover),
            total_cards=str(totals.total),
        )

        return totals

    def remove_card_transactions(self, account_lines: Sequence[AccountLine]) -> List[AccountLine]:
        """Drop card summary and card transaction lines."""
        remaining = []
        for line in account_lines:
            source_code = line.source_code.upper().strip()
            if source_code in CREDIT_CARD_TRANSACTION_CODES or source_code.startswith(CREDIT_CARD_BRANDS):
                logger.debug(
                    "Removing credit card transaction",
                    source_code=source_code,
                    description=line.description,
                    amount=str(line.amount),
                )
                continue
            remaining.append(line)
        return remaining

    def build_deposit_records(
        self,
        totals: CreditCardTotals,
        deposit_account: str,
    ) -> List[CreditCardDeposit]:
        """
        Build deposit records from card totals.

        Args:
            totals: Card-brand totals.
            deposit_account: Target account for the deposits.

        Returns:
            Up to two deposits: VISA/MASTER + DISCOVER, then AMEX.
        """
        deposits: List[CreditCardDeposit] = []

        combined = totals.visa_master + totals.discover
        if combined > 0:
            deposits.append(CreditCardDeposit(
                source_code="VISA/MASTER",
                source_description="VISA/MASTER Credit Card Deposit",
                amount=combined,
                target_code=deposit_account,
                target_description=DEPOSIT_TARGET_DESCRIPTION,
                payment_method="VISA/MASTER",
            ))

        if totals.amex > 0:
            deposits.append(CreditCardDeposit(
                source_code="AMEX",
                source_description="AMEX Credit Card Deposit",
                amount=totals.amex,
                target_code=deposit_account,
                target_description=DEPOSIT_TARGET_DESCRIPTION,
                payment_method="AMEX",
            ))

        return deposits

    def process(
        self,
        account_lines: Sequence[AccountLine],
        deposit_account: Optional[str] = None,
    ) -> Tuple[List[AccountLine], List[CreditCardDeposit]]:
        """
        Replace card lines with deposit records.

        Args:
            account_lines: Parsed account lines.
            deposit_account: Target account. Defaults to the configured
                ``credit_card_deposit_account``.

        Returns:
            Tuple of (lines without card transactions, deposit records).

        Raises:
            CreditCardProcessingError: If no deposit account is available.
        """
        if deposit_account is None:
            deposit_account = get_settings().credit_card_deposit_account
        if not deposit_account or not deposit_account.strip():
            raise CreditCardProcessingError("No credit card deposit account configured")

        totals = self.extract_card_totals(account_lines)
        remaining = self.remove_card_transactions(account_lines)
        deposits = self.build_deposit_records(totals, deposit_account.strip())

        logger.info(
            "Processed credit card deposits",
            original_count=len(account_lines),
            remaining_count=len(remaining),
            deposit_count=len(deposits),
            total_deposit=str(sum((d.amount for d in deposits), Decimal("0"))),
        )

        return remaining, deposits
