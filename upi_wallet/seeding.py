"""Sample data for a fresh ledger."""

import logging
from decimal import Decimal

from upi_wallet.services.ledger_service import Ledger

logger = logging.getLogger(__name__)

SAMPLE_ACCOUNT_ID = "sample@upi"
SAMPLE_NAME = "SampleUser"
SAMPLE_PIN = "1234"
SAMPLE_BALANCE = Decimal("1000.00")


def seed_sample_data(ledger: Ledger) -> None:
    """Register the sample account and fund it through a regular deposit.

    The account ends up with two history entries, "Account created" and
    "Added 1000.00 to wallet", instead of a single seed entry.
    """
    ledger.create_account(SAMPLE_ACCOUNT_ID, SAMPLE_NAME, SAMPLE_PIN)
    ledger.deposit(SAMPLE_ACCOUNT_ID, SAMPLE_BALANCE)
    logger.info("Seeded sample account %s", SAMPLE_ACCOUNT_ID)
