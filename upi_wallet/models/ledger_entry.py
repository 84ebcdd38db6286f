"""Ledger entry and transfer receipt models."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

ENTRY_CREATED = "created"
ENTRY_DEPOSIT = "deposit"
ENTRY_SENT = "sent"
ENTRY_RECEIVED = "received"


@dataclass(frozen=True)
class LedgerEntry:
    """One immutable record of a balance-affecting event."""

    timestamp: datetime
    description: str
    kind: str
    amount: Decimal | None = None
    counterparty: str | None = None

    @classmethod
    def account_created(cls, timestamp: datetime) -> "LedgerEntry":
        return cls(timestamp=timestamp, description="Account created", kind=ENTRY_CREATED)

    @classmethod
    def deposit(cls, timestamp: datetime, amount: Decimal) -> "LedgerEntry":
        return cls(
            timestamp=timestamp,
            description=f"Added {amount:.2f} to wallet",
            kind=ENTRY_DEPOSIT,
            amount=amount,
        )

    @classmethod
    def sent(cls, timestamp: datetime, amount: Decimal, destination: str) -> "LedgerEntry":
        return cls(
            timestamp=timestamp,
            description=f"Sent {amount:.2f} to {destination}",
            kind=ENTRY_SENT,
            amount=amount,
            counterparty=destination,
        )

    @classmethod
    def received(cls, timestamp: datetime, amount: Decimal, source: str) -> "LedgerEntry":
        return cls(
            timestamp=timestamp,
            description=f"Received {amount:.2f} from {source}",
            kind=ENTRY_RECEIVED,
            amount=amount,
            counterparty=source,
        )


@dataclass(frozen=True)
class TransferReceipt:
    """Confirmation of a committed transfer."""

    source_id: str
    destination_id: str
    amount: Decimal
    source_balance: Decimal
    description: str
