"""Account data models."""

import threading
from dataclasses import dataclass, field
from decimal import Decimal

from upi_wallet.models.ledger_entry import LedgerEntry


def normalize_account_id(account_id: str) -> str:
    """Normalize an account id for storage and comparison."""
    return account_id.strip().lower()


@dataclass
class Account:
    """Represents a wallet account as stored by the ledger.

    Only the ledger mutates ``balance`` and ``history``, and only while
    holding ``lock``.
    """

    id: str
    display_name: str
    credential: str = field(repr=False)
    balance: Decimal = Decimal("0.00")
    history: list[LedgerEntry] = field(default_factory=list)
    lock: threading.RLock = field(
        default_factory=threading.RLock, repr=False, compare=False
    )

    def append(self, entry: LedgerEntry) -> None:
        """Append an entry to the account history."""
        self.history.append(entry)

    def view(self) -> "AccountView":
        """Return a read-only handle for callers outside the ledger."""
        return AccountView(
            id=self.id,
            display_name=self.display_name,
            balance=self.balance,
        )


@dataclass(frozen=True)
class AccountView:
    """Read-only snapshot of an account handed out by the ledger."""

    id: str
    display_name: str
    balance: Decimal
