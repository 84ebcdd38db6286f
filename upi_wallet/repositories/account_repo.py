"""Account repository for in-memory storage."""

import threading

from upi_wallet.models.account import Account, normalize_account_id
from upi_wallet.models.exceptions import DuplicateAccountError


class AccountRepository:
    """Repository for Account storage, scoped to one ledger instance."""

    def __init__(self):
        """Initialize the repository with an empty account map."""
        self._accounts: dict[str, Account] = {}
        self._mutex = threading.Lock()

    def create(self, account: Account) -> None:
        """
        Store a new account.

        Args:
            account: The Account object to store

        Raises:
            DuplicateAccountError: If an account with the same id already exists
        """
        with self._mutex:
            if account.id in self._accounts:
                raise DuplicateAccountError(f"Account {account.id} already exists")
            self._accounts[account.id] = account

    def find_by_id(self, account_id: str) -> Account | None:
        """
        Find an account by id.

        Args:
            account_id: The account id to search for (normalized before lookup)

        Returns:
            Account object if found, None otherwise
        """
        with self._mutex:
            return self._accounts.get(normalize_account_id(account_id))

    def exists(self, account_id: str) -> bool:
        """
        Check if an account exists.

        Args:
            account_id: The account id to check

        Returns:
            True if the account exists, False otherwise
        """
        return self.find_by_id(account_id) is not None

    def all(self) -> list[Account]:
        """Return every stored account, ordered by id."""
        with self._mutex:
            return [self._accounts[key] for key in sorted(self._accounts)]

    def __len__(self) -> int:
        with self._mutex:
            return len(self._accounts)
