"""Ledger service for balances, transfers and account history."""

import hmac
import logging
from contextlib import ExitStack, contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterator

from upi_wallet.amounts import add_amounts, format_amount, to_amount
from upi_wallet.models.account import Account, AccountView, normalize_account_id
from upi_wallet.models.exceptions import (
    AccountNotFoundError,
    DuplicateAccountError,
    InsufficientBalanceError,
    InvalidAccountIdError,
    InvalidAmountError,
    InvalidCredentialError,
    LedgerError,
    SelfTransferError,
)
from upi_wallet.models.ledger_entry import LedgerEntry, TransferReceipt
from upi_wallet.repositories.account_repo import AccountRepository

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


class Ledger:
    """Single owner of accounts, balances and history."""

    def __init__(
        self,
        account_repo: AccountRepository,
        history_limit: int = 10,
        verify_credential_first: bool = False,
        max_amount: Decimal | int = 1_000_000_000_000,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Initialize the Ledger with an account store.

        Args:
            account_repo: Repository holding the accounts of this ledger
            history_limit: Default number of entries returned by history()
            verify_credential_first: Check the PIN before amount and funds
                during a transfer instead of after them
            max_amount: Maximum amount accepted by deposit() and transfer()
            clock: Callable returning the timestamp for new entries
        """
        if history_limit < 1:
            raise ValueError(f"history_limit must be at least 1, got {history_limit}")
        self._account_repo = account_repo
        self._history_limit = history_limit
        self._verify_credential_first = verify_credential_first
        self._max_amount = Decimal(max_amount)
        self._clock = clock or _local_now

    @property
    def history_limit(self) -> int:
        return self._history_limit

    def _get_account(self, account_id: str) -> Account:
        account = self._account_repo.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(f"Account {normalize_account_id(account_id)} not found")
        return account

    @contextmanager
    def _locked(self, *accounts: Account) -> Iterator[None]:
        # Sorted by id so two transfers crossing in opposite directions
        # always acquire locks in the same order.
        with ExitStack() as stack:
            for account in sorted(accounts, key=lambda a: a.id):
                stack.enter_context(account.lock)
            yield

    @staticmethod
    def _check_credential(account: Account, credential: str) -> None:
        if not hmac.compare_digest(account.credential.encode(), str(credential).encode()):
            raise InvalidCredentialError(f"Incorrect PIN for account {account.id}")

    def _positive_amount(self, amount) -> Decimal:
        value = to_amount(amount)
        if value <= 0:
            raise InvalidAmountError(f"Amount must be positive, got {format_amount(value)}")
        if value > self._max_amount:
            raise InvalidAmountError(
                f"Amount {format_amount(value)} exceeds maximum allowed amount of "
                f"{format_amount(self._max_amount)}"
            )
        return value

    def create_account(self, account_id: str, display_name: str, credential: str) -> AccountView:
        """
        Register a new account with a zero balance.

        Args:
            account_id: The account id (normalized to lower case)
            display_name: The account holder's name
            credential: The account PIN, opaque to the ledger

        Returns:
            A read-only view of the created account

        Raises:
            InvalidAccountIdError: If the id is empty
            DuplicateAccountError: If an account with this id already exists
        """
        normalized = normalize_account_id(account_id)
        if not normalized:
            raise InvalidAccountIdError("Account id cannot be empty")

        account = Account(id=normalized, display_name=display_name, credential=credential)
        account.append(LedgerEntry.account_created(self._clock()))
        try:
            self._account_repo.create(account)
        except DuplicateAccountError:
            logger.warning("create_account rejected: %s already exists", normalized)
            raise

        logger.info("Account %s created", normalized)
        return account.view()

    def authenticate(self, account_id: str, credential: str) -> AccountView:
        """
        Check an id and PIN pair.

        Returns:
            A read-only view of the account

        Raises:
            AccountNotFoundError: If the account doesn't exist
            InvalidCredentialError: If the PIN does not match
        """
        try:
            account = self._get_account(account_id)
            self._check_credential(account, credential)
        except LedgerError as err:
            logger.warning("authenticate rejected for %s: %s",
                           normalize_account_id(account_id), type(err).__name__)
            raise
        with self._locked(account):
            return account.view()

    def get_balance(self, account_id: str) -> Decimal:
        """
        Get the current balance of an account.

        Raises:
            AccountNotFoundError: If the account doesn't exist
        """
        account = self._get_account(account_id)
        with self._locked(account):
            return account.balance

    def deposit(self, account_id: str, amount) -> Decimal:
        """
        Add funds to an account.

        Args:
            account_id: The account to credit
            amount: The amount to add (must be positive)

        Returns:
            The new balance

        Raises:
            AccountNotFoundError: If the account doesn't exist
            InvalidAmountError: If the amount is zero, negative, malformed,
                above the maximum, or would overflow the balance
        """
        account = self._get_account(account_id)
        try:
            value = self._positive_amount(amount)
            with self._locked(account):
                new_balance = add_amounts(account.balance, value)
                account.balance = new_balance
                account.append(LedgerEntry.deposit(self._clock(), value))
        except InvalidAmountError:
            logger.warning("deposit rejected for %s: InvalidAmountError", account.id)
            raise

        logger.info("Deposited %s to %s", format_amount(value), account.id)
        return new_balance

    def transfer(
        self, source_id: str, destination_id: str, amount, credential: str
    ) -> TransferReceipt:
        """
        Move funds from one account to another.

        Checks run in this order: self transfer, destination exists,
        amount positive, sufficient funds, PIN. With
        ``verify_credential_first`` the PIN check runs right after the
        destination check. Any failure leaves both accounts unchanged.

        Args:
            source_id: The account to debit
            destination_id: The account to credit
            amount: The amount to move (must be positive)
            credential: The source account's PIN

        Returns:
            A TransferReceipt with the source account's new balance

        Raises:
            AccountNotFoundError: If either account doesn't exist
            SelfTransferError: If source and destination are the same
            InvalidAmountError: If the amount is zero, negative, malformed,
                above the maximum, or would overflow the destination balance
            InsufficientBalanceError: If the source cannot cover the amount
            InvalidCredentialError: If the PIN does not match
        """
        source = self._get_account(source_id)
        try:
            receipt = self._transfer(source, normalize_account_id(destination_id),
                                     amount, credential)
        except LedgerError as err:
            logger.warning("transfer rejected from %s to %s: %s",
                           source.id, normalize_account_id(destination_id),
                           type(err).__name__)
            raise

        logger.info("Transferred %s from %s to %s",
                    format_amount(receipt.amount), receipt.source_id, receipt.destination_id)
        return receipt

    def _transfer(
        self, source: Account, destination_id: str, amount, credential: str
    ) -> TransferReceipt:
        if destination_id == source.id:
            raise SelfTransferError("Cannot send to yourself")

        destination = self._account_repo.find_by_id(destination_id)
        if destination is None:
            raise AccountNotFoundError(f"Recipient {destination_id} not found")

        if self._verify_credential_first:
            self._check_credential(source, credential)

        value = self._positive_amount(amount)

        with self._locked(source, destination):
            if value > source.balance:
                raise InsufficientBalanceError(
                    f"Insufficient balance: {format_amount(source.balance)} available, "
                    f"{format_amount(value)} requested"
                )
            if not self._verify_credential_first:
                self._check_credential(source, credential)

            source_balance = add_amounts(source.balance, -value)
            destination_balance = add_amounts(destination.balance, value)

            now = self._clock()
            sent = LedgerEntry.sent(now, value, destination.id)
            received = LedgerEntry.received(now, value, source.id)

            source.balance = source_balance
            destination.balance = destination_balance
            source.append(sent)
            destination.append(received)

            return TransferReceipt(
                source_id=source.id,
                destination_id=destination.id,
                amount=value,
                source_balance=source.balance,
                description=sent.description,
            )

    def history(self, account_id: str, limit: int | None = None) -> list[LedgerEntry]:
        """
        Get the most recent entries of an account, newest first.

        Args:
            account_id: The account id
            limit: Maximum number of entries (defaults to the ledger's history_limit)

        Returns:
            Up to ``limit`` entries in reverse chronological order

        Raises:
            AccountNotFoundError: If the account doesn't exist
            ValueError: If limit is less than 1
        """
        if limit is None:
            limit = self._history_limit
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")

        account = self._get_account(account_id)
        with self._locked(account):
            recent = account.history[-limit:]
        return list(reversed(recent))

    def total_balance(self) -> Decimal:
        """Sum of all balances, read as one consistent snapshot."""
        accounts = self._account_repo.all()
        with self._locked(*accounts):
            return sum((account.balance for account in accounts), Decimal("0.00"))

    def has_account(self, account_id: str) -> bool:
        return self._account_repo.exists(account_id)

    def account_ids(self) -> list[str]:
        """Ids of all registered accounts, sorted."""
        return [account.id for account in self._account_repo.all()]
