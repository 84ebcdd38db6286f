"""Data models for the wallet ledger."""

from .account import Account, AccountView, normalize_account_id
from .ledger_entry import LedgerEntry, TransferReceipt
from .exceptions import (
    LedgerError,
    DuplicateAccountError,
    AccountNotFoundError,
    InvalidAccountIdError,
    InvalidCredentialError,
    SelfTransferError,
    InvalidAmountError,
    InsufficientBalanceError,
)

__all__ = [
    "Account",
    "AccountView",
    "normalize_account_id",
    "LedgerEntry",
    "TransferReceipt",
    "LedgerError",
    "DuplicateAccountError",
    "AccountNotFoundError",
    "InvalidAccountIdError",
    "InvalidCredentialError",
    "SelfTransferError",
    "InvalidAmountError",
    "InsufficientBalanceError",
]
