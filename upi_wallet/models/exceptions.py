"""Custom exceptions for the wallet ledger."""


class LedgerError(Exception):
    """Base exception for all ledger-related errors."""
    pass


class DuplicateAccountError(LedgerError):
    """Raised when attempting to create an account whose id is already taken."""
    pass


class AccountNotFoundError(LedgerError):
    """Raised when an account cannot be found."""
    pass


class InvalidAccountIdError(LedgerError):
    """Raised when an account id is empty after normalization."""
    pass


class InvalidCredentialError(LedgerError):
    """Raised when the supplied PIN does not match the account's PIN."""
    pass


class SelfTransferError(LedgerError):
    """Raised when the source and destination of a transfer are the same account."""
    pass


class InvalidAmountError(LedgerError):
    """Raised when an invalid amount is provided (e.g., zero or negative)."""
    pass


class InsufficientBalanceError(LedgerError):
    """Raised when an account has insufficient balance for a transfer."""
    pass
