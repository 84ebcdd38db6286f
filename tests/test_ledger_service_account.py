"""Tests for Ledger account operations (create, authenticate, balance)."""

from decimal import Decimal

import pytest

from upi_wallet.models.account import AccountView
from upi_wallet.models.exceptions import (
    AccountNotFoundError,
    DuplicateAccountError,
    InvalidAccountIdError,
    InvalidCredentialError,
)
from upi_wallet.repositories.account_repo import AccountRepository
from upi_wallet.services.ledger_service import Ledger


@pytest.fixture
def account_repo():
    """Create an empty AccountRepository."""
    return AccountRepository()


@pytest.fixture
def ledger(account_repo):
    """Create a Ledger backed by the repository."""
    return Ledger(account_repo=account_repo)


def test_create_account_success(ledger, account_repo):
    """New accounts start at zero with a single creation entry."""
    view = ledger.create_account("alice@upi", "Alice", "1111")

    assert view == AccountView(id="alice@upi", display_name="Alice", balance=Decimal("0.00"))
    assert account_repo.exists("alice@upi")

    history = ledger.history("alice@upi")
    assert len(history) == 1
    assert history[0].description == "Account created"


def test_create_account_normalizes_id(ledger):
    """Ids are stored lower-cased and stripped."""
    view = ledger.create_account("  Alice@UPI ", "Alice", "1111")

    assert view.id == "alice@upi"
    assert ledger.get_balance("ALICE@upi") == Decimal("0.00")


def test_create_account_duplicate(ledger):
    """Should raise DuplicateAccountError, comparing ids case-insensitively."""
    ledger.create_account("alice@upi", "Alice", "1111")

    with pytest.raises(DuplicateAccountError):
        ledger.create_account("ALICE@UPI", "Impostor", "9999")

    # The original account keeps its PIN and history
    assert ledger.authenticate("alice@upi", "1111").display_name == "Alice"
    assert len(ledger.history("alice@upi")) == 1


def test_create_account_empty_id(ledger, account_repo):
    """Should raise InvalidAccountIdError for a blank id."""
    with pytest.raises(InvalidAccountIdError):
        ledger.create_account("   ", "Nobody", "1111")

    assert len(account_repo) == 0


def test_authenticate_success(ledger):
    """Correct id and PIN return the account view."""
    ledger.create_account("alice@upi", "Alice", "1111")

    view = ledger.authenticate("Alice@upi", "1111")

    assert view.id == "alice@upi"
    assert view.display_name == "Alice"


def test_authenticate_unknown_account(ledger):
    """Should raise AccountNotFoundError."""
    with pytest.raises(AccountNotFoundError):
        ledger.authenticate("ghost@upi", "1111")


def test_authenticate_wrong_pin(ledger):
    """Should raise InvalidCredentialError."""
    ledger.create_account("alice@upi", "Alice", "1111")

    with pytest.raises(InvalidCredentialError):
        ledger.authenticate("alice@upi", "9999")


def test_authenticate_has_no_side_effects(ledger):
    """Logging in never touches balance or history."""
    ledger.create_account("alice@upi", "Alice", "1111")
    before = ledger.history("alice@upi")

    ledger.authenticate("alice@upi", "1111")
    with pytest.raises(InvalidCredentialError):
        ledger.authenticate("alice@upi", "0000")

    assert ledger.history("alice@upi") == before
    assert ledger.get_balance("alice@upi") == Decimal("0.00")


def test_get_balance_unknown_account(ledger):
    """Should raise AccountNotFoundError."""
    with pytest.raises(AccountNotFoundError):
        ledger.get_balance("ghost@upi")


def test_has_account_and_account_ids(ledger):
    """Registered ids are listed in sorted order."""
    ledger.create_account("bob@upi", "Bob", "2222")
    ledger.create_account("alice@upi", "Alice", "1111")

    assert ledger.has_account("BOB@upi") is True
    assert ledger.has_account("carol@upi") is False
    assert ledger.account_ids() == ["alice@upi", "bob@upi"]


def test_history_limit_must_be_positive(account_repo):
    """A ledger cannot be configured with an empty history window."""
    with pytest.raises(ValueError):
        Ledger(account_repo=account_repo, history_limit=0)
