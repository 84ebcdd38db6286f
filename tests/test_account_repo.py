"""Tests for AccountRepository."""

import pytest

from upi_wallet.models.account import Account
from upi_wallet.models.exceptions import DuplicateAccountError
from upi_wallet.repositories.account_repo import AccountRepository


@pytest.fixture
def account_repo():
    """Create an empty AccountRepository."""
    return AccountRepository()


def test_create_account(account_repo):
    """Create account, then find by id."""
    account = Account(id="alice@upi", display_name="Alice", credential="1111")

    account_repo.create(account)

    found = account_repo.find_by_id("alice@upi")
    assert found is account
    assert len(account_repo) == 1


def test_create_duplicate_account(account_repo):
    """Should raise DuplicateAccountError for an id that is already stored."""
    account_repo.create(Account(id="alice@upi", display_name="Alice", credential="1111"))

    duplicate = Account(id="alice@upi", display_name="Other Alice", credential="2222")
    with pytest.raises(DuplicateAccountError):
        account_repo.create(duplicate)

    # Original account is untouched
    assert account_repo.find_by_id("alice@upi").display_name == "Alice"
    assert len(account_repo) == 1


def test_find_by_id_not_found(account_repo):
    """Should return None."""
    assert account_repo.find_by_id("nobody@upi") is None


def test_find_by_id_normalizes(account_repo):
    """Lookups are case-insensitive and ignore surrounding whitespace."""
    account_repo.create(Account(id="alice@upi", display_name="Alice", credential="1111"))

    assert account_repo.find_by_id("  ALICE@upi ") is not None


def test_exists(account_repo):
    """Check account exists/doesn't exist."""
    assert account_repo.exists("alice@upi") is False

    account_repo.create(Account(id="alice@upi", display_name="Alice", credential="1111"))

    assert account_repo.exists("alice@upi") is True
    assert account_repo.exists("bob@upi") is False


def test_all_is_sorted_by_id(account_repo):
    """all() returns accounts ordered by id."""
    for account_id in ("carol@upi", "alice@upi", "bob@upi"):
        account_repo.create(Account(id=account_id, display_name=account_id, credential="0000"))

    assert [a.id for a in account_repo.all()] == ["alice@upi", "bob@upi", "carol@upi"]
