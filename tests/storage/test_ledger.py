"""Unit tests for LoanLedger accounting."""

import pytest

from cowmap.core.loan import LoanId
from cowmap.storage.ledger import LoanLedger


@pytest.fixture
def ledger():
    return LoanLedger(lender=7)


def test_lend_issues_unique_loans_stamped_with_lender(ledger):
    first = ledger.lend("a")
    second = ledger.lend("a")

    assert first != second
    assert first.is_from(7)
    assert second.lender == 7


def test_outstanding_counts_per_key_and_total(ledger):
    ledger.lend("a")
    ledger.lend("a")
    ledger.lend("b")

    assert ledger.outstanding("a") == 2
    assert ledger.outstanding("b") == 1
    assert ledger.outstanding("missing") == 0
    assert ledger.outstanding() == 3
    assert ledger.lent_keys() == frozenset({"a", "b"})


def test_release_returns_loan(ledger):
    loan = ledger.lend("a")
    assert ledger.is_active(loan)

    ledger.release(loan)

    assert not ledger.is_active(loan)
    assert ledger.outstanding("a") == 0
    assert ledger.lent_keys() == frozenset()


def test_release_is_idempotent(ledger):
    """Releasing twice must not drive counts negative."""
    loan = ledger.lend("a")
    other = ledger.lend("a")

    ledger.release(loan)
    ledger.release(loan)

    assert ledger.outstanding("a") == 1
    assert ledger.is_active(other)


def test_release_handles_none_key(ledger):
    """None is a valid map key and must be tracked like any other."""
    loan = ledger.lend(None)
    assert ledger.outstanding(None) == 1

    ledger.release(loan)
    assert ledger.outstanding(None) == 0


def test_release_rejects_foreign_loan(ledger):
    with pytest.raises(ValueError, match="lender 8"):
        ledger.release(LoanId(lender=8, serial=0))


def test_default_lender_ids_are_distinct():
    assert LoanLedger().lender != LoanLedger().lender
