import pytest

from tickmatch.deadlock import Account, concurrent_transfer_demo, transfer_with_lock_ordering


def test_lock_ordering_transfer_preserves_money():
    a = Account(id=1, balance=10)
    b = Account(id=2, balance=10)
    assert transfer_with_lock_ordering(a, b, 3) is True
    assert a.balance == 7
    assert b.balance == 13


def test_transfer_from_higher_id_account():
    a = Account(id=1, balance=10)
    b = Account(id=2, balance=10)
    assert transfer_with_lock_ordering(b, a, 4) is True
    assert b.balance == 6
    assert a.balance == 14


def test_insufficient_funds_is_refused_without_change():
    a = Account(id=1, balance=2)
    b = Account(id=2, balance=10)
    assert transfer_with_lock_ordering(a, b, 3) is False
    assert (a.balance, b.balance) == (2, 10)


def test_transfer_to_same_account_raises():
    a = Account(id=1, balance=10)
    with pytest.raises(ValueError):
        transfer_with_lock_ordering(a, a, 1)


def test_concurrent_transfers_keep_total_balance_constant():
    assert concurrent_transfer_demo() == 2_000