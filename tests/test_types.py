import pytest

from tickmatch.types import OrderType, Side, TimeInForce


def test_buy_opposite_is_sell():
    assert Side.BUY.opposite() is Side.SELL


def test_sell_opposite_is_buy():
    assert Side.SELL.opposite() is Side.BUY


def test_opposite_is_an_involution():
    assert Side.BUY.opposite().opposite() is Side.BUY
    assert Side.SELL.opposite().opposite() is Side.SELL
    assert Side.BUY.opposite() is not Side.BUY


@pytest.mark.parametrize("enum_cls", [Side, OrderType, TimeInForce])
def test_members_round_trip_through_value(enum_cls):
    for member in enum_cls:
        assert enum_cls(member.value) is member


def test_unknown_value_is_rejected():
    with pytest.raises(ValueError):
        Side("hold")