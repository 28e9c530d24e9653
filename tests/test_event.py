import dataclasses

import pytest

from tickmatch.event import ExecutionEvent, ExecutionEventKind


def _event(**overrides):
    fields = dict(
        seq=1201,
        order_id=9,
        kind=ExecutionEventKind.TRADE,
        price_ticks=101,
        quantity=2,
    )
    fields.update(overrides)
    return ExecutionEvent(**fields)


def test_fields_are_kept():
    ev = _event()
    assert (ev.seq, ev.order_id, ev.kind, ev.price_ticks, ev.quantity) == (
        1201,
        9,
        ExecutionEventKind.TRADE,
        101,
        2,
    )


def test_events_are_immutable():
    ev = _event()
    with pytest.raises(dataclasses.FrozenInstanceError):
        ev.quantity = 5
    assert ev.quantity == 2


def test_equal_events_compare_and_hash_equal():
    a = _event()
    b = _event()
    assert a == b
    assert len({a, b}) == 1


def test_differing_kind_breaks_equality():
    assert _event() != _event(kind=ExecutionEventKind.RESTED)
    assert _event(kind=ExecutionEventKind.RESTED).kind is ExecutionEventKind.RESTED


def test_replace_produces_new_event_leaving_original():
    ev = _event()
    later = dataclasses.replace(ev, seq=ev.seq + 1)
    assert later.seq == ev.seq + 1
    assert ev.seq == 1201


def test_kind_looked_up_by_name_is_kept_on_event():
    ev = _event(kind=ExecutionEventKind["CANCELED"])
    assert ev.kind is ExecutionEventKind.CANCELED
    assert ev == _event(kind=ExecutionEventKind.CANCELED)