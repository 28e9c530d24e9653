import pytest

from tickmatch.command import CancelOrder, NewOrder, OrderCommand
from tickmatch.event import ExecutionEventKind
from tickmatch.partition import PartitionRuntime
from tickmatch.ring_buffer import RingBufferFull
from tickmatch.types import OrderType, Side, TimeInForce


def new(idem, order_id, side=Side.BUY, price=100, qty=1):
    return NewOrder(
        OrderCommand(
            idempotency_key=idem,
            order_id=order_id,
            side=side,
            order_type=OrderType.LIMIT,
            tif=TimeInForce.GTC,
            price_ticks=price,
            quantity=qty,
        )
    )


def test_route_is_stable_for_same_order():
    rt = PartitionRuntime(4, 64)
    cmd = new(1, 123)
    assert rt.route_partition(cmd) == rt.route_partition(cmd)
    assert rt.route_partition(cmd) == 3


def test_partition_count():
    assert PartitionRuntime(3, 8).partition_count() == 3


def test_zero_partitions_rejected():
    with pytest.raises(ValueError):
        PartitionRuntime(0, 8)


def test_non_power_of_two_capacity_rejected():
    with pytest.raises(ValueError):
        PartitionRuntime(2, 10)


def test_cancel_routes_to_same_partition_as_new_order():
    rt = PartitionRuntime(4, 16)
    rt.enqueue(new(1, 9, price=100, qty=5))
    rt.enqueue(CancelOrder(idempotency_key=2, order_id=9))
    events = rt.drain_partition(rt.route_partition(new(1, 9)))
    assert [e.kind for e in events] == [
        ExecutionEventKind.ACCEPTED,
        ExecutionEventKind.RESTED,
        ExecutionEventKind.CANCELED,
    ]


def test_enqueue_full_queue_raises_with_command():
    rt = PartitionRuntime(1, 2)
    rt.enqueue(new(1, 1))
    rt.enqueue(new(2, 2))
    rejected = new(3, 3)
    with pytest.raises(RingBufferFull) as info:
        rt.enqueue(rejected)
    assert info.value.value == rejected


def test_drain_all_collects_every_partition():
    rt = PartitionRuntime(4, 16)
    for oid in range(1, 9):
        rt.enqueue(new(oid, oid))
    events = rt.drain_all()
    assert sum(e.kind is ExecutionEventKind.ACCEPTED for e in events) == 8
    assert len(events) == 16
    assert rt.drain_all() == []


def test_partitions_sequence_independently():
    rt = PartitionRuntime(2, 16)
    rt.enqueue(new(1, 2))
    rt.enqueue(new(2, 3))
    first = rt.drain_partition(0)
    second = rt.drain_partition(1)
    assert [e.seq for e in first] == [1, 2]
    assert [e.seq for e in second] == [1, 2]
    assert {e.order_id for e in first} == {2}
    assert {e.order_id for e in second} == {3}