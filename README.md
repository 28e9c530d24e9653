# tickmatch

A small order matching engine built around strict price-time priority,
together with a set of thread-coordination building blocks and
demonstrations. It has no dependencies outside the standard library.

## Matching engine

- **Types** (`tickmatch.types`): `Side` (`BUY`, `SELL`, with
  `opposite()`), `OrderType` (`LIMIT`, `MARKET`) and `TimeInForce`
  (`GTC`, `IOC`, `FOK`). Order ids and idempotency keys are plain
  integers.
- **Commands** (`tickmatch.command`): `OrderCommand` describes a new
  order. The engine accepts three command classes, `NewOrder`,
  `CancelOrder` and `ReplaceOrder`. Each one has an `idempotency_key`
  and a `primary_order_id()`; for a replace this is the id of the order
  being replaced.
- **Events** (`tickmatch.event`): `ExecutionEvent` is a frozen record with
  `seq`, `order_id`, `kind`, `price_ticks` and `quantity`. The `kind` is
  an `ExecutionEventKind`: `ACCEPTED`, `REJECTED`, `TRADE`, `RESTED` or
  `CANCELED`.
- **Order book** (`tickmatch.orderbook.OrderBook`):
  - Bids are served highest price first and asks lowest price first.
  - Within one price level, `RestingOrder`s are kept in ascending
    `time_priority`. A `time_priority` of `0` asks the book to assign the
    next one.
  - An index from order id to level lets `cancel_order` find an order
    without scanning the book. It returns `None` if the order has been
    filled or is absent.
- **Matcher** (`tickmatch.matcher.match_command(seq_start, book, cmd)`):
  - Emits an `ACCEPTED` event, then one `TRADE` per fill at the resting
    price, then `RESTED` for any quantity left over.
  - Leftover quantity rests on the book.
  - Returns the next sequence number together with the events.
- **Engine** (`tickmatch.engine.MatchingEngine`):
  - `process(cmd)` handles every command class. A command whose
    idempotency key has been seen before emits nothing.
  - A cancel of an order that is not resting emits a `REJECTED` event
    with price and quantity 0.
  - A replace first cancels (or rejects), then matches the new order
    with fresh time priority.
  - `on_command(order_command)` is shorthand for a `NewOrder`.
  - `drain_ingress` and `drain_command_ingress` process everything
    currently in a ring buffer.
  - `ConcurrentMatchingEngine` serialises all of these behind one lock.
- **Ingress** (`tickmatch.ring_buffer.SpscRingBuffer`):
  - A bounded FIFO for one producer and one consumer. Its capacity must
    be a power of two and at least 2.
  - `push` raises `RingBufferFull`, which carries the rejected `value`.
  - `pop` raises `RingBufferEmpty`.
  - `drain()` yields items until the buffer is empty.
- **Partitioning** (`tickmatch.partition.PartitionRuntime`):
  - Routes each command to shard `primary_order_id() % partition_count()`.
    Each shard has its own ingress buffer and engine.
  - `enqueue` raises `RingBufferFull` when the target shard is full.
  - `drain_partition(idx)` drains one shard and `drain_all()` drains
    every shard in index order. Events are sequenced per shard only.
- **Replay** (`tickmatch.replay.InMemoryReplayLog`): an append-only
  command log. `replay_into(engine)` feeds the logged commands to an
  engine. `rebuild()` returns a fresh engine and the events it produced.
- **Simulation** (`tickmatch.simulation`):
  - `run_partitioned_simulation(SimulationConfig(...))` runs producer
    threads that generate new, cancel and replace commands. It also runs
    one consumer thread per partition that drains and matches
    concurrently.
  - It returns a `SimulationReport` with command and event counts, the
    counts per event kind, the elapsed time and rough rates.
  - Commands that find their partition full are counted as dropped.

## Concurrency building blocks and demonstrations

- `tickmatch.atomics`: `AtomicInt` (`load`, `store`, `fetch_add`,
  `compare_exchange`), `atomic_counter` and `claim_once`.
- `tickmatch.atomics_deep_dive`:
  - `relaxed_counter`, `release_acquire_publication` and `cas_increment`.
  - `SpinLock`, whose `lock()` returns a context manager exposing
    `.value` while the lock is held.
  - `OnceValue.get_or_init`.
- `tickmatch.shared_state`: `RwLock` (`read()` / `write()` context
  managers, where waiting writers block new readers), `mutex_counter` and
  `rwlock_read_heavy_demo`.
- `tickmatch.thread_pool`:
  - `ThreadPool(size)` with `execute` and `shutdown`. It is also a
    context manager.
  - `execute` after shutdown raises `RuntimeError`. A job that raises
    makes `shutdown` raise `RuntimeError` after all workers are joined.
  - `thread_pool_sum_of_squares` runs a pool end to end.
- `tickmatch.channels`: `fan_in_sum`, `bounded_backpressure_demo` and
  `mpmc_worker_pool_demo`.
- `tickmatch.deadlock`: `Account` and `transfer_with_lock_ordering`,
  which locks accounts by ascending id; also `concurrent_transfer_demo`.
- `tickmatch.concurrent_dll`: `ConcurrentDll` with `push_front`,
  `push_back`, `pop_front`, `pop_back`, `head`, `tail` and `len()`. Its
  nodes are `ConcurrentDllNode` objects with `read_value`, `write_value`,
  `next` and `prev`.
- `tickmatch.green_threads`: the async functions `run_async_workers` and
  `bounded_concurrency_sum`, which use a semaphore.
- `tickmatch.basic_threads`, `tickmatch.send_sync` and
  `tickmatch.thread_lifecycle`: spawning and joining threads, handing data
  to threads, and cooperative shutdown.

## Command line

Run a partitioned simulation and print its report:

    tickmatch-sim
    tickmatch-sim --partitions 2 --producers 1 --commands-per-producer 5000 --capacity 2048 --quiet

Without `--quiet`, log output goes to stderr. The level comes from the
`TICKMATCH_LOG` environment variable and defaults to `INFO`.

Walk through the atomics demonstrations:

    tickmatch-atomics-lab

Run every concurrency demonstration in order:

    tickmatch-run-all

## Using it from Python

```python
from tickmatch.command import CancelOrder, NewOrder, OrderCommand
from tickmatch.engine import MatchingEngine
from tickmatch.types import OrderType, Side, TimeInForce

engine = MatchingEngine()
engine.process(NewOrder(OrderCommand(
    idempotency_key=1, order_id=10, side=Side.BUY,
    order_type=OrderType.LIMIT, tif=TimeInForce.GTC,
    price_ticks=100, quantity=5,
)))
events = engine.process(CancelOrder(idempotency_key=2, order_id=10))
print(events[0].kind)   # ExecutionEventKind.CANCELED
```

```python
from tickmatch.simulation import SimulationConfig, run_partitioned_simulation

cfg = SimulationConfig(
    partitions=2,
    ingress_capacity_per_partition=2048,
    producers=1,
    commands_per_producer=5_000,
    enable_tracing=False,
)
report = run_partitioned_simulation(cfg)
assert report.commands_generated == report.commands_enqueued + report.commands_dropped
```

```python
from tickmatch.ring_buffer import SpscRingBuffer

q = SpscRingBuffer(8)
q.push(10)
q.push(11)
print(q.pop(), q.pop())   # 10 11
print(len(q), q.capacity())   # 0 8
```

## What it does not do

- `OrderType` and `TimeInForce` are carried on every order, but the
  matcher does not act on them. Every order is matched as a limit order
  at its `price_ticks`, and any remainder rests on the book.
- There is no market-data feed, network gateway or persistent storage.
  The replay log lives in memory only.
- Idempotency keys are remembered for the life of an engine and are
  never expired.

## Tests

The test suite uses pytest and pytest-asyncio, which are listed in the
`test` extra:

    pip install -e .[test]
    pytest