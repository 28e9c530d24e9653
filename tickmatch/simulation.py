"""End-to-end synthetic load simulation for the partitioned engine.

Producer threads generate a mix of new, cancel and replace commands and
push them into partition ingress rings, while one consumer thread per
partition drains and matches concurrently. The result is a summary of
command and event volumes with rough throughput figures.
"""

from __future__ import annotations

import argparse
import logging
import os
import threading
import time
from collections import Counter
from dataclasses import dataclass, fields, replace

from tickmatch.command import CancelOrder, EngineCommand, NewOrder, OrderCommand, ReplaceOrder
from tickmatch.event import ExecutionEventKind
from tickmatch.partition import PartitionRuntime
from tickmatch.ring_buffer import RingBufferFull
from tickmatch.types import OrderType, Side, TimeInForce

logger = logging.getLogger(__name__)

_U64 = (1 << 64) - 1
_SEED_MIX = 0x9E3779B97F4A7C15
_LOG_ENV_VAR = "TICKMATCH_LOG"


@dataclass(frozen=True)
class SimulationConfig:
    """Tunables for a synthetic simulation run."""

    partitions: int = 4
    ingress_capacity_per_partition: int = 16_384
    producers: int = 2
    commands_per_producer: int = 50_000
    base_price_ticks: int = 10_000
    price_band_ticks: int = 32
    cancel_every: int = 17
    replace_every: int = 29
    enable_tracing: bool = True
    trace_first_n_commands_per_producer: int = 20
    trace_first_n_events_per_partition: int = 20


@dataclass
class SimulationReport:
    """Aggregate result of one simulation run."""

    commands_generated: int = 0
    commands_enqueued: int = 0
    commands_dropped: int = 0
    events_emitted: int = 0
    elapsed_ms: int = 0
    commands_per_sec: float = 0.0
    events_per_sec: float = 0.0
    accepted_events: int = 0
    trade_events: int = 0
    rested_events: int = 0
    canceled_events: int = 0
    rejected_events: int = 0


@dataclass
class _ProducerStats:
    generated: int = 0
    enqueued: int = 0
    dropped: int = 0


@dataclass
class _ConsumerStats:
    emitted: int = 0
    kinds: Counter | None = None

    def __post_init__(self) -> None:
        if self.kinds is None:
            self.kinds = Counter()


_logging_lock = threading.Lock()
_logging_ready = False


def _init_logging_once() -> None:
    """Attach a stderr handler to the package logger the first time it is asked for."""
    global _logging_ready
    with _logging_lock:
        if _logging_ready:
            return
        _logging_ready = True
        package_logger = logging.getLogger("tickmatch")
        level_name = os.environ.get(_LOG_ENV_VAR, "INFO").upper()
        package_logger.setLevel(getattr(logging, level_name, logging.INFO))
        if not package_logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
            package_logger.addHandler(handler)


class _Lcg:
    """Small deterministic 64-bit linear congruential generator."""

    def __init__(self, seed: int) -> None:
        self._state = seed & _U64

    def next_u64(self) -> int:
        self._state = (self._state * 6364136223846793005 + 1442695040888963407) & _U64
        return self._state


def _build_new_order_command(
    idempotency_key: int, order_id: int, rng: _Lcg, cfg: SimulationConfig
) -> OrderCommand:
    side = Side.BUY if rng.next_u64() & 1 == 0 else Side.SELL
    price_offset = rng.next_u64() % (cfg.price_band_ticks * 2)
    price_ticks = cfg.base_price_ticks + max(price_offset - cfg.price_band_ticks, 0)
    quantity = 1 + rng.next_u64() % 20
    return OrderCommand(
        idempotency_key=idempotency_key,
        order_id=order_id,
        side=side,
        order_type=OrderType.LIMIT,
        tif=TimeInForce.GTC,
        price_ticks=price_ticks,
        quantity=quantity,
    )


def _produce_commands(
    seed: int,
    cfg: SimulationConfig,
    runtime: PartitionRuntime,
    enqueue_lock: threading.Lock,
) -> _ProducerStats:
    rng = _Lcg(seed ^ _SEED_MIX)
    local_orders: list[int] = []
    stats = _ProducerStats()

    for i in range(cfg.commands_per_producer):
        stats.generated += 1
        order_id = ((seed << 48) | i) & _U64
        idem = (seed << 64) | i

        cmd: EngineCommand
        if i > 0 and i % cfg.replace_every == 0 and local_orders:
            target = local_orders[rng.next_u64() % len(local_orders)]
            new_order = _build_new_order_command(idem, order_id, rng, cfg)
            cmd = ReplaceOrder(idempotency_key=idem, cancel_order_id=target, new_order=new_order)
        elif i > 0 and i % cfg.cancel_every == 0 and local_orders:
            target = local_orders[rng.next_u64() % len(local_orders)]
            cmd = CancelOrder(idempotency_key=idem, order_id=target)
        else:
            local_orders.append(order_id)
            cmd = NewOrder(_build_new_order_command(idem, order_id, rng, cfg))

        if i < cfg.trace_first_n_commands_per_producer:
            logger.info("producer %d generated command %d: %r", seed, i, cmd)

        try:
            # Ingress rings take a single producer; several producer threads
            # may target the same partition, so pushes are serialised.
            with enqueue_lock:
                runtime.enqueue(cmd)
        except RingBufferFull:
            stats.dropped += 1
            if stats.dropped <= cfg.trace_first_n_commands_per_producer:
                logger.warning(
                    "enqueue failed: partition queue full (index=%d, dropped=%d)",
                    i,
                    stats.dropped,
                )
        else:
            stats.enqueued += 1

    return stats


def _consume_partition_loop(
    partition_idx: int,
    cfg: SimulationConfig,
    runtime: PartitionRuntime,
    producers_done: threading.Event,
) -> _ConsumerStats:
    stats = _ConsumerStats()
    while True:
        events = runtime.drain_partition(partition_idx)
        if not events:
            if producers_done.is_set():
                break
            time.sleep(0)
            continue
        for ev in events:
            stats.emitted += 1
            stats.kinds[ev.kind] += 1
            if stats.emitted <= cfg.trace_first_n_events_per_partition:
                logger.info(
                    "partition %d observed event: seq=%d order_id=%d kind=%s price=%d qty=%d",
                    partition_idx,
                    ev.seq,
                    ev.order_id,
                    ev.kind.value,
                    ev.price_ticks,
                    ev.quantity,
                )
    logger.debug("consumer %d finished: emitted=%d", partition_idx, stats.emitted)
    return stats


def run_partitioned_simulation(cfg: SimulationConfig) -> SimulationReport:
    """Run producers and partition consumers concurrently and summarise the run."""
    if cfg.producers <= 0:
        raise ValueError("producers must be > 0")
    if cfg.partitions <= 0:
        raise ValueError("partitions must be > 0")
    if cfg.price_band_ticks <= 0:
        raise ValueError("price_band_ticks must be > 0")

    if cfg.enable_tracing:
        _init_logging_once()

    logger.info(
        "simulation start: partitions=%d producers=%d commands_per_producer=%d capacity=%d",
        cfg.partitions,
        cfg.producers,
        cfg.commands_per_producer,
        cfg.ingress_capacity_per_partition,
    )

    runtime = PartitionRuntime(cfg.partitions, cfg.ingress_capacity_per_partition)
    producers_done = threading.Event()
    enqueue_lock = threading.Lock()
    started_at = time.perf_counter()

    consumer_results: list[_ConsumerStats | None] = [None] * cfg.partitions
    producer_results: list[_ProducerStats | None] = [None] * cfg.producers

    def consumer(idx: int) -> None:
        consumer_results[idx] = _consume_partition_loop(idx, cfg, runtime, producers_done)

    def producer(idx: int) -> None:
        producer_results[idx] = _produce_commands(idx, cfg, runtime, enqueue_lock)

    consumers = [
        threading.Thread(target=consumer, args=(idx,), name=f"consumer-{idx}")
        for idx in range(cfg.partitions)
    ]
    producers = [
        threading.Thread(target=producer, args=(idx,), name=f"producer-{idx}")
        for idx in range(cfg.producers)
    ]
    for thread in consumers + producers:
        thread.start()

    try:
        for thread in producers:
            thread.join()
    finally:
        producers_done.set()
    for thread in consumers:
        thread.join()

    if any(stats is None for stats in producer_results):
        raise RuntimeError("producer thread failed")
    if any(stats is None for stats in consumer_results):
        raise RuntimeError("consumer thread failed")

    generated = sum(s.generated for s in producer_results)  # type: ignore[union-attr]
    enqueued = sum(s.enqueued for s in producer_results)  # type: ignore[union-attr]
    dropped = sum(s.dropped for s in producer_results)  # type: ignore[union-attr]

    emitted = 0
    kinds: Counter = Counter()
    for stats in consumer_results:
        emitted += stats.emitted  # type: ignore[union-attr]
        kinds.update(stats.kinds)  # type: ignore[union-attr]

    # Safety net in case anything was left in a queue.
    final_drain_count = len(runtime.drain_all())
    elapsed_sec = time.perf_counter() - started_at
    rate_base = max(elapsed_sec, 1e-9)
    total_events = emitted + final_drain_count

    report = SimulationReport(
        commands_generated=generated,
        commands_enqueued=enqueued,
        commands_dropped=dropped,
        events_emitted=total_events,
        elapsed_ms=int(elapsed_sec * 1000),
        commands_per_sec=enqueued / rate_base,
        events_per_sec=total_events / rate_base,
        accepted_events=kinds[ExecutionEventKind.ACCEPTED],
        trade_events=kinds[ExecutionEventKind.TRADE],
        rested_events=kinds[ExecutionEventKind.RESTED],
        canceled_events=kinds[ExecutionEventKind.CANCELED],
        rejected_events=kinds[ExecutionEventKind.REJECTED],
    )
    logger.info("simulation end: %r", report)
    return report


def _format_report(report: SimulationReport) -> str:
    lines = ["Simulation report:"]
    lines.extend(f"  {f.name}: {getattr(report, f.name)}" for f in fields(report))
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Run a simulation with default settings, optionally overridden, and print the report."""
    defaults = SimulationConfig()
    parser = argparse.ArgumentParser(description="Run a synthetic matching-engine simulation.")
    parser.add_argument("--partitions", type=int, default=defaults.partitions)
    parser.add_argument("--producers", type=int, default=defaults.producers)
    parser.add_argument(
        "--commands-per-producer", type=int, default=defaults.commands_per_producer
    )
    parser.add_argument(
        "--capacity", type=int, default=defaults.ingress_capacity_per_partition
    )
    parser.add_argument("--quiet", action="store_true", help="disable log output")
    args = parser.parse_args(argv)

    cfg = replace(
        defaults,
        partitions=args.partitions,
        producers=args.producers,
        commands_per_producer=args.commands_per_producer,
        ingress_capacity_per_partition=args.capacity,
        enable_tracing=not args.quiet,
    )
    report = run_partitioned_simulation(cfg)
    print(_format_report(report))
    return 0