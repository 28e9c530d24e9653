"""Partitioned runtime: commands are routed by primary order id to shards.

Each shard owns one ingress ring buffer and one engine, so ordering is
deterministic within a shard; no ordering across shards is implied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tickmatch.command import EngineCommand
from tickmatch.engine import ConcurrentMatchingEngine
from tickmatch.event import ExecutionEvent
from tickmatch.ring_buffer import SpscRingBuffer

logger = logging.getLogger(__name__)


@dataclass
class PartitionShard:
    """One partition: a bounded ingress queue and its engine."""

    ingress: SpscRingBuffer[EngineCommand]
    engine: ConcurrentMatchingEngine = field(default_factory=ConcurrentMatchingEngine)


class PartitionRuntime:
    """A fixed set of independent engine shards."""

    def __init__(self, num_partitions: int, ingress_capacity_per_partition: int) -> None:
        if num_partitions <= 0:
            raise ValueError("num_partitions must be > 0")
        self._shards = [
            PartitionShard(ingress=SpscRingBuffer(ingress_capacity_per_partition))
            for _ in range(num_partitions)
        ]

    @property
    def shards(self) -> tuple[PartitionShard, ...]:
        return tuple(self._shards)

    def partition_count(self) -> int:
        """Number of configured partitions."""
        return len(self._shards)

    def route_partition(self, cmd: EngineCommand) -> int:
        """Deterministic shard index for ``cmd``."""
        return cmd.primary_order_id() % len(self._shards)

    def enqueue(self, cmd: EngineCommand) -> None:
        """Enqueue ``cmd`` into its shard; raises ``RingBufferFull`` if full."""
        idx = self.route_partition(cmd)
        logger.debug("enqueue command to partition %d: %r", idx, cmd)
        self._shards[idx].ingress.push(cmd)

    def drain_partition(self, idx: int) -> list[ExecutionEvent]:
        """Drain one shard's ingress and return the events produced."""
        shard = self._shards[idx]
        events = shard.engine.drain_command_ingress(shard.ingress)
        logger.debug("drained partition %d: emitted=%d", idx, len(events))
        return events

    def drain_all(self) -> list[ExecutionEvent]:
        """Drain every shard in index order and concatenate the events."""
        out: list[ExecutionEvent] = []
        for idx in range(len(self._shards)):
            out.extend(self.drain_partition(idx))
        return out