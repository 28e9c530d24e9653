"""In-memory append-only command log with deterministic rebuild."""

from __future__ import annotations

from tickmatch.command import EngineCommand
from tickmatch.engine import MatchingEngine
from tickmatch.event import ExecutionEvent


class InMemoryReplayLog:
    """Append-only command history that can be replayed into an engine."""

    def __init__(self) -> None:
        self._commands: list[EngineCommand] = []

    def append(self, cmd: EngineCommand) -> None:
        """Append one command to the log."""
        self._commands.append(cmd)

    def commands(self) -> tuple[EngineCommand, ...]:
        """All logged commands in append order."""
        return tuple(self._commands)

    def replay_into(self, engine: MatchingEngine) -> list[ExecutionEvent]:
        """Process every logged command into ``engine`` in append order."""
        out: list[ExecutionEvent] = []
        for cmd in self._commands:
            out.extend(engine.process(cmd))
        return out

    def rebuild(self) -> tuple[MatchingEngine, list[ExecutionEvent]]:
        """Replay the whole log into a fresh engine."""
        engine = MatchingEngine()
        events = self.replay_into(engine)
        return engine, events