"""Price-time-priority matching engine, partitioned runtime, replay log,
synthetic simulation, and thread-coordination primitives and demos."""

__version__ = "0.1.0"