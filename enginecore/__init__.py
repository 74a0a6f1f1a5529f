"""Simulation engine building blocks: config, memory pool, scheduler, events and hashing."""

__version__ = "0.1.0"
__all__ = ["app", "config", "coreutils", "cryptohash", "events", "memory", "quantum", "scheduler"]