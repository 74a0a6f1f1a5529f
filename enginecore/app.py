"""Application entry point: bring up the subsystems, run the workload, shut down."""

from __future__ import annotations

import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from enginecore.config import AppConfig, ConfigParser
from enginecore.coreutils import LEGACY_HANDLE_SIZE, initialize_legacy_handle
from enginecore.events import EventDispatcher
from enginecore.memory import MemoryManager
from enginecore.quantum import QuantumEvent, QuantumStateVector
from enginecore.scheduler import AsyncScheduler, TaskPriority

DEFAULT_CONFIG_PATH = "config.sys"
LEGACY_HANDLE_SEED = 0xDEADBEEF


@dataclass
class Subsystems:
    """The running subsystems and the legacy handle allocated for them."""

    memory: MemoryManager
    dispatcher: EventDispatcher
    scheduler: AsyncScheduler
    legacy_handle: Optional[memoryview]


def initialize_subsystems(config: AppConfig) -> Subsystems:
    """Create the memory pool, start the dispatcher and set up the legacy handle."""
    print("Initializing core subsystems...", flush=True)

    memory = MemoryManager.get_instance()
    memory.initialize(config.memory_pool_size_mb * 1024 * 1024)

    dispatcher = EventDispatcher.get_instance()
    dispatcher.start(config.worker_threads)

    handle = memory.allocate(LEGACY_HANDLE_SIZE, "LegacyHandle")
    initialize_legacy_handle(handle, LEGACY_HANDLE_SEED)

    print("Subsystem initialization complete.", flush=True)
    return Subsystems(
        memory=memory,
        dispatcher=dispatcher,
        scheduler=AsyncScheduler.get_instance(),
        legacy_handle=handle,
    )


def _integrity_check() -> None:
    # Stands for a check for memory corruption or deadlocks.
    time.sleep(0.1)


def main_loop(subsystems: Subsystems, cycles: int = 5, interval: float = 0.5) -> list[QuantumEvent]:
    """Run the workload and return the quantum events it dispatched."""
    subsystems.scheduler.submit(_integrity_check, TaskPriority.CRITICAL)

    events = []
    for tick in range(cycles):
        print(f"Processing cycle {tick + 1}...", flush=True)
        event = QuantumEvent(tick, QuantumStateVector(timestamp=time.time_ns()))
        subsystems.dispatcher.dispatch(event)
        events.append(event)
        time.sleep(interval)
    return events


def shutdown_subsystems(subsystems: Subsystems) -> None:
    """Stop the dispatcher, free the legacy handle and release the pool."""
    print("Shutting down subsystems...", flush=True)
    subsystems.dispatcher.stop()
    subsystems.memory.deallocate(subsystems.legacy_handle, "LegacyHandle")
    subsystems.memory.shutdown()
    print("Shutdown complete.", flush=True)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the application with an optional configuration file path."""
    args = list(sys.argv[1:] if argv is None else argv)
    config_path = args[0] if args else DEFAULT_CONFIG_PATH

    config = ConfigParser().parse(config_path)
    if not config.is_valid:
        print("Fatal Error: Invalid or missing configuration file.", file=sys.stderr)
        return -1

    subsystems = initialize_subsystems(config)
    main_loop(subsystems)
    shutdown_subsystems(subsystems)
    return 0


if __name__ == "__main__":
    sys.exit(main())