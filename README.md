# enginecore

Building blocks for a small simulation engine, plus a command that wires
them together and runs a short demonstration workload.

## Components

- `enginecore.config`: `ConfigParser` reads an INI-like `key = value` file
  into an `AppConfig` dataclass. Blank lines and lines starting with `#`
  are skipped; lines without `=` are logged as malformed and ignored.
  Lines before any section header belong to `[Core]`, which sets
  `log_file_path`, `log_level`, `worker_threads`, `memory_pool_size_mb`
  and `simulation_timestep` (numbers are read from the start of the value;
  unknown keys are ignored). Entries under `[Plugins]` land in
  `plugin_settings`: a value that reads as a number becomes a `float`,
  anything else is kept as text. Other sections are ignored.
  `ConfigParser.parse(path)` returns an `AppConfig` with `is_valid` set to
  `False` when the file cannot be opened; `ConfigParser.parse_lines(lines)`
  parses lines you already have.
- `enginecore.coreutils`: `permute_block(data, key)` shuffles a mutable
  sequence in place with a deterministic keyed permutation,
  `fast_hash(text)` returns a 64-bit FNV-style hash, and
  `initialize_legacy_handle(handle, seed)` permutes the first 128 bytes of
  a writable buffer. The `HANDLE_FLAG_*` and `ADDRESS_MASK` constants
  describe the layout of a 64-bit legacy handle.
- `enginecore.cryptohash`: `CryptoHash`, a streaming 256-bit hash for
  integrity checks (`update`, `finalize`, and the one-shot `compute`).
  Strings are hashed as UTF-8. It is not a standard algorithm and is not
  meant for security.
- `enginecore.memory`: `MemoryManager`, a first-fit pool allocator over one
  preallocated buffer. `allocate(size, tag)` returns a writable
  `memoryview` into the pool, or `None` when no free block is large
  enough; `deallocate` returns it and releases the view. Freed blocks are
  not merged with their neighbours. Using the pool before `initialize`, or
  freeing a view it did not hand out, raises `MemoryManagerError`.
- `enginecore.scheduler`: `AsyncScheduler` runs callables on worker
  threads, highest `TaskPriority` first and oldest first within a
  priority, and returns `concurrent.futures.Future` objects. `shutdown()`
  (also run on leaving a `with` block) finishes the queued tasks and then
  refuses new submissions with `RuntimeError`.
- `enginecore.events`: `EventDispatcher` delivers `BaseEvent` instances on
  worker threads to the handlers registered for exactly their class, in
  registration order. Exceptions raised by handlers are logged. Events
  still queued when `stop()` is called stay queued.
- `enginecore.quantum`: the `QuantumStateVector` and `QuantumEvent`
  dataclasses.
- `enginecore.app`: `initialize_subsystems`, `main_loop`,
  `shutdown_subsystems`, the `Subsystems` dataclass and the `main`
  command.

The memory manager, scheduler and dispatcher each have a process-wide
instance available through `get_instance()`.

## Installing

    pip install .

## Running

    enginecore [CONFIG_PATH]

The path defaults to `config.sys`. If the file cannot be opened the
command reports an error and exits with a non-zero status. Otherwise it
creates a memory pool of `memory_pool_size_mb` megabytes, starts the
dispatcher with `worker_threads` workers, submits a critical integrity
task, dispatches one `QuantumEvent` per cycle for five cycles half a
second apart, and shuts down.

A sample configuration:

    # engine settings
    [Core]
    log_level = 1
    worker_threads = 2
    memory_pool_size_mb = 64

    [Plugins]
    gravity = 9.81
    renderer = vulkan

## Library use

    from enginecore.config import ConfigParser
    from enginecore.cryptohash import CryptoHash

    config = ConfigParser().parse_lines(["[Plugins]", "gravity = 9.81"])
    assert config.plugin_settings == {"gravity": 9.81}

    digest = CryptoHash.compute("hello")
    hasher = CryptoHash()
    hasher.update(b"hel")
    hasher.update("lo")
    assert hasher.finalize() == digest

    from enginecore.scheduler import AsyncScheduler, TaskPriority

    future = AsyncScheduler.get_instance().submit(sum, TaskPriority.HIGH, [1, 2, 3])
    assert future.result() == 6

## What it does not do

There is no simulation: nothing evolves a `QuantumStateVector`, and the
events dispatched by the command carry a state with no amplitudes and only
a timestamp. The `log_file_path`, `log_level` and `simulation_timestep`
settings are parsed but nothing acts on them; messages go through the
standard `logging` module and standard output.

## Tests

    pip install ".[test]"
    pytest