"""A first-fit memory pool handing out views into one preallocated buffer."""

from __future__ import annotations

import contextlib
import logging
import threading
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)

ALIGNMENT = 16
HEADER_SIZE = 32


class MemoryManagerError(RuntimeError):
    """Raised on misuse of the memory pool."""


@dataclass
class _Block:
    offset: int
    size: int
    is_free: bool
    tag: str


def _is_released(view: Any) -> bool:
    try:
        view.nbytes
    except ValueError:
        return True
    except AttributeError:
        return False
    return False


class MemoryManager:
    """Pool allocator with a free list and first-fit search.

    Freed blocks are not coalesced with their neighbours.
    """

    _instance: Optional["MemoryManager"] = None
    _instance_lock = threading.Lock()

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pool: Optional[bytearray] = None
        self._pool_view: Optional[memoryview] = None
        self._free_list: list[_Block] = []
        self._live: dict[int, tuple[memoryview, _Block]] = {}

    @staticmethod
    def get_instance() -> "MemoryManager":
        """Return the process-wide manager."""
        with MemoryManager._instance_lock:
            if MemoryManager._instance is None:
                MemoryManager._instance = MemoryManager()
            return MemoryManager._instance

    def initialize(self, total_size: int) -> None:
        """Create the pool; a second call only warns."""
        with self._lock:
            if self._pool is not None:
                logger.warning("MemoryManager already initialized.")
                return
            if total_size < HEADER_SIZE:
                raise ValueError(f"pool of {total_size} bytes cannot hold a block header")
            self._pool = bytearray(total_size)
            self._pool_view = memoryview(self._pool)
            self._free_list = [_Block(0, total_size - HEADER_SIZE, True, "InitialPool")]
            logger.info("MemoryManager initialized with %dMB pool.", total_size // (1024 * 1024))

    def allocate(self, size: int, tag: str = "Default") -> Optional[memoryview]:
        """Return a writable view of *size* bytes, or ``None`` when the pool is exhausted."""
        with self._lock:
            if self._pool_view is None:
                raise MemoryManagerError("MemoryManager not initialized.")
            if size < 0:
                raise ValueError("allocation size must not be negative")

            aligned = (size + ALIGNMENT - 1) & ~(ALIGNMENT - 1)
            for index, block in enumerate(self._free_list):
                if not block.is_free or block.size < aligned:
                    continue
                remaining = block.size - aligned
                if remaining > HEADER_SIZE + ALIGNMENT:
                    split = _Block(
                        block.offset + HEADER_SIZE + aligned,
                        remaining - HEADER_SIZE,
                        True,
                        "SplitBlock",
                    )
                    self._free_list.insert(index + 1, split)
                    block.size = aligned
                block.is_free = False
                block.tag = tag
                del self._free_list[index]

                start = block.offset + HEADER_SIZE
                view = self._pool_view[start:start + size]
                self._live[id(view)] = (view, block)
                return view

            logger.warning("MemoryManager: Out of memory for allocation of %d bytes.", size)
            return None

    def deallocate(self, ptr: Optional[memoryview], tag: str = "Default") -> None:
        """Return a view obtained from :meth:`allocate` to the pool; the view is released."""
        if ptr is None:
            return
        with self._lock:
            entry = self._live.get(id(ptr))
            if entry is None or entry[0] is not ptr:
                if _is_released(ptr):
                    logger.warning("Double free detected for tag: FreedBlock")
                    return
                raise MemoryManagerError("pointer was not allocated from this pool")

            view, block = self._live.pop(id(ptr))
            block.is_free = True
            block.tag = "FreedBlock"
            with contextlib.suppress(BufferError):
                view.release()
            self._free_list.append(block)
            self._free_list.sort(key=lambda b: b.offset)

    def shutdown(self) -> None:
        """Release the pool and every view still handed out."""
        with self._lock:
            if self._pool is None:
                return
            for view, _ in self._live.values():
                with contextlib.suppress(BufferError):
                    view.release()
            self._live.clear()
            self._free_list.clear()
            if self._pool_view is not None:
                with contextlib.suppress(BufferError):
                    self._pool_view.release()
            self._pool_view = None
            self._pool = None
            logger.info("MemoryManager pool released.")