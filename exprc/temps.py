"""exprc.temps

Temporary names for three-address code: ``t0``, ``t1``, ``t2``, ...

One allocator is threaded through a parse. Sharing an allocator across several
parses keeps numbering monotonic; a fresh one starts again at ``t0``.
Not thread-safe.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

DEFAULT_TEMP_PREFIX = "t"


class TempAllocator:
    """Monotonic counter handing out temporary numbers"""

    def __init__(self, prefix: str = DEFAULT_TEMP_PREFIX):
        self.prefix = prefix
        self._next = 0

    @property
    def count(self) -> int:
        """How many temporaries have been handed out since the last reset"""
        return self._next

    def allocate(self) -> int:
        n = self._next
        self._next += 1
        return n

    def new_name(self) -> str:
        name = f"{self.prefix}{self.allocate()}"
        logger.debug("allocated temporary %s", name)
        return name

    def reset(self) -> None:
        self._next = 0
