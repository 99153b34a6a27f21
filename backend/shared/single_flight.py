"""
Keyed single-flight guard.

At most one holder per key at a time. Acquisition never waits: a second
caller for a held key is refused immediately, so duplicate submissions are
rejected rather than queued.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Hashable


class SingleFlight:
    """Set of keys with an operation currently in flight."""

    def __init__(self) -> None:
        self._locked: set[Hashable] = set()

    def is_locked(self, key: Hashable) -> bool:
        return key in self._locked

    @property
    def locked_keys(self) -> frozenset:
        return frozenset(self._locked)

    @asynccontextmanager
    async def guard(
        self,
        key: Hashable,
        on_busy: Callable[[Hashable], Exception],
    ) -> AsyncIterator[None]:
        """
        Hold ``key`` for the duration of the block.

        The membership check and the insert happen before the first await,
        so on a single event loop no two coroutines can both enter.

        Args:
            key: Identifier of the resource being mutated
            on_busy: Factory for the exception raised when key is already held

        Raises:
            Whatever ``on_busy(key)`` returns, if the key is already held
        """
        if key in self._locked:
            raise on_busy(key)
        self._locked.add(key)
        try:
            yield
        finally:
            self._locked.discard(key)
