"""Pool of objects released together when the event loop becomes idle.

Items added to a pool are kept alive until the next iteration of the event
loop, at which point their destroy callbacks are invoked in the order the
items were added. Each thread has its own default pool.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections import deque
from typing import Any, Callable, Deque, Optional, Tuple

__all__ = ["IdlePool", "get_default", "release_default"]

_log = logging.getLogger(__name__)

DestroyFunc = Callable[[Any], Any]


class IdlePool:
    """Holds items until the event loop gets idle, then destroys them.

    ``loop`` is the event loop that drains the pool. If it is not given, the
    loop running at the time an item is added is used; without a running
    loop the items stay in the pool until ``drain`` is called.

    Draining is only done by the thread that created the pool. If the loop
    wakes the pool up on another thread, the items are left alone.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop
        self._thread = threading.get_ident()
        self._items: Deque[Tuple[Any, Optional[DestroyFunc]]] = deque()
        self._handle: Optional[asyncio.Handle] = None
        self._closed = False

    def __repr__(self) -> str:
        return f"IdlePool(items={len(self._items)}, closed={self._closed})"

    def __len__(self) -> int:
        return len(self._items)

    def __enter__(self) -> "IdlePool":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.destroy()

    def add(self, item: Any, destroy: Optional[DestroyFunc] = None) -> Any:
        """Queue ``item`` for destruction and return it.

        ``destroy`` is called with the item when the pool is drained. Without
        it the pool just keeps a reference to the item until then.
        """
        if self._closed:
            raise RuntimeError("the pool has been destroyed")
        self._items.append((item, destroy))
        if self._handle is None:
            self._schedule()
        return item

    def _schedule(self) -> None:
        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                return
        if loop.is_closed():
            return
        self._handle = loop.call_soon_threadsafe(self._idle)

    def _idle(self) -> None:
        self._handle = None
        if threading.get_ident() == self._thread:
            self.drain()
        else:
            _log.debug("idle pool woken up on a wrong thread")

    def drain(self) -> None:
        """Destroy every item now, including items added while draining."""
        while self._items:
            batch = list(self._items)
            self._items.clear()
            for item, destroy in batch:
                if destroy is not None:
                    destroy(item)
        if self._handle is not None:
            handle, self._handle = self._handle, None
            handle.cancel()

    def destroy(self) -> None:
        """Drain the pool and refuse any further items."""
        self.drain()
        self._closed = True


_local = threading.local()


def get_default() -> IdlePool:
    """The pool of the calling thread, created on first use."""
    pool = getattr(_local, "pool", None)
    if pool is None:
        pool = IdlePool()
        _local.pool = pool
    return pool


def release_default() -> None:
    """Drain and forget the calling thread's default pool, if there is one."""
    pool = getattr(_local, "pool", None)
    if pool is not None:
        _local.pool = None
        pool.destroy()