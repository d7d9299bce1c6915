"""Queue of callbacks run in order when the event loop becomes idle."""

from __future__ import annotations

import asyncio
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Optional

__all__ = ["IdleQueue"]

RunFunc = Callable[[Any], Any]
DestroyFunc = Callable[[Any], Any]


@dataclass(eq=False)
class _Item:
    run: Optional[RunFunc]
    data: Any
    destroy: Optional[DestroyFunc]
    tag: int
    completed: bool = False


class IdleQueue:
    """Runs queued callbacks on the next iterations of an event loop.

    Each callback gets its ``data``; ``destroy`` is then called with the
    same data, also when the callback is cancelled instead of run. Callbacks
    added while the queue is being run wait for the next round.

    ``loop`` is the event loop to run on; by default the loop running when
    a callback is added.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop
        self._active_loop: Optional[asyncio.AbstractEventLoop] = None
        self._items: Deque[_Item] = deque()
        self._handle: Optional[asyncio.Handle] = None
        self._closed = False

    def __repr__(self) -> str:
        return f"IdleQueue(items={len(self._items)}, closed={self._closed})"

    def __len__(self) -> int:
        return len(self._items)

    def __enter__(self) -> "IdleQueue":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def add(
        self,
        run: Optional[RunFunc],
        data: Any = None,
        destroy: Optional[DestroyFunc] = None,
        tag: int = 0,
    ) -> None:
        """Queue ``run(data)`` to be called when the loop is idle."""
        if self._closed:
            raise RuntimeError("the queue has been closed")
        loop = None
        if self._handle is None:
            loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        self._items.append(_Item(run, data, destroy, tag))
        if loop is not None:
            self._active_loop = loop
            self._handle = loop.call_soon(self._run)

    def _run(self) -> None:
        self._handle = None
        for item in self._items:
            item.completed = True
        try:
            while self._items and self._items[0].completed:
                item = self._items.popleft()
                try:
                    if item.run is not None:
                        item.run(item.data)
                finally:
                    if item.destroy is not None:
                        item.destroy(item.data)
        finally:
            if self._items and self._handle is None and self._active_loop is not None:
                self._handle = self._active_loop.call_soon(self._run)

    def _cancel_handle(self) -> None:
        if self._handle is not None:
            handle, self._handle = self._handle, None
            handle.cancel()

    def contains_tag(self, tag: int) -> bool:
        """Whether a callback with ``tag`` is still waiting to run."""
        return any(item.tag == tag for item in self._items)

    def cancel_tag(self, tag: int) -> bool:
        """Cancel the first waiting callback with ``tag``; report whether one was found."""
        for item in self._items:
            if item.tag == tag:
                self._items.remove(item)
                item.completed = True
                if not self._items:
                    self._cancel_handle()
                if item.destroy is not None:
                    item.destroy(item.data)
                return True
        return False

    def cancel_all(self) -> None:
        """Cancel every waiting callback without running it."""
        for item in self._items:
            item.completed = True
        while self._items and self._items[0].completed:
            item = self._items.popleft()
            if item.destroy is not None:
                item.destroy(item.data)
        if not self._items:
            self._cancel_handle()

    def close(self) -> None:
        """Cancel everything and refuse further callbacks."""
        self.cancel_all()
        self._closed = True