"""Delayed, cancellable window-property detection."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Optional, Protocol

from window_rules.utils import read_json_safe

logger = logging.getLogger(__name__)


class WindowInfoSource(Protocol):
    async def query_window_info(self) -> Mapping[str, Any]: ...


class SnapshotFileSource:
    """Reads a window-property snapshot previously dumped as a JSON object."""

    def __init__(self, path: Path) -> None:
        self.path = path

    async def query_window_info(self) -> Mapping[str, Any]:
        payload, error = await asyncio.to_thread(read_json_safe, self.path)
        if error is not None:
            raise ValueError(f"Invalid window snapshot {self.path}: {error}")
        if payload is None:
            raise ValueError(f"Missing window snapshot: {self.path}")
        return payload


class WindowPropertyProbe:
    """Single-shot request to a window info source after a delay.

    Scheduling again or calling ``cancel`` drops any pending request. The
    reply is handed to ``on_reply`` on the event loop that scheduled it.
    """

    def __init__(
        self,
        source: WindowInfoSource,
        on_reply: Callable[[Mapping[str, Any]], None],
    ) -> None:
        self.source = source
        self.on_reply = on_reply
        self._timer: Optional[asyncio.TimerHandle] = None
        self._task: Optional[asyncio.Task[None]] = None
        self._done: Optional[asyncio.Future[bool]] = None

    @property
    def pending(self) -> bool:
        return self._done is not None and not self._done.done()

    def detect(self, delay_seconds: float) -> asyncio.Future[bool]:
        """Schedule detection; the returned future resolves to ``True`` once a
        reply was merged, ``False`` when the request failed or was cancelled."""
        self.cancel()
        loop = asyncio.get_running_loop()
        done: asyncio.Future[bool] = loop.create_future()
        self._done = done
        self._timer = loop.call_later(max(delay_seconds, 0.0), self._start, done)
        logger.debug("Window property detection scheduled in %.1fs", delay_seconds)
        return done

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        if self._done is not None and not self._done.done():
            self._done.set_result(False)
        self._done = None

    def _start(self, done: asyncio.Future[bool]) -> None:
        self._timer = None
        self._task = asyncio.get_running_loop().create_task(self._query(done))

    async def _query(self, done: asyncio.Future[bool]) -> None:
        try:
            reply = await self.source.query_window_info()
        except asyncio.CancelledError:
            if not done.done():
                done.set_result(False)
            raise
        except Exception as exc:
            logger.warning("Window property detection failed: %s", exc)
            if not done.done():
                done.set_result(False)
            return

        if done.done():
            return
        if not isinstance(reply, Mapping):
            logger.warning("Ignoring window info reply of type %s", type(reply).__name__)
            done.set_result(False)
            return
        self.on_reply(reply)
        done.set_result(True)
