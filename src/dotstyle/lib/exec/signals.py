"""SIGINT/SIGTERM handling that cancels an in-flight style run."""

from __future__ import annotations

import asyncio
import signal
from typing import Final

import structlog

TARGET_SIGNALS: Final[tuple[signal.Signals, ...]] = (signal.SIGINT, signal.SIGTERM)

logger = structlog.get_logger(__name__)


class CancellationScope:
    """Scoped signal handlers that trip one cancellation event.

    Must be entered from inside a running event loop. Handlers are only
    installed where the loop supports them (main thread, POSIX); elsewhere the
    event is only set by whoever holds it.
    """

    def __init__(self) -> None:
        self.event = asyncio.Event()
        self._installed: list[signal.Signals] = []
        self._loop: asyncio.AbstractEventLoop | None = None

    def __enter__(self) -> CancellationScope:
        self._loop = asyncio.get_running_loop()
        for signum in TARGET_SIGNALS:
            try:
                self._loop.add_signal_handler(signum, self._on_signal, signum)
            except (NotImplementedError, RuntimeError, ValueError):
                # Signal handlers can only be installed from the main thread.
                continue
            self._installed.append(signum)
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        _ = (exc_type, exc, tb)
        if self._loop is None:
            return
        for signum in self._installed:
            self._loop.remove_signal_handler(signum)
        self._installed.clear()

    def _on_signal(self, signum: signal.Signals) -> None:
        logger.info("cancellation requested", signal=signum.name)
        self.event.set()
