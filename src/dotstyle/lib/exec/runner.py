"""Buffered async execution of one external formatter command."""

from __future__ import annotations

import asyncio
import contextlib
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

import structlog

from dotstyle.lib.domain import ProcessOutcome
from dotstyle.lib.errors import RunCancelledError
from dotstyle.lib.exec.timeout import DEFAULT_KILL_GRACE_SECONDS, terminate_process

logger = structlog.get_logger(__name__)


class CommandRunner(Protocol):
    """Executes one command and reports its exit code as data."""

    async def run(
        self,
        executable: Sequence[str],
        arguments: Sequence[str],
        *,
        working_dir: Path,
        cancel: asyncio.Event | None = None,
    ) -> ProcessOutcome: ...


def _decode(raw: bytes | None) -> str:
    if not raw:
        return ""
    return raw.decode("utf-8", errors="replace")


class ProcessRunner:
    """Run external commands without validating their exit code.

    A non-zero exit is returned in the outcome; only cancellation and launch
    failures (missing executable, bad working directory) raise.
    """

    def __init__(self, *, kill_grace_seconds: float = DEFAULT_KILL_GRACE_SECONDS) -> None:
        self._kill_grace_seconds = kill_grace_seconds

    async def run(
        self,
        executable: Sequence[str],
        arguments: Sequence[str],
        *,
        working_dir: Path,
        cancel: asyncio.Event | None = None,
    ) -> ProcessOutcome:
        if not executable:
            raise ValueError("An executable is required to run a command.")
        if cancel is not None and cancel.is_set():
            raise RunCancelledError("Cancelled before the command started.")

        command = [*executable, *arguments]
        started = time.monotonic()
        process = await asyncio.create_subprocess_exec(
            *command,
            cwd=working_dir,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            start_new_session=True,
        )
        logger.debug("process started", pid=process.pid, command=command, cwd=str(working_dir))

        communicate = asyncio.ensure_future(process.communicate())
        waiters: set[asyncio.Future[object]] = {communicate}
        cancel_wait: asyncio.Future[object] | None = None
        if cancel is not None:
            cancel_wait = asyncio.ensure_future(cancel.wait())
            waiters.add(cancel_wait)

        try:
            await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
            if not communicate.done():
                communicate.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await communicate
                await terminate_process(process, grace_seconds=self._kill_grace_seconds)
                logger.debug("process cancelled", pid=process.pid, returncode=process.returncode)
                raise RunCancelledError(f"Cancelled while running '{' '.join(command)}'.")
            stdout, stderr = communicate.result()
        except asyncio.CancelledError:
            communicate.cancel()
            await terminate_process(process, grace_seconds=self._kill_grace_seconds)
            raise
        finally:
            if cancel_wait is not None:
                cancel_wait.cancel()

        exit_code = process.returncode if process.returncode is not None else -1
        logger.debug(
            "process finished",
            pid=process.pid,
            exit_code=exit_code,
            duration_ms=int((time.monotonic() - started) * 1000),
        )
        return ProcessOutcome(exit_code=exit_code, stdout=_decode(stdout), stderr=_decode(stderr))
