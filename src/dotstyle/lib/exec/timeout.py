"""Termination helpers for formatter subprocesses."""

from __future__ import annotations

import asyncio
import signal

from dotstyle.lib.config.settings import DotstyleConfig
from dotstyle.lib.exec.process_groups import signal_process_group

DEFAULT_KILL_GRACE_SECONDS = DotstyleConfig().kill_grace_seconds


async def terminate_process(
    process: asyncio.subprocess.Process,
    *,
    grace_seconds: float = DEFAULT_KILL_GRACE_SECONDS,
) -> None:
    """Gracefully terminate a process group and force-kill if it does not exit."""

    if process.returncode is not None:
        return

    signal_process_group(process, signal.SIGTERM)
    try:
        await asyncio.wait_for(process.wait(), timeout=grace_seconds)
    except TimeoutError:
        if process.returncode is None:
            signal_process_group(process, signal.SIGKILL)
            await process.wait()
