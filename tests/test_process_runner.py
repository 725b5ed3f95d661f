"""Process runner tests against real Python child processes."""

from __future__ import annotations

import asyncio
import os
import sys
import textwrap
import time
from pathlib import Path

import pytest

from dotstyle.lib.domain import ProcessOutcome
from dotstyle.lib.errors import RunCancelledError
from dotstyle.lib.exec.runner import ProcessRunner

PYTHON = (sys.executable,)


def _pid_exists(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True


@pytest.mark.asyncio
async def test_run_captures_stdout_stderr_and_exit_code(tmp_path: Path) -> None:
    script = "import sys; print('out'); print('err', file=sys.stderr); sys.exit(3)"

    outcome = await ProcessRunner().run(PYTHON, ["-c", script], working_dir=tmp_path)

    assert outcome == ProcessOutcome(exit_code=3, stdout="out\n", stderr="err\n")
    assert not outcome.succeeded


@pytest.mark.asyncio
async def test_run_uses_working_directory(tmp_path: Path) -> None:
    outcome = await ProcessRunner().run(
        PYTHON,
        ["-c", "import os; print(os.getcwd())"],
        working_dir=tmp_path,
    )

    assert outcome.exit_code == 0
    assert Path(outcome.stdout.strip()).resolve() == tmp_path.resolve()


@pytest.mark.asyncio
async def test_run_missing_executable_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        await ProcessRunner().run(
            ("dotstyle-definitely-missing-binary",),
            ["format"],
            working_dir=tmp_path,
        )


@pytest.mark.asyncio
async def test_run_requires_executable(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="executable"):
        await ProcessRunner().run((), ["format"], working_dir=tmp_path)


@pytest.mark.asyncio
async def test_run_rejects_already_cancelled_event(tmp_path: Path) -> None:
    cancel = asyncio.Event()
    cancel.set()
    marker = tmp_path / "started"

    with pytest.raises(RunCancelledError):
        await ProcessRunner().run(
            PYTHON,
            ["-c", f"open({str(marker)!r}, 'w').close()"],
            working_dir=tmp_path,
            cancel=cancel,
        )

    assert not marker.exists()


@pytest.mark.asyncio
async def test_cancel_terminates_running_process(tmp_path: Path) -> None:
    pid_file = tmp_path / "child.pid"
    script = textwrap.dedent(
        f"""
        import os, time
        with open({str(pid_file)!r}, "w") as handle:
            handle.write(str(os.getpid()))
        time.sleep(60)
        """
    )
    cancel = asyncio.Event()

    async def trip_when_started() -> None:
        while not pid_file.exists() or not pid_file.read_text().strip():
            await asyncio.sleep(0.02)
        cancel.set()

    trigger = asyncio.create_task(trip_when_started())
    started = time.monotonic()
    with pytest.raises(RunCancelledError):
        await ProcessRunner(kill_grace_seconds=0.5).run(
            PYTHON,
            ["-c", script],
            working_dir=tmp_path,
            cancel=cancel,
        )
    await trigger

    assert time.monotonic() - started < 10
    assert not _pid_exists(int(pid_file.read_text()))


@pytest.mark.asyncio
async def test_cancel_escalates_to_kill_when_sigterm_ignored(tmp_path: Path) -> None:
    ready = tmp_path / "ready"
    script = textwrap.dedent(
        f"""
        import signal, time
        signal.signal(signal.SIGTERM, signal.SIG_IGN)
        open({str(ready)!r}, "w").close()
        time.sleep(60)
        """
    )
    cancel = asyncio.Event()

    async def trip_when_ready() -> None:
        while not ready.exists():
            await asyncio.sleep(0.02)
        cancel.set()

    trigger = asyncio.create_task(trip_when_ready())
    started = time.monotonic()
    with pytest.raises(RunCancelledError):
        await ProcessRunner(kill_grace_seconds=0.2).run(
            PYTHON,
            ["-c", script],
            working_dir=tmp_path,
            cancel=cancel,
        )
    await trigger

    assert time.monotonic() - started < 10
