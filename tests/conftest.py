"""Shared pytest fixtures for CLI integration checks."""

from __future__ import annotations

import json
import os
import shlex
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable

PACKAGE_ROOT = Path(__file__).resolve().parents[1]


@dataclass(frozen=True, slots=True)
class CliResult:
    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str


@pytest.fixture
def package_root() -> Path:
    return PACKAGE_ROOT


@pytest.fixture
def mock_dotnet_command(package_root: Path) -> str:
    return " ".join(
        (
            shlex.quote(sys.executable),
            shlex.quote(str(package_root / "tests" / "mock_dotnet.py")),
        )
    )


@pytest.fixture
def invocation_log(tmp_path: Path) -> Path:
    return tmp_path / "invocations.jsonl"


@pytest.fixture
def read_invocations(invocation_log: Path) -> Callable[[], list[dict[str, Any]]]:
    def _read() -> list[dict[str, Any]]:
        if not invocation_log.is_file():
            return []
        return [
            json.loads(line)
            for line in invocation_log.read_text(encoding="utf-8").splitlines()
            if line.strip()
        ]

    return _read


@pytest.fixture
def cli_env(
    package_root: Path,
    mock_dotnet_command: str,
    invocation_log: Path,
) -> dict[str, str]:
    env = os.environ.copy()
    existing = env.get("PYTHONPATH", "")
    root = str(package_root / "src")
    env["PYTHONPATH"] = root if not existing else f"{root}:{existing}"
    env["DOTSTYLE_DOTNET_COMMAND"] = mock_dotnet_command
    env["MOCK_DOTNET_LOG"] = str(invocation_log)
    for name in ("MOCK_DOTNET_FAIL", "MOCK_DOTNET_STDERR", "MOCK_DOTNET_HANG", "DOTSTYLE_LOG_LEVEL"):
        env.pop(name, None)
    return env


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    target = tmp_path / "src"
    target.mkdir()
    (target / "Program.cs").write_text("class Program {}\n", encoding="utf-8")
    return target


@pytest.fixture
def run_dotstyle(
    package_root: Path,
    cli_env: dict[str, str],
) -> Callable[..., CliResult]:
    def _run(
        args: list[str],
        timeout: float = 15.0,
        env: dict[str, str] | None = None,
    ) -> CliResult:
        completed = subprocess.run(
            [sys.executable, "-m", "dotstyle", *args],
            cwd=package_root,
            env={**cli_env, **(env or {})},
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )
        return CliResult(
            args=tuple(args),
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )

    return _run
