"""Process execution primitives."""

from dotstyle.lib.exec.runner import CommandRunner, ProcessRunner
from dotstyle.lib.exec.signals import CancellationScope
from dotstyle.lib.exec.timeout import DEFAULT_KILL_GRACE_SECONDS, terminate_process

__all__ = [
    "DEFAULT_KILL_GRACE_SECONDS",
    "CancellationScope",
    "CommandRunner",
    "ProcessRunner",
    "terminate_process",
]
