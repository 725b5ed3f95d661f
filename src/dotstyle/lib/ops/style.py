"""Format/verify orchestration over the selected formatters.

Both commands share one flow and differ only in the check-only flag each
formatter gets in `RunMode.VERIFY_ONLY`:

- validate the selection (no process is launched on failure)
- announce the target directory
- run each enabled formatter in order, stopping at the first non-zero exit
- report `Done`
"""

from __future__ import annotations

import asyncio
import shlex
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from dotstyle.lib.domain import FormatterSelection, RunMode, RunOptions
from dotstyle.lib.errors import (
    Cancelled,
    ExternalToolFailed,
    RunCancelledError,
    StyleFailure,
)
from dotstyle.lib.validation import validate

if TYPE_CHECKING:
    from dotstyle.lib.exec.runner import CommandRunner
    from dotstyle.lib.reporting import Reporter

logger = structlog.get_logger(__name__)

DOTNET_FORMAT_VERIFY_FLAG = "--verify-no-changes"
CSHARPIER_CHECK_FLAG = "--check"

ArgumentBuilder = Callable[[RunMode], tuple[str, ...]]


@dataclass(frozen=True, slots=True)
class FormatterStep:
    name: str
    enabled: bool
    build_arguments: ArgumentBuilder


@dataclass(frozen=True, slots=True)
class SequenceResult:
    """Outcome of running the enabled formatters in order."""

    completed: tuple[str, ...] = ()
    failure: ExternalToolFailed | Cancelled | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass(frozen=True, slots=True)
class StyleRunResult:
    """Outcome of one format/verify invocation."""

    mode: RunMode
    completed: tuple[str, ...] = ()
    failure: StyleFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def exit_code(self) -> int:
        return 0 if self.failure is None else 1


def _dotnet_format(subcommand: str) -> ArgumentBuilder:
    def build(mode: RunMode) -> tuple[str, ...]:
        arguments = ("format", subcommand, ".")
        if mode is RunMode.VERIFY_ONLY:
            arguments = (*arguments, DOTNET_FORMAT_VERIFY_FLAG)
        return arguments

    return build


def _csharpier(mode: RunMode) -> tuple[str, ...]:
    if mode is RunMode.VERIFY_ONLY:
        return ("csharpier", ".", CSHARPIER_CHECK_FLAG)
    return ("csharpier", ".")


def formatter_steps(selection: FormatterSelection) -> tuple[FormatterStep, ...]:
    """Return every formatter in execution order with its enabled flag."""

    return (
        FormatterStep("style", selection.style, _dotnet_format("style")),
        FormatterStep("analyzers", selection.analyzers, _dotnet_format("analyzers")),
        FormatterStep("whitespace", selection.whitespace, _dotnet_format("whitespace")),
        FormatterStep("csharpier", selection.csharpier, _csharpier),
    )


def announcement(mode: RunMode, options: RunOptions) -> str:
    target = options.target_directory
    if mode is RunMode.APPLY:
        return f"Formatting C# files within '{target}'"
    return (
        "Verifying that C# files currently comply "
        f"with defined style standards within '{target}'"
    )


async def run_sequence(
    options: RunOptions,
    mode: RunMode,
    *,
    runner: CommandRunner,
    reporter: Reporter,
    executable: Sequence[str],
    cancel: asyncio.Event | None = None,
) -> SequenceResult:
    """Run enabled formatters one at a time, failing fast on non-zero exit."""

    completed: list[str] = []
    for step in formatter_steps(options.selection):
        if not step.enabled:
            continue
        if cancel is not None and cancel.is_set():
            return SequenceResult(completed=tuple(completed), failure=Cancelled(step.name))

        arguments = step.build_arguments(mode)
        reporter.report_command_start(shlex.join(executable), shlex.join(arguments))
        try:
            outcome = await runner.run(
                executable,
                arguments,
                working_dir=options.target_directory,
                cancel=cancel,
            )
        except RunCancelledError:
            logger.info("formatter cancelled", formatter=step.name)
            return SequenceResult(completed=tuple(completed), failure=Cancelled(step.name))

        reporter.report_command_output(outcome)
        if not outcome.succeeded:
            logger.debug("formatter failed", formatter=step.name, exit_code=outcome.exit_code)
            return SequenceResult(
                completed=tuple(completed),
                failure=ExternalToolFailed(
                    formatter=step.name,
                    exit_code=outcome.exit_code,
                    stderr=outcome.stderr,
                ),
            )

        reporter.write_normal("Success")
        completed.append(step.name)

    return SequenceResult(completed=tuple(completed))


async def execute_style(
    options: RunOptions,
    mode: RunMode,
    *,
    runner: CommandRunner,
    reporter: Reporter,
    executable: Sequence[str],
    cancel: asyncio.Event | None = None,
) -> StyleRunResult:
    """Validate, run and summarize one format or verify invocation."""

    invalid = validate(options.selection)
    if invalid is not None:
        return StyleRunResult(mode=mode, failure=invalid)

    reporter.write_normal(announcement(mode, options))

    sequence = await run_sequence(
        options,
        mode,
        runner=runner,
        reporter=reporter,
        executable=executable,
        cancel=cancel,
    )
    if not sequence.ok:
        return StyleRunResult(mode=mode, completed=sequence.completed, failure=sequence.failure)

    reporter.write_normal("Done")
    return StyleRunResult(mode=mode, completed=sequence.completed)
