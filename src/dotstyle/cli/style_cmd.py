"""CLI command handlers for the format and verify commands."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter

from dotstyle.lib.config.settings import load_config
from dotstyle.lib.domain import FormatterSelection, RunMode, RunOptions, Verbosity
from dotstyle.lib.errors import (
    StyleCommandError,
    ValidationError,
    describe_failure,
    wrap_unexpected_error,
)
from dotstyle.lib.exec.runner import ProcessRunner
from dotstyle.lib.exec.signals import CancellationScope
from dotstyle.lib.ops.style import StyleRunResult, execute_style
from dotstyle.lib.reporting import ConsoleReporter
from dotstyle.lib.validation import validate

if TYPE_CHECKING:
    from cyclopts import App

    from dotstyle.lib.exec.runner import CommandRunner

PathOption = Annotated[
    Path | None,
    Parameter(
        name=["--path", "-p"],
        help="The directory containing files to recursively process. Defaults to the current directory.",
    ),
]
StyleOption = Annotated[
    bool,
    Parameter(
        name=["--style", "-s"],
        help="Run 'dotnet format style' to apply or check code style analyzer fixes.",
    ),
]
AnalyzersOption = Annotated[
    bool,
    Parameter(
        name=["--analyzers", "-a"],
        help="Run 'dotnet format analyzers' to apply or check third party analyzer fixes.",
    ),
]
WhitespaceOption = Annotated[
    bool,
    Parameter(
        name=["--whitespace", "-w"],
        help="Run 'dotnet format whitespace'. Requires --no-csharpier.",
    ),
]
CsharpierOption = Annotated[
    bool,
    Parameter(
        name=["--csharpier", "-c"],
        help=(
            "Run the CSharpier opinionated formatter. Must be disabled when using "
            "--whitespace as both handle whitespace formatting."
        ),
    ),
]
VerbosityOption = Annotated[
    str,
    Parameter(name=["--verbosity", "-v"], help="Output verbosity: Quiet, Normal, or Verbose."),
]


async def _execute(
    options: RunOptions,
    mode: RunMode,
    *,
    runner: CommandRunner,
    reporter: ConsoleReporter,
    executable: Sequence[str],
) -> StyleRunResult:
    with CancellationScope() as scope:
        return await execute_style(
            options,
            mode,
            runner=runner,
            reporter=reporter,
            executable=executable,
            cancel=scope.event,
        )


def run_style_command(
    mode: RunMode,
    *,
    path: Path | None,
    selection: FormatterSelection,
    verbosity: str,
) -> None:
    """Run one format/verify invocation and raise on any failure."""

    command = "format" if mode is RunMode.APPLY else "verify"
    invalid = validate(selection)
    if invalid is not None:
        raise StyleCommandError(
            describe_failure(invalid, mode, Verbosity.NORMAL),
            show_help=True,
            command=command,
        )

    try:
        level = Verbosity.parse(verbosity)
        target = (path or Path.cwd()).expanduser().resolve()
        if not target.is_dir():
            raise FileNotFoundError(f"The directory '{target}' does not exist.")
        config = load_config(target)
        options = RunOptions(target_directory=target, selection=selection, verbosity=level)
        result = asyncio.run(
            _execute(
                options,
                mode,
                runner=ProcessRunner(kill_grace_seconds=config.kill_grace_seconds),
                reporter=ConsoleReporter(level),
                executable=config.dotnet_executable,
            )
        )
    except Exception as exc:
        raise wrap_unexpected_error(exc, command=command) from exc

    if result.failure is not None:
        raise StyleCommandError(
            describe_failure(result.failure, mode, level),
            show_help=isinstance(result.failure, ValidationError),
            command=command,
        )


def _format(
    path: PathOption = None,
    style: StyleOption = True,
    analyzers: AnalyzersOption = True,
    whitespace: WhitespaceOption = False,
    csharpier: CsharpierOption = True,
    verbosity: VerbosityOption = "Normal",
) -> None:
    """Format C# files according to the defined coding style."""

    run_style_command(
        RunMode.APPLY,
        path=path,
        selection=FormatterSelection(
            style=style,
            analyzers=analyzers,
            whitespace=whitespace,
            csharpier=csharpier,
        ),
        verbosity=verbosity,
    )


def _verify(
    path: PathOption = None,
    style: StyleOption = True,
    analyzers: AnalyzersOption = True,
    whitespace: WhitespaceOption = False,
    csharpier: CsharpierOption = True,
    verbosity: VerbosityOption = "Normal",
) -> None:
    """Verify that C# files comply with the defined coding style without changing them."""

    run_style_command(
        RunMode.VERIFY_ONLY,
        path=path,
        selection=FormatterSelection(
            style=style,
            analyzers=analyzers,
            whitespace=whitespace,
            csharpier=csharpier,
        ),
        verbosity=verbosity,
    )


def register_style_commands(app: App) -> set[str]:
    app.command(_format, name="format")
    app.command(_verify, name="verify")
    return {"format", "verify"}
