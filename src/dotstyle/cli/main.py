"""Cyclopts CLI entry point for dotstyle."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from cyclopts import App

from dotstyle import __version__
from dotstyle.cli.style_cmd import register_style_commands
from dotstyle.lib.errors import StyleCommandError

if TYPE_CHECKING:
    from collections.abc import Sequence

app = App(
    name="dotstyle",
    help="Format or verify C# files with dotnet format and CSharpier.",
    version=__version__,
    help_formatter="plain",
)

_REGISTERED_CLI_COMMANDS: set[str] = register_style_commands(app)


def get_registered_cli_commands() -> set[str]:
    """Expose CLI command names for smoke tests."""

    return set(_REGISTERED_CLI_COMMANDS)


def _report_failure(exc: StyleCommandError) -> None:
    if exc.show_help and exc.command is not None:
        app.help_print([exc.command])
    print(f"error: {exc}", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point used by `dotstyle` and `python -m dotstyle`."""

    from dotstyle.lib.logging import configure_logging

    args = list(sys.argv[1:] if argv is None else argv)
    configure_logging()

    try:
        app(args)
    except StyleCommandError as exc:
        _report_failure(exc)
        raise SystemExit(exc.exit_code) from None
    except KeyboardInterrupt:
        print("error: The operation was cancelled.", file=sys.stderr)
        raise SystemExit(1) from None
