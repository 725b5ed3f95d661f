"""Verbosity-gated progress output.

Lives in the lib layer so the orchestrator can report progress without
importing the CLI package.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from rich.console import Console

from dotstyle.lib.domain import Verbosity

if TYPE_CHECKING:
    from dotstyle.lib.domain import ProcessOutcome

COMMAND_OUTPUT_STYLE = "blue"


class Reporter(Protocol):
    """Progress sink used by the orchestrator."""

    def write_normal(self, text: str) -> None: ...

    def report_command_start(self, executable: str, arguments: str | None) -> None: ...

    def report_command_output(self, outcome: ProcessOutcome) -> None: ...


def default_console() -> Console:
    return Console(highlight=False, soft_wrap=True)


class ConsoleReporter:
    """Write progress lines to a rich console, filtered by verbosity."""

    def __init__(self, verbosity: Verbosity, console: Console | None = None) -> None:
        self.verbosity = verbosity
        self._console = console or default_console()

    def enabled(self, level: Verbosity) -> bool:
        return self.verbosity >= level

    def write_at(self, level: Verbosity, text: str, *, style: str | None = None) -> None:
        if not self.enabled(level):
            return
        self._console.print(text, style=style, markup=False, highlight=False, emoji=False)

    def write_quiet(self, text: str) -> None:
        self.write_at(Verbosity.QUIET, text)

    def write_normal(self, text: str) -> None:
        self.write_at(Verbosity.NORMAL, text)

    def write_verbose(self, text: str) -> None:
        self.write_at(Verbosity.VERBOSE, text)

    def report_command_start(self, executable: str, arguments: str | None) -> None:
        """Announce the command line about to run.

        Raises:
            ValueError: `executable` is empty or whitespace.
        """

        if not executable or not executable.strip():
            raise ValueError("The executable must be a non-empty value.")

        trimmed_arguments = (arguments or "").strip()
        command_line = executable.strip()
        if trimmed_arguments:
            command_line = f"{command_line} {trimmed_arguments}"
        self.write_normal(f"Running the command '{command_line}'")

    def report_command_output(self, outcome: ProcessOutcome) -> None:
        """Echo captured stdout, coloured to set it apart from our own lines."""

        stdout = outcome.stdout.strip()
        if not stdout:
            return

        self.write_verbose("Command Output:")
        self.write_verbose("")
        self.write_at(Verbosity.VERBOSE, stdout, style=COMMAND_OUTPUT_STYLE)
        self.write_verbose("")
