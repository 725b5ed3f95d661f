"""Failure values for style runs and their user-facing messages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

from dotstyle.lib.domain import RunMode, Verbosity

HIGHER_VERBOSITY_HINT = (
    " For more information, try running the command "
    "again and specify a higher verbosity option."
)


class ValidationErrorKind(StrEnum):
    NO_FORMATTER_SELECTED = "no_formatter_selected"
    CONFLICTING_WHITESPACE_FORMATTERS = "conflicting_whitespace_formatters"


@dataclass(frozen=True, slots=True)
class ValidationError:
    """The formatter selection breaks one of its invariants."""

    kind: ValidationErrorKind


@dataclass(frozen=True, slots=True)
class ExternalToolFailed:
    """One formatter exited non-zero; the rest of the sequence was skipped."""

    formatter: str
    exit_code: int
    stderr: str = ""


@dataclass(frozen=True, slots=True)
class Cancelled:
    """The run was interrupted before every formatter finished."""

    formatter: str | None = None


StyleFailure: TypeAlias = ValidationError | ExternalToolFailed | Cancelled


class RunCancelledError(Exception):
    """Raised by the process runner when the cancellation event fires."""


class StyleCommandError(Exception):
    """Failure surfaced to the user by the CLI entry point."""

    def __init__(
        self,
        message: str,
        *,
        exit_code: int = 1,
        show_help: bool = False,
        command: str | None = None,
    ) -> None:
        self.exit_code = exit_code
        self.show_help = show_help
        self.command = command
        super().__init__(message)


def higher_verbosity_hint(verbosity: Verbosity) -> str:
    return HIGHER_VERBOSITY_HINT if verbosity < Verbosity.VERBOSE else ""


def _validation_message(error: ValidationError, mode: RunMode) -> str:
    if error.kind is ValidationErrorKind.NO_FORMATTER_SELECTED:
        if mode is RunMode.APPLY:
            return "You must enable at least one formatter to format code with."
        return "You must enable at least one formatter to verify the code style with."

    purpose = (
        "format code with"
        if mode is RunMode.APPLY
        else "verify code style compliance with"
    )
    return (
        f"You may only enable one whitespace formatter to {purpose} "
        "by specifying either the '--csharpier' option or the "
        "'--whitespace' option to avoid potential conflicts."
    )


def _tool_failure_message(
    failure: ExternalToolFailed,
    mode: RunMode,
    verbosity: Verbosity,
) -> str:
    hint = higher_verbosity_hint(verbosity)
    if not failure.stderr.strip():
        headline = (
            "The command returned a non-zero exit code."
            if mode is RunMode.APPLY
            else "Code does not comply with the defined style standards."
        )
        return f"{headline}{hint}"

    headline = (
        "The command returned a non-zero exit code."
        if mode is RunMode.APPLY
        else "Code does not comply with the defined style standards or an error occurred."
    )
    return f"{headline}\n\nStandard Error:\n\n {failure.stderr}\n\n{hint}"


def describe_failure(failure: StyleFailure, mode: RunMode, verbosity: Verbosity) -> str:
    """Render one failure value as the message shown on stderr."""

    if isinstance(failure, ValidationError):
        return _validation_message(failure, mode)
    if isinstance(failure, ExternalToolFailed):
        return _tool_failure_message(failure, mode, verbosity)
    return "The operation was cancelled."


def wrap_unexpected_error(exc: BaseException, *, command: str | None = None) -> StyleCommandError:
    """Normalize an unrecognized exception into one user-facing failure."""

    detail = str(exc).strip() or exc.__class__.__name__
    return StyleCommandError(
        "The following error has occurred:\n"
        f"  {detail}\n"
        "Double-check the command options and try again.",
        show_help=True,
        command=command,
    )
