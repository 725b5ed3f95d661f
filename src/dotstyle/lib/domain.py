"""Option model shared by the validator, orchestrator and reporter."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum
from pathlib import Path


class Verbosity(IntEnum):
    """Output detail level; a line tagged L is shown iff current >= L."""

    QUIET = 0
    NORMAL = 1
    VERBOSE = 2

    @classmethod
    def parse(cls, raw: str) -> Verbosity:
        """Resolve CLI text by member name (any case) or numeric value."""

        normalized = raw.strip()
        if normalized.isdigit():
            try:
                return cls(int(normalized))
            except ValueError:
                pass
        else:
            member = cls.__members__.get(normalized.upper())
            if member is not None:
                return member
        choices = ", ".join(member.name.capitalize() for member in cls)
        raise ValueError(f"--verbosity must be one of: {choices} (got {raw!r}).")


class RunMode(StrEnum):
    """Whether formatters rewrite files or only check them."""

    APPLY = "apply"
    VERIFY_ONLY = "verify"


@dataclass(frozen=True, slots=True)
class FormatterSelection:
    """Which formatter invocations are enabled for one run."""

    style: bool = True
    analyzers: bool = True
    whitespace: bool = False
    csharpier: bool = True

    @property
    def any_enabled(self) -> bool:
        return self.style or self.analyzers or self.whitespace or self.csharpier


@dataclass(frozen=True, slots=True)
class RunOptions:
    """Resolved inputs of one format/verify invocation."""

    target_directory: Path
    selection: FormatterSelection = FormatterSelection()
    verbosity: Verbosity = Verbosity.NORMAL


@dataclass(frozen=True, slots=True)
class ProcessOutcome:
    """Buffered result of one external command."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0
