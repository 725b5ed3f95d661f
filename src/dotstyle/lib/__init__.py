"""Core dotstyle library exports."""

from dotstyle.lib.domain import FormatterSelection, ProcessOutcome, RunMode, RunOptions, Verbosity

__all__ = ["FormatterSelection", "ProcessOutcome", "RunMode", "RunOptions", "Verbosity"]
