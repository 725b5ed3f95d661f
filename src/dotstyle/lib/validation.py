"""Invariant checks over the formatter selection."""

from __future__ import annotations

from dotstyle.lib.domain import FormatterSelection
from dotstyle.lib.errors import ValidationError, ValidationErrorKind


def validate(selection: FormatterSelection) -> ValidationError | None:
    """Return the first broken invariant, or None when the selection can run."""

    if not selection.any_enabled:
        return ValidationError(ValidationErrorKind.NO_FORMATTER_SELECTED)

    # CSharpier and `dotnet format whitespace` both rewrite whitespace.
    if selection.csharpier and selection.whitespace:
        return ValidationError(ValidationErrorKind.CONFLICTING_WHITESPACE_FORMATTERS)

    return None
