"""Error types raised while building or reading HTTP exchanges.

Every failure aborts the enclosing operation:
- JsonParseError: the document is not syntactically valid JSON
- ValidationError: a required field is missing, has the wrong type,
  or names an unknown enumeration member
"""

from __future__ import annotations


class HttpTypesError(Exception):
    """Base class for all httptypes errors."""

    line: int | None = None


class JsonParseError(HttpTypesError):
    """The input document is not valid JSON."""

    def __init__(self, source: str, line: int | None = None) -> None:
        self.source = source
        self.line = line
        if line is None:
            msg = f"invalid JSON: {source}"
        else:
            msg = f"invalid JSON on line {line}: {source}"
        super().__init__(msg)


class ValidationError(HttpTypesError, ValueError):
    """A decoded value does not satisfy the exchange data model.

    ``field`` names the offending field (e.g. ``"method"`` or
    ``"request.headers"``) when one can be identified.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)

    def at_line(self, line: int) -> ValidationError:
        """Return a copy of this error annotated with a JSON Lines line number."""
        err = ValidationError(f"line {line}: {self.message}", self.field)
        err.line = line
        return err


def missing_field(field: str) -> ValidationError:
    """Error for a required field that is absent or null."""
    return ValidationError(f"missing required field {field!r}", field)
