"""Closed enumerations and scalar coercions shared by requests and responses.

Wire tokens are lowercase (``"post"``, ``"https"``); parsing is
case-insensitive and consults a lookup table built once at import time.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Self

from httptypes._errors import ValidationError


class _WireEnum(Enum):
    """Enum whose value is the lowercase wire token."""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Self | str, field: str) -> Self:
        """Resolve ``value`` to a member, ignoring case.

        Raises:
            ValidationError: If ``value`` is not a string or matches no member.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            msg = f"{field} must be a string, got {type(value).__name__}"
            raise ValidationError(msg, field)
        try:
            return cls(value.lower())
        except ValueError:
            expected = ", ".join(m.value for m in cls)
            msg = f"unknown {field}: {value!r} (expected one of: {expected})"
            raise ValidationError(msg, field) from None


class HttpMethod(_WireEnum):
    """HTTP request method indicating the action to perform on a resource."""

    CONNECT = "connect"
    """Establishes a tunnel to the server identified by the target resource."""
    DELETE = "delete"
    """Deletes the specified resource."""
    GET = "get"
    """Requests a representation of the specified resource."""
    HEAD = "head"
    """Like GET, but without the response body."""
    OPTIONS = "options"
    """Describes the communication options for the target resource."""
    PATCH = "patch"
    """Applies partial modifications to a resource."""
    POST = "post"
    """Submits an entity to the specified resource."""
    PUT = "put"
    """Replaces all current representations of the target resource."""
    TRACE = "trace"
    """Performs a message loop-back test along the path to the resource."""

    @classmethod
    def parse(cls, value: HttpMethod | str, field: str = "method") -> HttpMethod:
        return super().parse(value, field)


class HttpProtocol(_WireEnum):
    """HTTP request protocol."""

    HTTP = "http"
    """Unencrypted HTTP."""
    HTTPS = "https"
    """Encrypted HTTPS."""

    @classmethod
    def parse(cls, value: HttpProtocol | str, field: str = "protocol") -> HttpProtocol:
        return super().parse(value, field)


def parse_timestamp(value: datetime | str | None, field: str = "timestamp") -> datetime | None:
    """Coerce an ISO-8601 string to a datetime.

    ``None`` and the empty string both mean "no timestamp".
    """
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        msg = f"{field} must be an ISO-8601 string, got {type(value).__name__}"
        raise ValidationError(msg, field)
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        msg = f"{field} is not a valid ISO-8601 timestamp: {value!r}"
        raise ValidationError(msg, field) from exc


def parse_body(value: object, field: str = "body") -> str | None:
    """Check that an optional body is a string."""
    if value is None or isinstance(value, str):
        return value
    msg = f"{field} must be a string, got {type(value).__name__}"
    raise ValidationError(msg, field)
