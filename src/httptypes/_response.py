"""HttpResponse and HttpExchange."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from httptypes._errors import ValidationError, missing_field
from httptypes._multimap import HttpHeaders, MultiValueMap
from httptypes._types import parse_body, parse_timestamp

if TYPE_CHECKING:
    from datetime import datetime

    from httptypes._multimap import RawMultiValueMap
    from httptypes._request import HttpRequest


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """HTTP response.

    Direct construction normalizes loosely-typed input (text status codes,
    ISO-8601 timestamp strings, raw header dicts). ``HttpResponse.create``
    does the same with keyword-only arguments.
    """

    status_code: int
    headers: HttpHeaders
    body: str | None = None
    timestamp: datetime | None = None

    def __post_init__(self) -> None:
        if self.status_code is None:
            raise missing_field("statusCode")
        if self.headers is None:
            raise missing_field("headers")
        object.__setattr__(self, "status_code", _parse_status_code(self.status_code))
        if not isinstance(self.headers, HttpHeaders):
            object.__setattr__(self, "headers", HttpHeaders(self.headers))
        object.__setattr__(self, "body", parse_body(self.body))
        object.__setattr__(self, "timestamp", parse_timestamp(self.timestamp))

    @classmethod
    def create(
        cls,
        *,
        status_code: int | str | None = None,
        headers: RawMultiValueMap | MultiValueMap | None = None,
        body: str | None = None,
        timestamp: datetime | str | None = None,
    ) -> HttpResponse:
        """Build a response, coercing text status codes and timestamps.

        Raises:
            ValidationError: If a required field is missing or malformed.
        """
        if status_code is None:
            raise missing_field("statusCode")
        if headers is None:
            raise missing_field("headers")
        return cls(
            status_code=_parse_status_code(status_code),
            headers=HttpHeaders(headers),
            body=parse_body(body),
            timestamp=parse_timestamp(timestamp),
        )


@dataclass(frozen=True, slots=True)
class HttpExchange:
    """A request paired with the response it received."""

    request: HttpRequest
    response: HttpResponse


def _parse_status_code(value: object) -> int:
    if isinstance(value, str):
        # Plain ASCII digits only: no sign, underscores, spaces or other scripts.
        if not (value.isascii() and value.isdigit()):
            msg = f"statusCode is not an integer: {value!r}"
            raise ValidationError(msg, "statusCode")
        value = int(value)
    elif isinstance(value, float) and value.is_integer():
        value = int(value)
    _check_status_code(value)
    return value  # type: ignore[return-value]


def _check_status_code(value: object) -> None:
    # bool is an int subclass; True is not a status code.
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"statusCode must be an integer, got {type(value).__name__}"
        raise ValidationError(msg, "statusCode")
    if value < 0:
        msg = f"statusCode must be non-negative, got {value}"
        raise ValidationError(msg, "statusCode")
