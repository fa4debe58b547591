"""HttpRequest: canonical HTTP request with reconciled path representations.

A request carries its target both as the full ``path`` (with query
string) and as ``pathname`` + decoded ``query``. Two constructors build
one from the other:

- ``HttpRequest.from_path`` splits the path at the first ``?`` and
  decodes the query string
- ``HttpRequest.from_pathname_and_query`` encodes the query and appends
  it to the pathname (no ``?`` when the query is empty)

Given a path and its decomposition, both constructors yield equal requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import parse_qsl, quote

from httptypes._errors import ValidationError, missing_field
from httptypes._multimap import HttpHeaders, HttpQuery, MultiValueMap
from httptypes._types import HttpMethod, HttpProtocol, parse_body, parse_timestamp

if TYPE_CHECKING:
    from datetime import datetime

    from httptypes._multimap import RawMultiValueMap

# Characters left unescaped in addition to ASCII letters, digits and "_.-~",
# matching JavaScript's encodeURIComponent.
QUERY_SAFE_CHARS = "!*'()"


@dataclass(frozen=True, slots=True)
class HttpRequest:
    """HTTP request.

    ``path`` is kept verbatim when built from a path string, so it may use
    a different (but equivalent) percent-encoding than the one
    ``from_pathname_and_query`` would produce.

    Direct construction accepts method and protocol tokens and raw header
    and query dicts, normalizing them the same way the named constructors do.
    """

    method: HttpMethod
    protocol: HttpProtocol
    host: str
    headers: HttpHeaders
    path: str
    pathname: str
    query: HttpQuery
    body: str | None = None
    timestamp: datetime | None = None

    def __post_init__(self) -> None:
        _require(
            ("method", self.method),
            ("protocol", self.protocol),
            ("host", self.host),
            ("headers", self.headers),
            ("pathname", self.pathname),
            ("query", self.query),
            ("path", self.path),
        )
        # Direct construction may pass raw tokens and dicts; normalize them.
        object.__setattr__(self, "method", HttpMethod.parse(self.method))
        object.__setattr__(self, "protocol", HttpProtocol.parse(self.protocol))
        _parse_host(self.host)
        if not isinstance(self.headers, HttpHeaders):
            object.__setattr__(self, "headers", HttpHeaders(self.headers))
        if not isinstance(self.query, HttpQuery):
            object.__setattr__(self, "query", HttpQuery(self.query))
        _check_string("pathname", self.pathname)
        _check_string("path", self.path)
        object.__setattr__(self, "body", parse_body(self.body))
        object.__setattr__(self, "timestamp", parse_timestamp(self.timestamp))

    @classmethod
    def from_path(
        cls,
        *,
        method: HttpMethod | str | None = None,
        protocol: HttpProtocol | str | None = None,
        host: str | None = None,
        headers: RawMultiValueMap | MultiValueMap | None = None,
        path: str | None = None,
        body: str | None = None,
        timestamp: datetime | str | None = None,
    ) -> HttpRequest:
        """Build a request from a full path, deriving pathname and query.

        Raises:
            ValidationError: If a required field is missing or malformed.
        """
        _require(
            ("method", method),
            ("protocol", protocol),
            ("host", host),
            ("headers", headers),
            ("path", path),
        )
        _check_string("path", path)
        pathname, query = split_path(path)
        return cls(
            method=HttpMethod.parse(method),
            protocol=HttpProtocol.parse(protocol),
            host=_parse_host(host),
            headers=HttpHeaders(headers),
            path=path,
            pathname=pathname,
            query=query,
            body=parse_body(body),
            timestamp=parse_timestamp(timestamp),
        )

    @classmethod
    def from_pathname_and_query(
        cls,
        *,
        method: HttpMethod | str | None = None,
        protocol: HttpProtocol | str | None = None,
        host: str | None = None,
        headers: RawMultiValueMap | MultiValueMap | None = None,
        pathname: str | None = None,
        query: RawMultiValueMap | MultiValueMap | None = None,
        body: str | None = None,
        timestamp: datetime | str | None = None,
    ) -> HttpRequest:
        """Build a request from a pathname and query, deriving the full path.

        Raises:
            ValidationError: If a required field is missing or malformed.
        """
        _require(
            ("method", method),
            ("protocol", protocol),
            ("host", host),
            ("headers", headers),
            ("pathname", pathname),
            ("query", query),
        )
        _check_string("pathname", pathname)
        parsed_query = HttpQuery(query)
        return cls(
            method=HttpMethod.parse(method),
            protocol=HttpProtocol.parse(protocol),
            host=_parse_host(host),
            headers=HttpHeaders(headers),
            path=join_path(pathname, parsed_query),
            pathname=pathname,
            query=parsed_query,
            body=parse_body(body),
            timestamp=parse_timestamp(timestamp),
        )


def split_path(path: str) -> tuple[str, HttpQuery]:
    """Split a path at the first ``?`` into pathname and decoded query.

    Query names and values are form-decoded (``+`` is a space); a name
    without ``=`` gets an empty value. Repeated names accumulate in order.
    """
    pathname, _, query_string = path.partition("?")
    pairs = parse_qsl(query_string, keep_blank_values=True)
    return pathname, HttpQuery.from_pairs(pairs)


def join_path(pathname: str, query: MultiValueMap) -> str:
    """Append the encoded query to the pathname, omitting ``?`` when empty."""
    query_string = encode_query(query)
    if not query_string:
        return pathname
    return f"{pathname}?{query_string}"


def encode_query(query: MultiValueMap) -> str:
    """Percent-encode every (name, value) pair and join them with ``&``.

    Raises:
        ValidationError: If a name or value can't be encoded as UTF-8
            (e.g. it holds a lone surrogate).
    """
    try:
        return "&".join(
            f"{quote(name, safe=QUERY_SAFE_CHARS)}={quote(value, safe=QUERY_SAFE_CHARS)}"
            for name, value in query.pairs()
        )
    except UnicodeEncodeError as exc:
        msg = f"query contains text that is not valid UTF-8: {exc.object!r}"
        raise ValidationError(msg, "query") from exc


def _require(*fields: tuple[str, object]) -> None:
    """Raise for the first field whose value is None, in the order given."""
    for name, value in fields:
        if value is None:
            raise missing_field(name)


def _check_string(field: str, value: object) -> None:
    if not isinstance(value, str):
        msg = f"{field} must be a string, got {type(value).__name__}"
        raise ValidationError(msg, field)


def _parse_host(host: object) -> str:
    if not isinstance(host, str):
        msg = f"host must be a string, got {type(host).__name__}"
        raise ValidationError(msg, "host")
    return host
