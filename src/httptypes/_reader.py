"""Reading exchanges from HTTP Types JSON.

Parsing path:
  JSON text → json.loads → parse_exchange() → HttpExchange

A request object carries either ``path`` or ``pathname`` (+ ``query``);
``path`` wins when both are present. Method and protocol tokens are
matched case-insensitively. Any failure aborts the whole read, including
every line of a JSON Lines batch.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from httptypes._errors import JsonParseError, ValidationError
from httptypes._request import HttpRequest
from httptypes._response import HttpExchange, HttpResponse

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


def parse_exchange(data: dict[str, Any]) -> HttpExchange:
    """Parse a decoded JSON object into an HttpExchange.

    Raises:
        ValidationError: If the object doesn't describe a valid exchange.
    """
    if not isinstance(data, dict):
        msg = f"exchange must be an object, got {type(data).__name__}"
        raise ValidationError(msg)

    request = _parse_request(_require_object(data, "request"))
    response = _parse_response(_require_object(data, "response"))
    return HttpExchange(request=request, response=response)


def _parse_request(data: dict[str, Any]) -> HttpRequest:
    try:
        common = {
            "method": data.get("method"),
            "protocol": data.get("protocol"),
            "host": data.get("host"),
            "headers": _optional_object(data, "headers"),
            "body": data.get("body"),
            "timestamp": data.get("timestamp"),
        }
        if "path" in data:
            return HttpRequest.from_path(path=data["path"], **common)
        if "pathname" in data:
            return HttpRequest.from_pathname_and_query(
                pathname=data["pathname"],
                query=_optional_object(data, "query"),
                **common,
            )
    except ValidationError as exc:
        raise _qualify(exc, "request") from exc

    msg = "request requires one of 'path' or 'pathname'"
    raise ValidationError(msg, "request.path")


def _parse_response(data: dict[str, Any]) -> HttpResponse:
    try:
        return HttpResponse.create(
            status_code=data.get("statusCode"),
            headers=_optional_object(data, "headers"),
            body=data.get("body"),
            timestamp=data.get("timestamp"),
        )
    except ValidationError as exc:
        raise _qualify(exc, "response") from exc


def _require_object(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        msg = f"missing required field {key!r}"
        raise ValidationError(msg, key)
    if not isinstance(value, dict):
        msg = f"{key!r} must be an object, got {type(value).__name__}"
        raise ValidationError(msg, key)
    return value


def _optional_object(data: dict[str, Any], key: str) -> dict[str, Any] | None:
    value = data.get(key)
    if value is not None and not isinstance(value, dict):
        msg = f"{key} must be an object, got {type(value).__name__}"
        raise ValidationError(msg, key)
    return value


def _qualify(exc: ValidationError, parent: str) -> ValidationError:
    """Prefix a model-level error with the JSON object it came from."""
    if exc.field is None:
        return ValidationError(f"{parent}: {exc.message}")
    return ValidationError(f"{parent}: {exc.message}", f"{parent}.{exc.field}")


class HttpExchangeReader:
    """Reads exchanges from a JSON document or a JSON Lines string."""

    @staticmethod
    def from_json(json_text: str) -> HttpExchange:
        """Parse one JSON document into an HttpExchange.

        Raises:
            JsonParseError: If the text is not valid JSON.
            ValidationError: If the document doesn't describe a valid exchange.
        """
        try:
            data = json.loads(json_text)
        except json.JSONDecodeError as exc:
            raise JsonParseError(str(exc)) from exc
        except RecursionError as exc:
            msg = "document is nested too deeply"
            raise JsonParseError(msg) from exc
        return parse_exchange(data)

    @staticmethod
    def from_json_lines(
        json_lines: str,
        callback: Callable[[HttpExchange], object] | None = None,
    ) -> list[HttpExchange]:
        """Parse newline-delimited JSON documents, skipping blank lines.

        Every line is parsed before ``callback`` sees any exchange, so a bad
        line anywhere fails the whole batch and the callback never runs.

        Raises:
            JsonParseError: If a line is not valid JSON.
            ValidationError: If a line doesn't describe a valid exchange.
        """
        exchanges: list[HttpExchange] = []
        skipped = 0
        for number, line in enumerate(json_lines.split("\n"), start=1):
            if not line.strip():
                skipped += 1
                continue
            try:
                exchanges.append(HttpExchangeReader.from_json(line))
            except JsonParseError as exc:
                raise JsonParseError(exc.source, number) from exc.__cause__
            except ValidationError as exc:
                raise exc.at_line(number) from exc

        logger.debug("parsed %d exchanges, skipped %d blank lines", len(exchanges), skipped)
        if callback is not None:
            for exchange in exchanges:
                callback(exchange)
        return exchanges

