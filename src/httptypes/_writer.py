"""Writing exchanges as HTTP Types JSON Lines.

Requests are written with all three of ``path``, ``pathname`` and
``query``; multi-value maps use a bare string for a single value and a
list for several. Optional fields are omitted rather than written as null.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from httptypes._request import HttpRequest
    from httptypes._response import HttpExchange, HttpResponse


def exchange_to_dict(exchange: HttpExchange) -> dict[str, Any]:
    """Convert an exchange to its JSON-ready structure."""
    return {
        "request": _request_to_dict(exchange.request),
        "response": _response_to_dict(exchange.response),
    }


def _request_to_dict(request: HttpRequest) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if request.timestamp is not None:
        data["timestamp"] = request.timestamp.isoformat()
    data["method"] = request.method.value
    data["protocol"] = request.protocol.value
    data["host"] = request.host
    data["headers"] = request.headers.to_dict()
    if request.body is not None:
        data["body"] = request.body
    data["path"] = request.path
    data["pathname"] = request.pathname
    data["query"] = request.query.to_dict()
    return data


def _response_to_dict(response: HttpResponse) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if response.timestamp is not None:
        data["timestamp"] = response.timestamp.isoformat()
    data["statusCode"] = response.status_code
    data["headers"] = response.headers.to_dict()
    if response.body is not None:
        data["body"] = response.body
    return data


class HttpExchangeWriter:
    """Accumulates exchanges as JSON Lines in an in-memory buffer.

    Each ``write`` appends one compact JSON document and a newline.
    Instances are not shared between threads; use one writer per producer.
    """

    def __init__(self) -> None:
        self.buffer = ""

    def write(self, exchange: HttpExchange) -> None:
        self.buffer += to_json(exchange) + "\n"


def to_json(exchange: HttpExchange) -> str:
    """Serialize an exchange as a single line of compact JSON."""
    return json.dumps(exchange_to_dict(exchange), separators=(",", ":"), ensure_ascii=False)
