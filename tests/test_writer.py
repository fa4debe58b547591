"""Tests for HttpExchangeWriter and exchange_to_dict."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from httptypes import (
    HttpExchange,
    HttpExchangeReader,
    HttpExchangeWriter,
    HttpHeaders,
    HttpRequest,
    HttpResponse,
    exchange_to_dict,
    parse_exchange,
    to_json,
)


def _exchange(**request_overrides: Any) -> HttpExchange:
    fields: dict[str, Any] = {
        "method": "post",
        "protocol": "https",
        "host": "example.com",
        "headers": {"accept": "*/*", "multi-value": ["value1", "value2"]},
        "pathname": "/a/path",
        "query": {"a": "b", "v": ["1", "2"]},
        "body": "a request body",
    }
    fields.update(request_overrides)
    request = HttpRequest.from_pathname_and_query(**fields)
    response = HttpResponse.create(
        status_code=404, headers={"Upper-Case": "yes"}, body="a response body"
    )
    return HttpExchange(request, response)


class TestExchangeToDict:
    def test_request_has_all_path_forms(self) -> None:
        data = exchange_to_dict(_exchange())["request"]
        assert data["path"] == "/a/path?a=b&v=1&v=2"
        assert data["pathname"] == "/a/path"
        assert data["query"] == {"a": "b", "v": ["1", "2"]}

    def test_enums_are_lowercase(self) -> None:
        data = exchange_to_dict(_exchange(method="POST", protocol="HTTPS"))["request"]
        assert data["method"] == "post"
        assert data["protocol"] == "https"

    def test_multi_value_header_stays_a_list(self) -> None:
        data = exchange_to_dict(_exchange())["request"]
        assert data["headers"] == {"accept": "*/*", "multi-value": ["value1", "value2"]}

    def test_key_order(self) -> None:
        ts = datetime(2018, 11, 13, 18, 20, 39, tzinfo=timezone.utc)
        data = exchange_to_dict(_exchange(timestamp=ts))
        assert list(data) == ["request", "response"]
        assert list(data["request"]) == [
            "timestamp", "method", "protocol", "host", "headers", "body",
            "path", "pathname", "query",
        ]
        assert list(data["response"]) == ["statusCode", "headers", "body"]

    def test_absent_optionals_are_omitted(self) -> None:
        request = HttpRequest.from_path(
            method="get", protocol="http", host="h", headers={}, path="/"
        )
        response = HttpResponse(status_code=204, headers=HttpHeaders())
        data = exchange_to_dict(HttpExchange(request, response))
        assert "body" not in data["request"]
        assert "timestamp" not in data["request"]
        assert data["response"] == {"statusCode": 204, "headers": {}}

    def test_timestamp_is_iso_8601(self) -> None:
        ts = datetime(2018, 11, 13, 18, 20, 39, tzinfo=timezone.utc)
        data = exchange_to_dict(_exchange(timestamp=ts))
        assert data["request"]["timestamp"] == "2018-11-13T18:20:39+00:00"


class TestHttpExchangeWriter:
    def test_starts_empty(self) -> None:
        assert HttpExchangeWriter().buffer == ""

    def test_write_appends_one_line(self) -> None:
        writer = HttpExchangeWriter()
        writer.write(_exchange())
        assert writer.buffer.endswith("\n")
        assert writer.buffer.count("\n") == 1
        assert json.loads(writer.buffer)["response"]["statusCode"] == 404

    def test_writes_accumulate_independent_lines(self) -> None:
        writer = HttpExchangeWriter()
        writer.write(_exchange(pathname="/one"))
        writer.write(_exchange(pathname="/two", body="multi\nline"))
        lines = writer.buffer.splitlines()
        assert len(lines) == 2
        assert [json.loads(line)["request"]["pathname"] for line in lines] == ["/one", "/two"]

    def test_output_is_compact(self) -> None:
        line = to_json(_exchange())
        assert ", " not in line
        assert '": ' not in line

    def test_non_ascii_kept(self) -> None:
        assert "héllo" in to_json(_exchange(body="héllo"))

    def test_round_trip_through_reader(self) -> None:
        ts = datetime(2018, 11, 13, 18, 20, 39, tzinfo=timezone.utc)
        original = _exchange(timestamp=ts)
        writer = HttpExchangeWriter()
        writer.write(original)
        writer.write(original)
        assert HttpExchangeReader.from_json_lines(writer.buffer) == [original, original]

    def test_written_line_reads_back_through_path(self) -> None:
        # On output all three forms are present; input uses "path" first.
        original = _exchange()
        data = json.loads(to_json(original))
        assert parse_exchange(data) == original
