from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

import pytest
from requests import exceptions as req_exc

from schemadmin.adapters.api_errors import ApiClientError, ApiServerError, ApiTimeoutError
from schemadmin.adapters.collection_rest import CollectionRestAdapter, order_param, to_body
from schemadmin.adapters.http_client import HttpConfig


class _ResponseStub:
    def __init__(self, payload: Any = None, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code
        self.content = b"" if payload is None else json.dumps(payload).encode()
        self.text = "" if payload is None else json.dumps(payload)

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no body")
        return self._payload


class _SessionStub:
    def __init__(self, responses: Sequence[Any]) -> None:
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> _ResponseStub:
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self._responses:
            raise RuntimeError("No stub response configured")
        resp = self._responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp


def _adapter(responses, **cfg) -> CollectionRestAdapter:
    adapter = CollectionRestAdapter("http://api.local/parse/", HttpConfig(**cfg))
    adapter.http.session = _SessionStub(responses)  # type: ignore[assignment]
    return adapter


def test_find_sends_where_paging_and_order() -> None:
    adapter = _adapter(
        [_ResponseStub({"results": [{"objectId": "a1", "title": "Hello"}]})],
        app_id="app",
        api_key="rest",
        session_token="r:tok",
    )

    rows = adapter.find(
        "articles",
        {"where": {"views": 3}, "limit": 20, "skip": 40, "sort": {"createdAt": -1, "title": 1}},
    )

    assert rows == [{"id": "a1", "title": "Hello"}]
    call = adapter.http.session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "http://api.local/parse/classes/articles"
    assert call["params"] == {"where": '{"views": 3}', "limit": 20, "skip": 40, "order": "-createdAt,title"}
    assert call["headers"]["X-Parse-Application-Id"] == "app"
    assert call["headers"]["X-Parse-REST-API-Key"] == "rest"
    assert call["headers"]["X-Parse-Session-Token"] == "r:tok"
    assert call["timeout"] == 10


def test_count_uses_count_flag_without_rows() -> None:
    adapter = _adapter([_ResponseStub({"results": [], "count": 57})])

    assert adapter.count("articles", {}) == 57
    assert adapter.http.session.calls[0]["params"] == {"where": "{}", "count": 1, "limit": 0}


def test_upsert_creates_without_id_and_updates_with_id() -> None:
    adapter = _adapter(
        [
            _ResponseStub({"objectId": "n1", "createdAt": "2024-01-01T00:00:00Z"}, status_code=201),
            _ResponseStub({"updatedAt": "2024-01-02T00:00:00Z"}),
        ]
    )

    created = adapter.upsert("products", {"name": "Widget"})
    updated = adapter.upsert("products", {"id": "n1", "name": "Gadget", "createdAt": "x"})

    assert created == {"id": "n1", "name": "Widget", "createdAt": "2024-01-01T00:00:00Z"}
    assert updated["updatedAt"] == "2024-01-02T00:00:00Z"
    create_call, update_call = adapter.http.session.calls
    assert (create_call["method"], create_call["url"]) == ("POST", "http://api.local/parse/classes/products")
    assert json.loads(create_call["data"]) == {"name": "Widget"}
    assert (update_call["method"], update_call["url"]) == ("PUT", "http://api.local/parse/classes/products/n1")
    assert json.loads(update_call["data"]) == {"name": "Gadget"}
    assert update_call["headers"]["Content-Type"] == "application/json"


def test_object_ids_are_quoted_in_paths() -> None:
    adapter = _adapter([_ResponseStub({"objectId": "a/b", "title": "x"})])

    assert adapter.get("articles", "a/b")["id"] == "a/b"
    assert adapter.http.session.calls[0]["url"] == "http://api.local/parse/classes/articles/a%2Fb"


def test_http_errors_are_typed() -> None:
    adapter = _adapter(
        [
            _ResponseStub({"code": 101, "error": "Object not found."}, status_code=404),
            _ResponseStub({"error": "boom"}, status_code=500),
        ]
    )

    with pytest.raises(ApiClientError) as not_found:
        adapter.get("articles", "missing")
    with pytest.raises(ApiServerError):
        adapter.delete("articles", "a1")

    assert not_found.value.status == 404
    assert not_found.value.code == "101"
    assert "Object not found." in str(not_found.value)


def test_timeouts_are_retried_then_raised() -> None:
    adapter = _adapter([req_exc.Timeout(), req_exc.ConnectionError(), req_exc.Timeout()], retries=2)

    with pytest.raises(ApiTimeoutError):
        adapter.count("articles", {})

    assert len(adapter.http.session.calls) == 3


def test_retry_stops_at_first_response() -> None:
    adapter = _adapter([req_exc.Timeout(), _ResponseStub({"count": 2})], retries=2)

    assert adapter.count("articles", {}) == 2
    assert len(adapter.http.session.calls) == 2


def test_session_endpoints() -> None:
    adapter = _adapter(
        [
            _ResponseStub({"objectId": "u1", "username": "ann", "roles": ["admin"]}),
            _ResponseStub({"results": [{"className": "articles", "fields": {}}]}),
            _ResponseStub({}),
        ],
        session_token="r:tok",
    )

    assert adapter.current_user() == {"id": "u1", "username": "ann", "roles": ["admin"]}
    assert adapter.schemas() == [{"className": "articles", "fields": {}}]
    adapter.sign_out()

    urls = [call["url"] for call in adapter.http.session.calls]
    assert urls == [
        "http://api.local/parse/users/me",
        "http://api.local/parse/schemas",
        "http://api.local/parse/logout",
    ]
    assert adapter.http.cfg.session_token is None


def test_helpers() -> None:
    assert order_param({}) is None
    assert order_param({"a": 1, "b": -1}) == "a,-b"
    assert to_body({"id": "1", "objectId": "1", "updatedAt": "t", "name": "n"}) == {"name": "n"}


def test_create_is_not_retried_on_timeout() -> None:
    adapter = _adapter([req_exc.Timeout(), _ResponseStub({"objectId": "dup"})], retries=2)

    with pytest.raises(ApiTimeoutError):
        adapter.upsert("products", {"name": "Widget"})

    assert len(adapter.http.session.calls) == 1
