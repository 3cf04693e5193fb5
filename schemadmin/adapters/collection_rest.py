"""REST adapter for a Parse-style collection API.

Implements ``CollectionPort`` and ``SessionPort`` on top of
``RetryingSession``. Records leave this adapter with the server identifier
exposed as ``id`` (the server calls it ``objectId``).

Endpoints:
    - ``GET/POST /classes/<collection>``
    - ``GET/PUT/DELETE /classes/<collection>/<id>``
    - ``GET /users/me``, ``POST /logout``, ``GET /schemas``
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

from schemadmin.adapters.api_errors import raise_for_status
from schemadmin.adapters.http_client import HttpConfig, RetryingSession
from schemadmin.domain.entities import ID_FIELD
from schemadmin.domain.ports import (
    CollectionPort,
    Condition,
    ObjectId,
    Record,
    SessionPort,
)

_SERVER_ID = "objectId"
_READ_ONLY_FIELDS = (ID_FIELD, _SERVER_ID, "createdAt", "updatedAt")


def order_param(sort: Mapping[str, int]) -> Optional[str]:
    """Translate ``{"field": 1|-1}`` into ``order=field,-other``."""
    keys = [name if direction >= 0 else f"-{name}" for name, direction in sort.items()]
    return ",".join(keys) or None


def to_record(payload: Mapping[str, Any]) -> Record:
    record = dict(payload)
    if _SERVER_ID in record:
        record[ID_FIELD] = record.pop(_SERVER_ID)
    return record


def to_body(obj: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in obj.items() if key not in _READ_ONLY_FIELDS}


class CollectionRestAdapter(CollectionPort, SessionPort):
    """Blocking HTTP access to collections, the session and the schemas."""

    def __init__(self, base_url: str, cfg: Optional[HttpConfig] = None) -> None:
        self.base_url = str(base_url).rstrip("/")
        self.http = RetryingSession(cfg or HttpConfig())
        self._log = logging.getLogger(__name__)

    def _url(self, *parts: str) -> str:
        return "/".join([self.base_url, *(quote(str(part), safe="") for part in parts)])

    def _json(self, resp: Any, ctx: str) -> Any:
        raise_for_status(resp, ctx)
        if not getattr(resp, "content", b""):
            return {}
        return resp.json()

    # ---------- CollectionPort ----------

    def find(self, collection: str, query: Mapping[str, Any]) -> List[Record]:
        params: Dict[str, Any] = {
            "where": json.dumps(query.get("where") or {}),
            "limit": int(query.get("limit", 20)),
            "skip": int(query.get("skip", 0)),
        }
        order = order_param(query.get("sort") or {})
        if order:
            params["order"] = order
        self._log.debug("find %s %s", collection, params)
        payload = self._json(self.http.get(self._url("classes", collection), params=params), f"find {collection}")
        return [to_record(item) for item in payload.get("results") or []]

    def count(self, collection: str, where: Condition) -> int:
        params = {"where": json.dumps(where or {}), "count": 1, "limit": 0}
        payload = self._json(self.http.get(self._url("classes", collection), params=params), f"count {collection}")
        return int(payload.get("count") or 0)

    def get(self, collection: str, object_id: ObjectId) -> Record:
        resp = self.http.get(self._url("classes", collection, object_id))
        return to_record(self._json(resp, f"get {collection}/{object_id}"))

    def upsert(self, collection: str, obj: Record) -> Record:
        object_id = obj.get(ID_FIELD)
        body = to_body(obj)
        if object_id:
            resp = self.http.put(self._url("classes", collection, object_id), json_body=body)
            payload = self._json(resp, f"update {collection}/{object_id}")
        else:
            resp = self.http.post(self._url("classes", collection), json_body=body)
            payload = self._json(resp, f"create {collection}")
        saved = dict(obj)
        saved.update(to_record(payload))
        return saved

    def delete(self, collection: str, object_id: ObjectId) -> None:
        resp = self.http.delete(self._url("classes", collection, object_id))
        raise_for_status(resp, f"delete {collection}/{object_id}")

    # ---------- SessionPort ----------

    def current_user(self) -> Record:
        return to_record(self._json(self.http.get(self._url("users", "me")), "current user"))

    def sign_out(self) -> None:
        raise_for_status(self.http.post(self._url("logout")), "sign out")
        self.http.cfg.session_token = None

    def schemas(self) -> List[Record]:
        payload = self._json(self.http.get(self._url("schemas")), "schemas")
        return list(payload.get("results") or [])


__all__ = ["CollectionRestAdapter", "order_param", "to_body", "to_record"]
