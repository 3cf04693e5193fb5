"""Shared HTTP transport utilities for the collection REST adapter.

This module provides a thin wrapper around ``requests.Session`` so the adapter
shares timeout policy, retry behavior, and credential header construction.

Dependencies:
    - ``requests`` for network I/O.
    - ``schemadmin.adapters.api_errors.ApiTimeoutError`` for typed transport
      failures.

Call context:
    - Constructed by ``schemadmin/adapters/collection_rest.py``.
    - Used only inside adapter methods; use cases interact through ports.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from schemadmin.adapters.api_errors import ApiTimeoutError


IDEMPOTENT_METHODS = frozenset({"GET", "PUT", "DELETE"})


@dataclass
class HttpConfig:
    """Timeout, retry and credential configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Default timeout in seconds for JSON API calls.
        retries: Number of retry attempts after the initial request.
        app_id: Application id sent as ``X-Parse-Application-Id``.
        api_key: REST key sent as ``X-Parse-REST-API-Key``.
        session_token: User session sent as ``X-Parse-Session-Token``.
    """
    request_timeout_s: int = 10
    retries: int = 2
    app_id: Optional[str] = None
    api_key: Optional[str] = None
    session_token: Optional[str] = None


class RetryingSession:
    """Shared requests wrapper with credential headers and retry loops.

    Transport-only: callers provide endpoint URLs and decide how to map non-2xx
    responses into use-case errors.
    """

    def __init__(self, cfg: HttpConfig) -> None:
        """Create a retry-enabled session.

        Args:
            cfg: Shared timeout, retry, and credential settings.
        """
        self.session = requests.Session()
        self.cfg = cfg

    def _headers(self, json_body: bool = False) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.cfg.app_id:
            headers["X-Parse-Application-Id"] = self.cfg.app_id
        if self.cfg.api_key:
            headers["X-Parse-REST-API-Key"] = self.cfg.api_key
        if self.cfg.session_token:
            headers["X-Parse-Session-Token"] = self.cfg.session_token
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a request; idempotent methods are retried on timeout/connectivity failures.

        Args:
            method: HTTP verb.
            url: Absolute endpoint URL.
            params: Optional query parameter mapping.
            json_body: Optional payload serialized to JSON text.
            timeout: Optional timeout override in seconds.

        Returns:
            ``requests.Response`` from the first attempt that reached the server.

        Raises:
            ApiTimeoutError: If all attempts fail with timeout/connection errors.
        """
        context = f"{method} {url}"
        data = None if json_body is None else json.dumps(json_body)
        last_err: ApiTimeoutError | None = None
        # POST is sent once.
        attempts = self.cfg.retries + 1 if method in IDEMPOTENT_METHODS else 1
        for _ in range(attempts):
            try:
                return self.session.request(
                    method,
                    url,
                    params=params,
                    data=data,
                    headers=self._headers(json_body=json_body is not None),
                    timeout=timeout or self.cfg.request_timeout_s,
                )
            except (req_exc.Timeout, req_exc.ConnectionError):
                last_err = ApiTimeoutError(f"Timeout contacting {url}", context=context)
        raise last_err

    def get(self, url: str, *, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.request("GET", url, params=params)

    def post(self, url: str, *, json_body: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.request("POST", url, json_body=json_body)

    def put(self, url: str, *, json_body: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.request("PUT", url, json_body=json_body)

    def delete(self, url: str) -> requests.Response:
        return self.request("DELETE", url)


__all__ = ["HttpConfig", "RetryingSession"]
