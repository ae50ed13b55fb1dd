"""Shared HTTP transport for the wallet REST adapter.

Thin wrapper around ``requests.Session`` that owns timeout policy, retries on
connectivity failures and the ``X-API-Key`` header.

Call context:
    Constructed by ``zsend.adapters.wallet_rest.WalletRestAdapter``; use cases
    only ever talk to the ``WalletPort`` protocol.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from zsend.adapters.api_errors import ApiTimeoutError

_log = logging.getLogger(__name__)


@dataclass
class HttpConfig:
    """Timeout and retry configuration for wallet HTTP calls.

    Attributes:
        request_timeout_s: Timeout in seconds for balance queries.
        send_timeout_s: Timeout in seconds for broadcast requests, which wait
            for the wallet to build and sign the transaction.
        retries: Retry attempts after the initial request for idempotent calls.
    """
    request_timeout_s: int = 10
    send_timeout_s: int = 120
    retries: int = 2


class RetryingSession:
    """``requests`` wrapper with API-key headers and a retry loop for GETs."""

    def __init__(self, api_key: Optional[str], cfg: HttpConfig) -> None:
        self.session = requests.Session()
        self.api_key = api_key
        self.cfg = cfg

    def _headers(self, *, json_body: bool = False) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def get(self, url: str, *, timeout: Optional[int] = None) -> requests.Response:
        """Send a GET request, retrying on timeout/connectivity failures.

        Raises:
            ApiTimeoutError: If every attempt fails at the transport level.
        """
        attempts = self.cfg.retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return self.session.get(
                    url,
                    headers=self._headers(),
                    timeout=timeout or self.cfg.request_timeout_s,
                )
            except (req_exc.Timeout, req_exc.ConnectionError) as exc:
                _log.debug("GET %s failed (attempt %d/%d): %s", url, attempt, attempts, exc)
        raise ApiTimeoutError(f"Timeout contacting {url}", context=f"GET {url}")

    def post(
        self,
        url: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a single JSON POST.

        Broadcasts are not idempotent, so a transport failure is reported
        immediately instead of being retried.
        """
        data = None if json_body is None else json.dumps(json_body)
        try:
            return self.session.post(
                url,
                data=data,
                headers=self._headers(json_body=json_body is not None),
                timeout=timeout or self.cfg.send_timeout_s,
            )
        except (req_exc.Timeout, req_exc.ConnectionError) as exc:
            raise ApiTimeoutError(f"Timeout contacting {url}", context=f"POST {url}") from exc

    def close(self) -> None:
        self.session.close()


__all__ = ["HttpConfig", "RetryingSession"]
