"""
Real CardConnect HTTP transport.

Used when merchant credentials and an endpoint are configured.

Implementation notes:
- One synchronous httpx call per processor operation; no retries here.
- Payloads are sent as JSON with HTTP basic auth (username/password).
- Any httpx failure, including a non-2xx status, surfaces as TransportError.

Important:
- Keep this module as the ONLY place where CardConnect HTTP calls are made.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from cardconnect.config import GatewaySettings
from cardconnect.contracts.interfaces import Transport
from cardconnect.errors import TransportError

logger = logging.getLogger(__name__)

ACTIONS: Dict[str, str] = {
    "authorize": "auth",
    "authonly": "auth",
    "capture": "capture",
    "void": "void",
    "refund": "refund",
}


class CardConnectHttpTransport(Transport):
    def __init__(
        self,
        settings: GatewaySettings,
        *,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.settings = settings
        self._auth = httpx.BasicAuth(settings.username, settings.password)
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(settings.timeout_seconds),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )

    def url_for(self, action: str) -> str:
        try:
            path = ACTIONS[action]
        except KeyError as exc:
            raise ValueError(f"Unknown CardConnect action '{action}'.") from exc
        return f"{self.settings.base_url.rstrip('/')}/{path}"

    def send(self, action: str, payload: Dict[str, Any]) -> bytes:
        url = self.url_for(action)
        logger.info("[CARDCONNECT] PUT %s (test=%s)", action, self.settings.test_mode)
        try:
            response = self._client.put(url, json=payload, auth=self._auth)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.error("[CARDCONNECT] %s returned HTTP %s", action, status)
            raise TransportError(
                f"CardConnect {action} failed with HTTP {status}.",
                action=action,
                status_code=status,
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("[CARDCONNECT] %s transport failure: %s", action, exc)
            raise TransportError(f"CardConnect {action} request failed: {exc}", action=action) from exc
        return response.content

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "CardConnectHttpTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
