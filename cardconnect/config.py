"""
Gateway configuration.

Settings are read from the environment (and a local .env file, via
python-dotenv) so the same code runs against the CardConnect sandbox, the
live endpoint, or the offline mock transport.

Variables:
- CARDCONNECT_MERCHANT_ID / CARDCONNECT_USERNAME / CARDCONNECT_PASSWORD (required)
- CARDCONNECT_TEST_URL / CARDCONNECT_LIVE_URL
- CARDCONNECT_TEST_MODE ("true"/"false", default true)
- CARDCONNECT_TIMEOUT_SECONDS (default 20)
- CARDCONNECT_DEFAULT_CURRENCY (default USD)
- CARDCONNECT_INTEGRATIONS_MODE ("mock" | "real", optional)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping

from dotenv import find_dotenv, load_dotenv

from cardconnect.errors import CallerContractError

DEFAULT_TEST_URL = "https://fts-uat.cardconnect.com/cardconnect/rest/"
DEFAULT_LIVE_URL = "https://fts.cardconnect.com/cardconnect/rest/"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise CallerContractError(f"{name} must be a number; got {raw!r}.") from exc


@dataclass(frozen=True)
class GatewaySettings:
    merchant_id: str = ""
    username: str = ""
    password: str = ""
    test_url: str = DEFAULT_TEST_URL
    live_url: str = DEFAULT_LIVE_URL
    test_mode: bool = True
    timeout_seconds: float = 20.0
    default_currency: str = "USD"
    integrations_mode: str = ""
    error_codes: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls, *, load_env_file: bool = True, **overrides: Any) -> "GatewaySettings":
        """Build settings from CARDCONNECT_* variables; keyword overrides win."""
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True))

        values: Dict[str, Any] = {
            "merchant_id": os.getenv("CARDCONNECT_MERCHANT_ID", ""),
            "username": os.getenv("CARDCONNECT_USERNAME", ""),
            "password": os.getenv("CARDCONNECT_PASSWORD", ""),
            "test_url": os.getenv("CARDCONNECT_TEST_URL", DEFAULT_TEST_URL),
            "live_url": os.getenv("CARDCONNECT_LIVE_URL", DEFAULT_LIVE_URL),
            "test_mode": _env_bool("CARDCONNECT_TEST_MODE", True),
            "timeout_seconds": _env_float("CARDCONNECT_TIMEOUT_SECONDS", 20.0),
            "default_currency": os.getenv("CARDCONNECT_DEFAULT_CURRENCY", "USD").strip().upper() or "USD",
            "integrations_mode": os.getenv("CARDCONNECT_INTEGRATIONS_MODE", "").strip().lower(),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def base_url(self) -> str:
        return self.test_url if self.test_mode else self.live_url

    def with_overrides(self, **overrides: Any) -> "GatewaySettings":
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def missing_credentials(self) -> List[str]:
        missing: List[str] = []
        if not self.merchant_id:
            missing.append("merchant_id")
        if not self.username:
            missing.append("username")
        if not self.password:
            missing.append("password")
        return missing

    def require_credentials(self) -> "GatewaySettings":
        missing = self.missing_credentials()
        if missing:
            raise CallerContractError(f"Missing required gateway settings: {', '.join(missing)}.")
        return self
