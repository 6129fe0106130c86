"""Error types raised by the CardConnect client.

Declines are not errors: a processor that answers with a decline produces a
normal ``TransactionResult`` with ``success=False``. The exceptions below
cover the cases where no meaningful result can be produced at all.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class CardConnectError(Exception):
    """Base class for every error raised by this package."""


class CallerContractError(CardConnectError, ValueError):
    """Required configuration or argument missing, or an option not recognised."""


class TransportError(CardConnectError):
    def __init__(
        self,
        message: str,
        *,
        action: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.action = action
        self.status_code = status_code


class ResponseFormatError(CardConnectError, ValueError):
    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.payload = payload or {}
