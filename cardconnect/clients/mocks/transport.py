"""
CardConnect MOCK transport.

⚠️  Offline implementation for development and testing. No network calls.
    Scripted responses are replayed in order; once the script runs out the
    mock approves every call and generates a fresh token. Every call is
    recorded so tests can assert on the exact payloads sent.
"""

import copy
import json
import logging
import uuid
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from cardconnect.contracts.interfaces import Transport

logger = logging.getLogger(__name__)


class CardConnectMockTransport(Transport):
    """
    Mock CardConnect transport.

    Parameters
    ----------
    responses : iterable of mappings, optional
        Processor responses returned in call order.
    approve_by_default : bool
        If True (default), calls beyond the script are approved with a
        generated token; if False they raise ``AssertionError``.
    """

    def __init__(
        self,
        responses: Optional[Iterable[Mapping[str, Any]]] = None,
        approve_by_default: bool = True,
    ) -> None:
        self._script: List[Mapping[str, Any]] = list(responses or [])
        self._approve_by_default = approve_by_default
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

        logger.info("[CARDCONNECT MOCK] Transport initialised (%d scripted responses)", len(self._script))

    @property
    def actions(self) -> List[str]:
        return [action for action, _ in self.calls]

    def queue(self, *responses: Mapping[str, Any]) -> None:
        self._script.extend(responses)

    def _new_token(self) -> str:
        return f"MOCK-{uuid.uuid4().hex[:12].upper()}"

    def _approval(self, action: str) -> Dict[str, Any]:
        return {
            "respstat": "A",
            "respcode": "00",
            "resptext": "Approval",
            "token": self._new_token(),
            "retref": uuid.uuid4().hex[:12],
            "setlstat": "Queued for Capture" if action in {"authorize", "authonly", "capture"} else None,
        }

    def send(self, action: str, payload: Dict[str, Any]) -> bytes:
        self.calls.append((action, copy.deepcopy(payload)))

        if self._script:
            response = dict(self._script.pop(0))
        elif self._approve_by_default:
            response = {k: v for k, v in self._approval(action).items() if v is not None}
        else:
            raise AssertionError(f"Unexpected CardConnect call '{action}': no scripted response left.")

        logger.info("[CARDCONNECT MOCK] %s -> respstat=%s", action, response.get("respstat"))
        return json.dumps(response).encode("utf-8")
