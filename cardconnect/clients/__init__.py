"""
Transport clients.

Switching:
The selection of mock vs real transport happens in ONE place:
``select_transport`` below, driven by CARDCONNECT_INTEGRATIONS_MODE.
"""

from __future__ import annotations

import logging

from cardconnect.config import GatewaySettings
from cardconnect.contracts.interfaces import Transport

from .mocks import CardConnectMockTransport
from .real_http import CardConnectHttpTransport

logger = logging.getLogger(__name__)


def _should_use_real_transport(settings: GatewaySettings) -> bool:
    mode = settings.integrations_mode
    if mode in {"real", "live"}:
        return True
    if mode in {"mock", "test"}:
        return False
    return bool(settings.base_url)


def select_transport(settings: GatewaySettings) -> Transport:
    if _should_use_real_transport(settings):
        return CardConnectHttpTransport(settings)
    logger.warning("[CARDCONNECT] Using mock transport (mode=%s)", settings.integrations_mode or "unset")
    return CardConnectMockTransport()


__all__ = ["CardConnectHttpTransport", "CardConnectMockTransport", "select_transport"]
