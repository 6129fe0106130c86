"""
Real HTTP transports.

These talk to the CardConnect REST endpoints (sandbox or live, depending on
GatewaySettings.test_mode) and must implement the same Transport interface
as the mocks.
"""

from .transport import ACTIONS, CardConnectHttpTransport

__all__ = ["ACTIONS", "CardConnectHttpTransport"]
