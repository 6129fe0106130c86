"""
Mock transports.

These transports return fake (but realistically shaped) CardConnect responses
without calling any external API. They are used when:
- merchant credentials for the sandbox are not available
- tests need to script exact processor responses

Mock transports implement the same Transport interface as the real one.
"""

from .transport import CardConnectMockTransport

__all__ = ["CardConnectMockTransport"]
