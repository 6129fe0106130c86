"""
CardConnect payment client.

This package turns card operations (authorize, capture, purchase, refund,
void, verify) into requests against the CardConnect REST API and normalizes
the answers into TransactionResult objects.

Key rule:
- Only clients/ performs network I/O. Everything under processing/ is pure.
- Mock vs real transport selection happens in ONE place
  (cardconnect.clients.select_transport).
"""

from .config import GatewaySettings
from .contracts.interfaces import (
    Address,
    BankAccount,
    CreditCard,
    Instrument,
    TransactionOptions,
    Transport,
)
from .contracts.transactions import (
    AVSResult,
    CVVResult,
    PipelineOutcome,
    StandardErrorCode,
    TransactionResult,
)
from .errors import (
    CallerContractError,
    CardConnectError,
    ResponseFormatError,
    TransportError,
)
from .gateway import CardConnectGateway
from .processing.pipeline import PipelinePolicy

__all__ = [
    # gateway
    "CardConnectGateway", "GatewaySettings",
    # request contracts
    "Address", "BankAccount", "CreditCard", "Instrument",
    "TransactionOptions", "Transport",
    # result contracts
    "AVSResult", "CVVResult", "PipelineOutcome", "PipelinePolicy",
    "StandardErrorCode", "TransactionResult",
    # errors
    "CallerContractError", "CardConnectError", "ResponseFormatError",
    "TransportError",
]
