"""
Contracts (data models).

Request side (interfaces.py): instruments, addresses, per-call options and the
Transport interface. Result side (transactions.py): normalized transaction
results, AVS/CVV outcomes and pipeline outcomes.

Both the mock and the real HTTP transports are driven through these models,
so the gateway never passes ad-hoc dicts between layers.
"""

from .interfaces import (
    Address,
    BankAccount,
    CreditCard,
    Instrument,
    OptionsLike,
    TransactionOptions,
    Transport,
)
from .transactions import (
    AVSResult,
    CVVResult,
    PipelineOutcome,
    StandardErrorCode,
    TransactionResult,
)

__all__ = [
    "Address", "BankAccount", "CreditCard", "Instrument", "OptionsLike",
    "TransactionOptions", "Transport",
    "AVSResult", "CVVResult", "PipelineOutcome", "StandardErrorCode",
    "TransactionResult",
]
