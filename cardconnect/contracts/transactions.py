"""
Transaction result contracts.

Every gateway operation returns a ``TransactionResult``; composite operations
(purchase, verify) can also return the ``PipelineOutcome`` that produced it.
These models are frozen: once a response has been classified its result
never changes.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, field_serializer, field_validator
from pydantic.config import ConfigDict


class StandardErrorCode(str, Enum):
    INCORRECT_NUMBER = "incorrect_number"
    INVALID_NUMBER = "invalid_number"
    INVALID_EXPIRY_DATE = "invalid_expiry_date"
    INVALID_CVC = "invalid_cvc"
    EXPIRED_CARD = "expired_card"
    INCORRECT_CVC = "incorrect_cvc"
    INCORRECT_ZIP = "incorrect_zip"
    INCORRECT_ADDRESS = "incorrect_address"
    INCORRECT_PIN = "incorrect_pin"
    CARD_DECLINED = "card_declined"
    PROCESSING_ERROR = "processing_error"
    CALL_ISSUER = "call_issuer"
    PICKUP_CARD = "pickup_card"
    CONFIG_ERROR = "config_error"
    TEST_MODE_LIVE_CARD = "test_mode_live_card"
    UNSUPPORTED_FEATURE = "unsupported_feature"


# ---------------------------------------------------------------------------
# Address verification
# ---------------------------------------------------------------------------

AVS_MESSAGES: Dict[str, str] = {
    "A": "Street address matches, but postal code does not match.",
    "B": "Street address matches, but postal code not verified.",
    "C": "Street address and postal code do not match.",
    "D": "Street address and postal code match.",
    "E": "AVS data is invalid or AVS is not allowed for this card type.",
    "F": "Card member's name does not match, but billing postal code matches.",
    "G": "Non-U.S. issuing bank does not support AVS.",
    "H": "Card member's name does not match. Street address and postal code match.",
    "I": "Address not verified.",
    "J": "Card member's name, billing address, and postal code match. Shipping information verified "
         "and chargeback protection guaranteed through the Fraud Protection Program.",
    "K": "Card member's name matches but billing address and billing postal code do not match.",
    "L": "Card member's name and billing postal code match, but billing address does not match.",
    "M": "Street address and postal code match.",
    "N": "Street address and postal code do not match.",
    "O": "Card member's name and billing address match, but billing postal code does not match.",
    "P": "Postal code matches, but street address not verified.",
    "Q": "Card member's name, billing address, and postal code match. Shipping information verified "
         "but chargeback protection not guaranteed.",
    "R": "System unavailable.",
    "S": "U.S.-issuing bank does not support AVS.",
    "T": "Card member's name does not match, but street address matches.",
    "U": "Address information unavailable.",
    "V": "Card member's name, billing address, and billing postal code match.",
    "W": "Street address does not match, but 9-digit postal code matches.",
    "X": "Street address and 9-digit postal code match.",
    "Y": "Street address and 5-digit postal code match.",
    "Z": "Street address does not match, but 5-digit postal code matches.",
}

# Y = match, N = no match, X = not supported; codes absent from both mean "not checked".
_AVS_POSTAL_MATCH = {
    "Y": set("DHFJLMPQVWXYZ"),
    "N": set("ACKNO"),
    "X": set("GS"),
}
_AVS_STREET_MATCH = {
    "Y": set("ABDHJMOQTVXY"),
    "N": set("CKLNWZ"),
    "X": set("GS"),
}

CVV_MESSAGES: Dict[str, str] = {
    "D": "CVV check flagged transaction as suspicious",
    "I": "CVV failed data validation check",
    "M": "CVV matches",
    "N": "CVV does not match",
    "P": "CVV not processed",
    "S": "CVV should have been present",
    "U": "CVV request unable to be processed by issuer",
    "X": "Card does not support CVV",
}


def _normalize_code(code: Any) -> Optional[str]:
    if code is None:
        return None
    value = str(code).strip().upper()
    return value or None


def _match_for(code: Optional[str], table: Dict[str, set]) -> Optional[str]:
    if code is None:
        return None
    for outcome, codes in table.items():
        if code in codes:
            return outcome
    return None


class AVSResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: Optional[str] = None
    message: Optional[str] = None
    street_match: Optional[str] = None
    postal_match: Optional[str] = None

    @classmethod
    def from_code(cls, code: Any) -> "AVSResult":
        normalized = _normalize_code(code)
        return cls(
            code=normalized,
            message=AVS_MESSAGES.get(normalized) if normalized else None,
            street_match=_match_for(normalized, _AVS_STREET_MATCH),
            postal_match=_match_for(normalized, _AVS_POSTAL_MATCH),
        )


class CVVResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_code(cls, code: Any) -> "CVVResult":
        normalized = _normalize_code(code)
        return cls(code=normalized, message=CVV_MESSAGES.get(normalized) if normalized else None)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class TransactionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    message: Optional[str] = None
    authorization: Optional[str] = Field(default=None, description="Opaque token for capture/void/refund.")
    avs_result: AVSResult = Field(default_factory=AVSResult)
    cvv_result: CVVResult = Field(default_factory=CVVResult)
    error_code: Optional[StandardErrorCode] = None
    test: bool = False
    params: Mapping[str, Any] = Field(
        default_factory=dict, validate_default=True, description="Raw processor response (read-only)."
    )

    @field_validator("params")
    @classmethod
    def _freeze_params(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @field_serializer("params")
    def _dump_params(self, value: Mapping[str, Any]) -> Dict[str, Any]:
        return dict(value)


class PipelineOutcome(BaseModel):
    """Results of a composite operation plus the one shown to the caller."""

    model_config = ConfigDict(frozen=True)

    results: Tuple[TransactionResult, ...]
    discarded: Tuple[TransactionResult, ...] = ()
    primary: TransactionResult
    success: bool

    @property
    def authorization(self) -> Optional[str]:
        return self.primary.authorization
