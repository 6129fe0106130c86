from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from cardconnect.errors import CallerContractError


# ---------------------------------------------------------------------------
# Payment instruments
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CreditCard:
    number: str
    month: int
    year: int                            # 2 or 4 digits; only the last two are sent
    verification_value: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class BankAccount:
    account_number: str
    routing_number: str
    name: Optional[str] = None


Instrument = Union[CreditCard, BankAccount]


# ---------------------------------------------------------------------------
# Request options
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Address:
    address1: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip: Optional[str] = None
    phone: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Union["Address", Mapping[str, Any], None]) -> Optional["Address"]:
        if data is None or isinstance(data, Address):
            return data
        known = {"address1", "city", "state", "country", "zip", "phone"}
        return cls(**{k: v for k, v in data.items() if k in known})


Amount = Union[int, str]
LineItem = Mapping[str, Any]

_OPTION_KEYS = {
    "currency",
    "recurring",
    "email",
    "billing_address",
    "address",
    "shipping_address",
    "purchase_order",
    "purchase_number",
    "tax_amount",
    "freight_amount",
    "duty_amount",
    "order_date",
    "ship_from_zip",
    "line_items",
}


@dataclass(frozen=True)
class TransactionOptions:
    """Per-call options. ``None`` means the field is absent and is never sent."""

    currency: Optional[str] = None
    recurring: bool = False
    email: Optional[str] = None
    billing_address: Optional[Address] = None
    shipping_address: Optional[Address] = None
    purchase_order: bool = False
    purchase_number: Optional[str] = None
    tax_amount: Optional[Amount] = None
    freight_amount: Optional[Amount] = None
    duty_amount: Optional[Amount] = None
    order_date: Optional[str] = None
    ship_from_zip: Optional[str] = None
    line_items: Optional[Tuple[LineItem, ...]] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TransactionOptions":
        unknown = set(data) - _OPTION_KEYS
        if unknown:
            raise CallerContractError(f"Unrecognised transaction options: {', '.join(sorted(unknown))}.")

        values: Dict[str, Any] = {k: v for k, v in data.items() if k not in {"address", "billing_address"}}
        billing = data.get("billing_address")
        if billing is None:
            billing = data.get("address")
        values["billing_address"] = Address.from_mapping(billing)
        values["shipping_address"] = Address.from_mapping(data.get("shipping_address"))
        values["recurring"] = bool(data.get("recurring", False))
        values["purchase_order"] = bool(data.get("purchase_order", False))
        if data.get("line_items") is not None:
            values["line_items"] = _coerce_line_items(data["line_items"])
        return cls(**values)

    @classmethod
    def coerce(cls, options: Union["TransactionOptions", Mapping[str, Any], None]) -> "TransactionOptions":
        if options is None:
            return cls()
        if isinstance(options, TransactionOptions):
            return options
        return cls.from_mapping(options)


def _coerce_line_items(items: Sequence[LineItem]) -> Tuple[LineItem, ...]:
    if isinstance(items, (str, bytes)) or isinstance(items, Mapping):
        raise CallerContractError("line_items must be a sequence of mappings.")
    return tuple(dict(item) for item in items)


OptionsLike = Union[TransactionOptions, Mapping[str, Any], None]


# ---------------------------------------------------------------------------
# Transport interface
# ---------------------------------------------------------------------------

class Transport(ABC):
    """Sends one payload to the processor and returns the raw response body."""

    @abstractmethod
    def send(self, action: str, payload: Dict[str, Any]) -> bytes:
        """Raise ``TransportError`` on network, TLS or HTTP status failures."""
