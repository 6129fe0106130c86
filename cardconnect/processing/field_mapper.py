"""
Payload builders for CardConnect requests.

Each builder returns a fresh dict holding only the fields it could populate;
absent (``None``) inputs never produce a key, because the processor treats an
empty field differently from a missing one.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Tuple

from cardconnect.contracts.interfaces import (
    Address,
    BankAccount,
    CreditCard,
    Instrument,
    TransactionOptions,
)

RECURRING_INDICATOR = "R"
ECOMMERCE_INDICATOR = "E"
ECHECK_ACCOUNT_TYPE = "ECHK"

ZERO_DECIMAL_CURRENCIES = frozenset(
    {"BIF", "BYR", "CLP", "CVE", "DJF", "GNF", "ISK", "JPY", "KMF", "KRW",
     "PYG", "RWF", "UGX", "VND", "VUV", "XAF", "XOF", "XPF"}
)
THREE_DECIMAL_CURRENCIES = frozenset({"BHD", "JOD", "KWD", "OMR", "TND"})

_ADDRESS_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("address1", "address"),
    ("city", "city"),
    ("state", "region"),
    ("country", "country"),
    ("zip", "postal"),
    ("phone", "phone"),
)


def _put(post: Dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        post[key] = value


def format_amount(money: int, currency: str) -> str:
    """Render minor-unit ``money`` in the currency's major unit, e.g. 1000 USD -> "10.00"."""
    if isinstance(money, bool) or not isinstance(money, int):
        raise TypeError(f"money must be an integer amount in minor units; got {money!r}")
    code = currency.upper()
    if code in ZERO_DECIMAL_CURRENCIES:
        return str(money)
    exponent = 3 if code in THREE_DECIMAL_CURRENCIES else 2
    return str((Decimal(money) / (Decimal(10) ** exponent)).quantize(Decimal(1).scaleb(-exponent)))


def format_expiry(card: CreditCard) -> str:
    return f"{int(card.month):02d}{int(card.year) % 100:02d}"


def build_invoice_fields(money: int, options: TransactionOptions, default_currency: str = "USD") -> Dict[str, Any]:
    currency = options.currency or default_currency
    return {
        "amount": format_amount(money, currency),
        "currency": currency,
        "ecomind": RECURRING_INDICATOR if options.recurring else ECOMMERCE_INDICATOR,
    }


def build_instrument_fields(instrument: Instrument) -> Dict[str, Any]:
    post: Dict[str, Any] = {}
    if isinstance(instrument, CreditCard):
        _put(post, "name", instrument.name)
        post["account"] = instrument.number
        post["expiry"] = format_expiry(instrument)
        _put(post, "cvv2", instrument.verification_value)
    elif isinstance(instrument, BankAccount):
        _put(post, "name", instrument.name)
        post["accttype"] = ECHECK_ACCOUNT_TYPE
        post["account"] = instrument.account_number
        post["bankaba"] = instrument.routing_number
    else:
        raise TypeError(f"Unsupported payment instrument: {type(instrument).__name__}")
    return post


def build_address_fields(options: TransactionOptions) -> Dict[str, Any]:
    post: Dict[str, Any] = {}
    address: Optional[Address] = options.billing_address
    if address is None:
        return post
    for attr, wire_name in _ADDRESS_FIELDS:
        _put(post, wire_name, getattr(address, attr))
    return post


def build_customer_fields(options: TransactionOptions) -> Dict[str, Any]:
    post: Dict[str, Any] = {}
    _put(post, "email", options.email)
    return post


def normalize_line_item(item: Mapping[str, Any]) -> Dict[str, Any]:
    return {str(key).replace("_", ""): value for key, value in item.items()}


def build_extended_fields(options: TransactionOptions) -> Dict[str, Any]:
    """Purchase-card (level 2/3) data: PO number, tax/freight/duty, shipping and line items."""
    post: Dict[str, Any] = {}
    _put(post, "ponumber", options.purchase_number)
    _put(post, "taxamnt", options.tax_amount)
    _put(post, "frtamnt", options.freight_amount)
    _put(post, "dutyamnt", options.duty_amount)
    _put(post, "orderdate", options.order_date)
    _put(post, "shipfromzip", options.ship_from_zip)
    shipping = options.shipping_address
    if shipping is not None:
        _put(post, "shiptozip", shipping.zip)
        _put(post, "shiptocountry", shipping.country)
    if options.line_items is not None:
        post["items"] = [normalize_line_item(item) for item in options.line_items]
    return post


def build_reference_fields(authorization: str) -> Dict[str, Any]:
    return {"retref": authorization}
