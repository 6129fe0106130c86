"""Tests for payload builders."""

import pytest

from cardconnect.contracts.interfaces import Address, BankAccount, CreditCard, TransactionOptions
from cardconnect.processing.field_mapper import (
    build_address_fields,
    build_customer_fields,
    build_extended_fields,
    build_instrument_fields,
    build_invoice_fields,
    build_reference_fields,
    format_amount,
    format_expiry,
    normalize_line_item,
)


def test_invoice_fields_default_currency_and_one_time_indicator():
    post = build_invoice_fields(1000, TransactionOptions())
    assert post == {"amount": "10.00", "currency": "USD", "ecomind": "E"}


def test_invoice_fields_recurring_indicator_and_currency_override():
    post = build_invoice_fields(1999, TransactionOptions(currency="CAD", recurring=True))
    assert post == {"amount": "19.99", "currency": "CAD", "ecomind": "R"}


@pytest.mark.parametrize(
    "money,currency,expected",
    [
        (1, "USD", "0.01"),
        (100, "usd", "1.00"),
        (1000, "JPY", "1000"),
        (1500, "KWD", "1.500"),
    ],
)
def test_format_amount_uses_currency_minor_units(money, currency, expected):
    assert format_amount(money, currency) == expected


def test_format_amount_rejects_non_integer_money():
    with pytest.raises(TypeError):
        format_amount(10.5, "USD")


@pytest.mark.parametrize(
    "month,year,expected",
    [(9, 2027, "0927"), (12, 2030, "1230"), (1, 5, "0105"), (3, 2100, "0300")],
)
def test_expiry_is_four_zero_padded_digits(month, year, expected):
    card = CreditCard(number="4111111111111111", month=month, year=year)
    assert format_expiry(card) == expected
    assert len(format_expiry(card)) == 4


def test_card_fields(card):
    post = build_instrument_fields(card)
    assert post == {
        "name": "Longbob Longsen",
        "account": "4111111111111111",
        "expiry": "0927",
        "cvv2": "123",
    }


def test_card_without_optional_fields_omits_them():
    post = build_instrument_fields(CreditCard(number="4111111111111111", month=1, year=2026))
    assert "cvv2" not in post
    assert "name" not in post


def test_bank_account_fields(bank_account):
    post = build_instrument_fields(bank_account)
    assert post == {
        "name": "Jim Smith",
        "accttype": "ECHK",
        "account": "1234567890",
        "bankaba": "036001808",
    }
    assert "expiry" not in post


def test_unknown_instrument_is_rejected():
    with pytest.raises(TypeError):
        build_instrument_fields({"number": "4111111111111111"})


def test_address_fields_map_to_wire_names():
    options = TransactionOptions(
        billing_address=Address(
            address1="456 My Street",
            city="Ottawa",
            state="ON",
            country="CA",
            zip="K1C2N6",
            phone="(555)555-5555",
        )
    )
    assert build_address_fields(options) == {
        "address": "456 My Street",
        "city": "Ottawa",
        "region": "ON",
        "country": "CA",
        "postal": "K1C2N6",
        "phone": "(555)555-5555",
    }


def test_partial_address_only_sends_present_fields():
    options = TransactionOptions(billing_address=Address(zip="19406"))
    assert build_address_fields(options) == {"postal": "19406"}


def test_empty_string_is_present_and_sent():
    options = TransactionOptions(email="", billing_address=Address(city=""))
    assert build_customer_fields(options) == {"email": ""}
    assert build_address_fields(options) == {"city": ""}


def test_no_options_produce_no_optional_fields():
    options = TransactionOptions()
    assert build_address_fields(options) == {}
    assert build_customer_fields(options) == {}
    assert build_extended_fields(options) == {}


def test_extended_fields_include_only_present_values():
    options = TransactionOptions(
        purchase_number="PO-42",
        tax_amount=500,
        order_date="20260101",
        shipping_address=Address(zip="19406", country="US"),
    )
    assert build_extended_fields(options) == {
        "ponumber": "PO-42",
        "taxamnt": 500,
        "orderdate": "20260101",
        "shiptozip": "19406",
        "shiptocountry": "US",
    }


def test_line_item_keys_drop_underscores():
    assert normalize_line_item({"tax_amount": 5}) == {"taxamount": 5}


def test_line_items_keep_order_and_values():
    options = TransactionOptions(
        line_items=(
            {"line_no": 1, "unit_cost": 250, "description": "widget"},
            {"line_no": 2, "discount_amnt": 0},
        )
    )
    assert build_extended_fields(options)["items"] == [
        {"lineno": 1, "unitcost": 250, "description": "widget"},
        {"lineno": 2, "discountamnt": 0},
    ]


def test_reference_fields():
    assert build_reference_fields("T1") == {"retref": "T1"}


def test_builders_do_not_share_state():
    options = TransactionOptions(email="a@b.c")
    first = build_customer_fields(options)
    first["email"] = "changed"
    assert build_customer_fields(options) == {"email": "a@b.c"}
