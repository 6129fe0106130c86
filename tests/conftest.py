"""Pytest fixtures for gateway, transport and mapping tests."""

import pytest

from cardconnect.clients.mocks.transport import CardConnectMockTransport
from cardconnect.config import GatewaySettings
from cardconnect.contracts.interfaces import BankAccount, CreditCard
from cardconnect.gateway import CardConnectGateway


@pytest.fixture
def settings():
    return GatewaySettings(merchant_id="496160873888", username="testing", password="testing123")


@pytest.fixture
def transport():
    """Offline transport; tests queue the processor responses they need."""
    return CardConnectMockTransport()


@pytest.fixture
def gateway(settings, transport):
    return CardConnectGateway(settings, transport=transport)


@pytest.fixture
def card():
    return CreditCard(
        number="4111111111111111",
        month=9,
        year=2027,
        verification_value="123",
        name="Longbob Longsen",
    )


@pytest.fixture
def bank_account():
    return BankAccount(account_number="1234567890", routing_number="036001808", name="Jim Smith")
