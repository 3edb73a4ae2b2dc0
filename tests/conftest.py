"""
conftest.py - Shared pytest fixtures

Every test gets a fresh FakeRippled with the genesis account funded, the two
client roles pointed at it, and fillbook.rpc's autofill/submit seam routed
into it.
"""

import random

import pytest
from xrpl.wallet import Wallet

import fillbook.constants as C
import fillbook.rpc
from fillbook.clients import Clients
from fillbook.config import Settings

from fake_rippled import FakeRippled, fake_autofill_and_sign, fake_submit


@pytest.fixture
def network(monkeypatch):
    monkeypatch.setattr(fillbook.rpc, "autofill_and_sign", fake_autofill_and_sign)
    monkeypatch.setattr(fillbook.rpc, "submit", fake_submit)
    return FakeRippled()


@pytest.fixture
def admin(network):
    return network.client("admin")


@pytest.fixture
def user(network):
    return network.client("user")


@pytest.fixture
def clients(user, admin):
    return Clients(user=user, admin=admin)


@pytest.fixture
def genesis():
    return Wallet.from_seed(C.GENESIS["seed"])


@pytest.fixture
def settings():
    return Settings(
        user_ws_url="ws://127.0.0.1:6006",
        admin_ws_url="ws://127.0.0.1:6005",
        genesis_seed=C.GENESIS["seed"],
        wallet_count=3,
    )


@pytest.fixture
def rng():
    return random.Random(1234)
