"""
Tests for BookPopulator.

One offer per wallet, wallets with an offer are skipped, and a rejected
offer does not stop the rest of the batch.
"""

import asyncio
import random

import pytest
from xrpl.models.amounts import IssuedCurrencyAmount

from fillbook.book import BookPopulator, Offer
from fillbook.wallets import WalletProvisioner


@pytest.fixture
def funded(admin, genesis):
    p = WalletProvisioner(admin, genesis)

    async def go():
        return [await p.provision(i) for i in range(4)]

    issuer, *traders = asyncio.run(go())
    return issuer, traders


def test_offer_transaction():
    offer = Offer(owner="rOwner", sell_xrp=250, buy_value=640, buy_currency="XAU", buy_issuer="rIssuer")
    txn = offer.to_transaction()

    assert txn.account == "rOwner"
    assert txn.taker_gets == "250000000"
    assert txn.taker_pays == IssuedCurrencyAmount(currency="XAU", issuer="rIssuer", value="640")


def test_empty_range_rejected(user):
    with pytest.raises(ValueError):
        BookPopulator(user, amount_min=10, amount_max=5)


class TestPopulate:

    def test_example_two_offers(self, network, user, funded, rng):
        issuer, traders = funded
        created = asyncio.run(BookPopulator(user, rng=rng).populate(traders[:2], issuer))

        assert created == 2
        for w in traders[:2]:
            (offer,) = network.offers[w.address]
            assert 100 <= int(offer["taker_gets"]) // 1_000_000 <= 1000
            assert 100 <= int(offer["taker_pays"]["value"]) <= 1000
            assert offer["taker_pays"]["currency"] == "XAU"
            assert offer["taker_pays"]["issuer"] == issuer.address

    def test_second_pass_creates_nothing(self, network, user, funded, rng):
        issuer, traders = funded
        book = BookPopulator(user, rng=rng)

        first = asyncio.run(book.populate(traders, issuer))
        second = asyncio.run(book.populate(traders, issuer))

        assert (first, second) == (3, 0)
        assert len(network.submitted("OfferCreate")) == 3

    def test_partially_filled_book(self, network, user, funded, rng):
        issuer, traders = funded
        book = BookPopulator(user, rng=rng)
        asyncio.run(book.populate(traders[:1], issuer))

        assert asyncio.run(book.populate(traders, issuer)) == 2

    def test_rejected_offer_does_not_stop_batch(self, network, user, funded, rng):
        issuer, traders = funded
        network.reject_offers_from.add(traders[0].address)

        created = asyncio.run(BookPopulator(user, rng=rng).populate(traders, issuer))

        assert created == 2
        assert len(network.submitted("OfferCreate")) == 3
        assert traders[0].address not in network.offers
        assert all(w.address in network.offers for w in traders[1:])

    def test_rejected_offer_is_retried_on_next_pass(self, network, user, funded, rng):
        issuer, traders = funded
        network.reject_offers_from.add(traders[0].address)
        book = BookPopulator(user, rng=rng)
        asyncio.run(book.populate(traders, issuer))

        network.reject_offers_from.clear()
        assert asyncio.run(book.populate(traders, issuer)) == 1

    def test_offers_signed_by_owner_over_user_connection(self, network, user, funded, rng):
        issuer, traders = funded
        network.requests.clear()
        network.submissions.clear()

        asyncio.run(BookPopulator(user, rng=rng).populate(traders, issuer))

        assert {role for role, _ in network.submissions} == {"user"}
        assert network.commands("admin") == []
        assert [tx["Account"] for tx in network.submitted("OfferCreate")] == [w.address for w in traders]

    def test_custom_currency_and_range(self, network, user, funded):
        issuer, traders = funded
        book = BookPopulator(user, currency="USD", amount_min=5, amount_max=5, rng=random.Random(0))
        asyncio.run(book.populate(traders[:1], issuer))

        (offer,) = network.offers[traders[0].address]
        assert offer["taker_gets"] == "5000000"
        assert offer["taker_pays"] == {"currency": "USD", "issuer": issuer.address, "value": "5"}

    def test_amounts_are_seeded(self, funded, user):
        issuer, traders = funded
        a = BookPopulator(user, rng=random.Random(9)).random_offer(traders[0], issuer)
        b = BookPopulator(user, rng=random.Random(9)).random_offer(traders[0], issuer)
        assert a == b
