import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass

from xrpl.asyncio.clients.client import Client
from xrpl.models.amounts import IssuedCurrencyAmount
from xrpl.models.requests import AccountOffers
from xrpl.models.transactions import OfferCreate
from xrpl.utils import xrp_to_drops
from xrpl.wallet import Wallet

import fillbook.constants as C
from fillbook.rpc import request, submit_transaction

log = logging.getLogger("fillbook.book")


@dataclass(frozen=True, slots=True)
class Offer:
    owner: str
    sell_xrp: int
    buy_value: int
    buy_currency: str
    buy_issuer: str

    def to_transaction(self) -> OfferCreate:
        return OfferCreate(
            account=self.owner,
            taker_gets=xrp_to_drops(self.sell_xrp),
            taker_pays=IssuedCurrencyAmount(
                currency=self.buy_currency,
                issuer=self.buy_issuer,
                value=str(self.buy_value),
            ),
        )


class BookPopulator:
    """Places one resting XRP/<currency> offer per wallet."""

    def __init__(
        self,
        user: Client,
        *,
        currency: str = C.DEFAULT_OFFER_CURRENCY,
        amount_min: int = C.OFFER_AMOUNT_MIN,
        amount_max: int = C.OFFER_AMOUNT_MAX,
        rng: random.Random | None = None,
    ):
        if amount_min > amount_max:
            raise ValueError(f"offer range is empty: [{amount_min}, {amount_max}]")
        self.user = user
        self.currency = currency
        self.amount_min = amount_min
        self.amount_max = amount_max
        self.rng = rng or random.Random()

    async def has_offer(self, address: str) -> bool:
        res = await request(self.user, AccountOffers(account=address))
        return len(res.get("offers") or []) > 0

    def random_offer(self, wallet: Wallet, issuer: Wallet) -> Offer:
        return Offer(
            owner=wallet.address,
            sell_xrp=self.rng.randint(self.amount_min, self.amount_max),
            buy_value=self.rng.randint(self.amount_min, self.amount_max),
            buy_currency=self.currency,
            buy_issuer=issuer.address,
        )

    async def populate(self, wallets: Sequence[Wallet], issuer: Wallet) -> int:
        """Create an offer for every wallet that has none. Returns how many were created.

        A rejected offer is logged and skipped; the rest of the batch still runs.
        """
        created = 0
        for i, wallet in enumerate(wallets):
            if await self.has_offer(wallet.address):
                log.info("trader #%s (%s) created offer already", i, wallet.address)
                continue

            offer = self.random_offer(wallet, issuer)
            res = await submit_transaction(self.user, offer.to_transaction(), wallet)
            if not res.is_success:
                log.warning(
                    "trader #%s (%s) offer rejected: %s - %s",
                    i, wallet.address, res.engine_result, res.engine_result_message,
                )
                continue

            created += 1
            log.info(
                "trader #%s (%s) created offer (%s XRP for %s %s)",
                i, wallet.address, offer.sell_xrp, offer.buy_value, offer.buy_currency,
            )
        return created
