import logging
import random
from dataclasses import dataclass, field

from xrpl.wallet import Wallet

import fillbook.constants as C
from fillbook.book import BookPopulator
from fillbook.clients import Clients
from fillbook.config import Settings
from fillbook.errors import FillbookError
from fillbook.ledger import LedgerController
from fillbook.wallets import WalletProvisioner

log = logging.getLogger("fillbook.fixtures")


@dataclass
class FillResult:
    issuer: str
    traders: list[str] = field(default_factory=list)
    offers_created: int = 0
    funding_settled: int = 0
    offers_settled: int = 0


class FixtureRun:
    """One run's components, all sharing the same pair of connections."""

    def __init__(self, clients: Clients, settings: Settings, *, rng: random.Random | None = None):
        self.settings = settings
        self.genesis = Wallet.from_seed(settings.genesis_seed)
        if settings.genesis_address and self.genesis.address != settings.genesis_address:
            raise FillbookError(
                f"genesis seed derives {self.genesis.address}, configured address is {settings.genesis_address}"
            )
        self.ledger = LedgerController(clients.admin)
        self.provisioner = WalletProvisioner(clients.admin, self.genesis, funding_xrp=settings.funding_xrp)
        self.book = BookPopulator(
            clients.user,
            currency=settings.offer_currency,
            amount_min=settings.offer_min,
            amount_max=settings.offer_max,
            rng=rng,
        )

    async def fill_book(self, count: int | None = None) -> FillResult:
        """Fund an issuer and `count` traders, settle, then give every trader an offer and settle again.

        Safe to re-run: funded wallets are not funded twice and traders with a
        live offer are skipped.
        """
        count = self.settings.wallet_count if count is None else count
        if count < 0:
            raise ValueError(f"wallet count must not be negative: {count}")

        log.info("will create %s wallets", count)
        issuer = await self.provisioner.provision(C.ISSUER_INDEX)
        traders = [await self.provisioner.provision(C.FIRST_TRADER_INDEX + i) for i in range(count)]
        result = FillResult(issuer=issuer.address, traders=[w.address for w in traders])
        result.funding_settled = await self.ledger.advance()

        log.info("will create %s offers", count)
        result.offers_created = await self.book.populate(traders, issuer)
        result.offers_settled = await self.ledger.advance()

        log.info("all done: %s/%s offers created", result.offers_created, count)
        return result
