import asyncio
import logging
from decimal import Decimal

from xrpl import CryptoAlgorithm
from xrpl.asyncio.clients.client import Client
from xrpl.core.addresscodec import encode_seed
from xrpl.models.requests import AccountInfo
from xrpl.models.transactions import Payment
from xrpl.utils import drops_to_xrp, xrp_to_drops
from xrpl.wallet import Wallet

import fillbook.constants as C
from fillbook.errors import EngineResultError, RequestFailed
from fillbook.rpc import request, submit_transaction

log = logging.getLogger("fillbook.wallets")

# Beyond this many digits the index falls off the end of the entropy window
# and two indices would share a wallet.
MAX_INDEX = 10**12


def derive_wallet(index: int, algorithm: CryptoAlgorithm = CryptoAlgorithm.ED25519) -> Wallet:
    """Return the fixture wallet for `index`.

    The seed entropy is the first 16 bytes of the rendered entropy template,
    so the same index always yields the same address, across processes and
    across tools that use the same template.
    """
    if not 0 <= index < MAX_INDEX:
        raise ValueError(f"wallet index out of range: {index}")
    entropy = C.ENTROPY_TEMPLATE.format(index=index).encode("utf-8")[: C.ENTROPY_BYTES]
    seed = encode_seed(entropy, algorithm)
    return Wallet.from_seed(seed, algorithm=algorithm)


class WalletProvisioner:
    """Makes sure fixture wallets exist on the ledger, funding them from genesis."""

    def __init__(self, admin: Client, genesis: Wallet, *, funding_xrp: int = C.DEFAULT_FUNDING_XRP):
        self.admin = admin
        self.genesis = genesis
        self.funding_drops = xrp_to_drops(funding_xrp)
        # genesis Sequence advances with every funding payment
        self._genesis_lock = asyncio.Lock()

    async def balance(self, address: str) -> Decimal:
        """Balance in XRP as seen by the open ledger. Raises RequestFailed if the account is missing."""
        info = await request(self.admin, AccountInfo(account=address, ledger_index="current"))
        return drops_to_xrp(info["account_data"]["Balance"])

    async def provision(self, index: int) -> Wallet:
        """Derive wallet `index` and loop until a balance query for it succeeds.

        A failed or timed-out query is read as "not funded yet" and answered
        with one funding payment; a dropped connection is not caught. A
        funding payment that is not applied means genesis itself is broken,
        so it is raised rather than retried.
        """
        wallet = derive_wallet(index)
        while True:
            try:
                balance = await self.balance(wallet.address)
            except RequestFailed as e:
                if e.error != C.ACT_NOT_FOUND:
                    log.warning("account_info for %s failed with %s, funding anyway", wallet.address, e.error)
                await self._fund(wallet)
                continue
            except TimeoutError:
                log.warning("account_info for %s timed out, funding anyway", wallet.address)
                await self._fund(wallet)
                continue

            log.info("test account #%s (%s) has %s XRP", index + 1, wallet.address, balance)
            return wallet

    async def _fund(self, wallet: Wallet) -> None:
        txn = Payment(
            account=self.genesis.address,
            destination=wallet.address,
            amount=self.funding_drops,
        )
        async with self._genesis_lock:
            res = await submit_transaction(self.admin, txn, self.genesis)
        if not res.is_success:
            raise EngineResultError(res.transaction_type, res.engine_result, res.engine_result_message)
        log.debug("funded %s with %s drops (%s)", wallet.address, self.funding_drops, res.tx_hash)
