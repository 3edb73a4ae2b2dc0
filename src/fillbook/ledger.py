import logging
from dataclasses import dataclass

from xrpl.asyncio.clients.client import Client
from xrpl.models.requests import GenericRequest, Ledger, LedgerCurrent

from fillbook.rpc import request

log = logging.getLogger("fillbook.ledger")


@dataclass(frozen=True, slots=True)
class LedgerSnapshot:
    current_index: int
    pending_transaction_count: int


class LedgerController:
    """Closes ledgers on a standalone node through the admin connection."""

    def __init__(self, admin: Client):
        self.admin = admin

    async def snapshot(self) -> LedgerSnapshot:
        current = await request(self.admin, LedgerCurrent())
        index = int(current["ledger_current_index"])
        res = await request(self.admin, Ledger(ledger_index=index, transactions=True))
        txns = res["ledger"].get("transactions") or []
        return LedgerSnapshot(current_index=index, pending_transaction_count=len(txns))

    async def advance(self, force: bool = False) -> int:
        """Close the open ledger and return how many transactions it settled.

        With nothing pending and `force` unset this is a no-op returning 0, so
        polling tests don't pile up empty ledgers. A failed ledger_accept is
        raised to the caller.
        """
        snap = await self.snapshot()
        if snap.pending_transaction_count == 0 and not force:
            log.info("ledger advance skipped (no new tx)")
            return 0

        res = await request(self.admin, GenericRequest(method="ledger_accept"))
        log.info("-> new ledger #%s with %s tx", res.get("ledger_current_index"), snap.pending_transaction_count)
        return snap.pending_transaction_count
