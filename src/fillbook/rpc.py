import logging
from dataclasses import dataclass
from typing import Any

from xrpl.asyncio.clients.client import Client
from xrpl.asyncio.transaction import autofill_and_sign, submit
from xrpl.models import Request, Transaction
from xrpl.wallet import Wallet

import fillbook.constants as C
from fillbook.errors import RequestFailed

log = logging.getLogger("fillbook.rpc")


@dataclass(slots=True)
class SubmitResult:
    transaction_type: str
    engine_result: str | None
    engine_result_message: str | None = None
    tx_hash: str | None = None

    @property
    def is_success(self) -> bool:
        return self.engine_result == C.TES_SUCCESS

    @classmethod
    def from_submit_result(cls, transaction_type: str, result: dict[str, Any]) -> "SubmitResult":
        return cls(
            transaction_type=transaction_type,
            engine_result=result.get("engine_result"),
            engine_result_message=result.get("engine_result_message"),
            tx_hash=(result.get("tx_json") or {}).get("hash"),
        )


def command_name(req: Request) -> str:
    """rippled command a request carries; GenericRequest keeps it as a plain string."""
    return getattr(req.method, "value", req.method)


async def request(client: Client, req: Request) -> dict[str, Any]:
    """Send a request and return its result, raising RequestFailed on an error status."""
    r = await client.request(req)
    if not r.is_successful():
        raise RequestFailed(command_name(req), r.result.get("error"), r.result.get("error_message"))
    return r.result


async def submit_transaction(client: Client, txn: Transaction, wallet: Wallet) -> SubmitResult:
    """Autofill sequence/fee/last ledger, sign with `wallet` and submit.

    Only the engine result is inspected here; callers decide whether a
    non-success result is fatal.
    """
    signed = await autofill_and_sign(txn, client, wallet)
    r = await submit(signed, client)
    res = SubmitResult.from_submit_result(txn.transaction_type.value, r.result)
    log.debug("%s from %s -> %s", res.transaction_type, wallet.address, res.engine_result)
    return res
