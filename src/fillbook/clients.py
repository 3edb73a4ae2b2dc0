import contextlib
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass

from xrpl.asyncio.clients import AsyncWebsocketClient

from fillbook.config import Settings

log = logging.getLogger("fillbook.clients")


@dataclass(frozen=True)
class Clients:
    """The two long-lived connections of a run.

    `user` submits offers and reads offers; `admin` closes ledgers and funds
    wallets from genesis. Neither is pooled or reconnected.
    """

    user: AsyncWebsocketClient
    admin: AsyncWebsocketClient


@contextlib.asynccontextmanager
async def open_clients(settings: Settings) -> AsyncIterator[Clients]:
    user = AsyncWebsocketClient(settings.user_ws_url)
    admin = AsyncWebsocketClient(settings.admin_ws_url)
    await user.open()
    log.info("connected to %s (regular)", settings.user_ws_url)
    try:
        await admin.open()
        log.info("connected to %s (admin)", settings.admin_ws_url)
        try:
            yield Clients(user=user, admin=admin)
        finally:
            await admin.close()
    finally:
        await user.close()
