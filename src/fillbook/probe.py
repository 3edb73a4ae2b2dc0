import asyncio
import json
import logging

import websockets
from websockets.exceptions import WebSocketException

import fillbook.constants as C

log = logging.getLogger("fillbook.probe")


async def _server_info(url: str) -> dict:
    async with asyncio.timeout(C.PROBE_TIMEOUT):
        async with websockets.connect(url, close_timeout=1) as ws:
            await ws.send(json.dumps({"id": 1, "command": "server_info"}))
            reply = json.loads(await ws.recv())
    if reply.get("status") != "success":
        raise RuntimeError(f"server_info failed: {reply.get('error')}")
    return reply["result"]


async def wait_for_rippled(url: str, max_retries: int = C.PROBE_RETRIES, retry_delay: float = C.PROBE_RETRY_DELAY) -> dict:
    """Poll rippled with server_info until it answers.

    Only used before the run's connections are opened; once they are, a lost
    connection is fatal.

    Args:
        url: WebSocket endpoint
        max_retries: Attempts before giving up (the last error is re-raised)
        retry_delay: Seconds to wait between attempts
    """
    if max_retries < 1:
        raise ValueError(f"max_retries must be at least 1: {max_retries}")
    for attempt in range(1, max_retries + 1):
        try:
            info = await _server_info(url)
            log.info("rippled at %s responding (attempt %s/%s)", url, attempt, max_retries)
            return info
        except (OSError, TimeoutError, RuntimeError, WebSocketException) as e:
            if attempt < max_retries:
                log.info("rippled not ready yet (attempt %s/%s): %s - retrying in %ss", attempt, max_retries, e.__class__.__name__, retry_delay)
                await asyncio.sleep(retry_delay)
            else:
                log.error("rippled at %s failed after %s attempts", url, max_retries)
                raise


async def wait_for_endpoints(urls, max_retries: int = C.PROBE_RETRIES, retry_delay: float = C.PROBE_RETRY_DELAY) -> None:
    """wait_for_rippled on every distinct url, in order."""
    for url in dict.fromkeys(urls):
        await wait_for_rippled(url, max_retries, retry_delay)
