import argparse
import asyncio
import logging
import sys

import uvicorn

from fillbook.clients import open_clients
from fillbook.config import Settings, settings as load_settings
from fillbook.errors import FillbookError
from fillbook.fixtures import FixtureRun
from fillbook.logging_config import setup_logging
from fillbook.probe import wait_for_endpoints

log = logging.getLogger("fillbook")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="fillbook", description="Order book fixtures for a standalone rippled.")
    sub = parser.add_subparsers(dest="command")

    fill = sub.add_parser("fill", help="Fund wallets and give each one an offer (default).")
    fill.add_argument("-n", "--count",
                      type=int,
                      help="Number of trader wallets (issuer not included).",
                      )

    advance = sub.add_parser("advance", help="Close the open ledger.")
    advance.add_argument("-f", "--force",
                         action="store_true",
                         help="Close even when no transactions are pending.",
                         )

    provision = sub.add_parser("provision", help="Fund a single fixture wallet.")
    provision.add_argument("index", type=int)

    serve = sub.add_parser("serve", help="Run the HTTP control API.")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "fill"
        args.count = None
    return args


async def run(args, s: Settings) -> None:
    await wait_for_endpoints([s.admin_ws_url, s.user_ws_url], s.probe_retries, s.probe_retry_delay)
    async with open_clients(s) as clients:
        fixture = FixtureRun(clients, s)
        match args.command:
            case "fill":
                await fixture.fill_book(args.count)
            case "advance":
                await fixture.ledger.advance(force=args.force)
            case "provision":
                wallet = await fixture.provisioner.provision(args.index)
                print(wallet.address)


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.command == "serve":
        uvicorn.run("fillbook.app:app", host=args.host, port=args.port, lifespan="on")
        return 0

    s = load_settings()
    setup_logging(s.log_level, s.log_file)
    try:
        asyncio.run(run(args, s))
    except FillbookError as e:
        log.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
