from typing import Final

genesis_account: Final = {
    "address": "rHb9CJAWyB4rj91VRWn96DkukG4bwdtyTh",
    "seed": "snoPBrXtMeMyMHUVTgbuqAfg1SUTb",
}

GENESIS = genesis_account

TES_SUCCESS: Final = "tesSUCCESS"
ACT_NOT_FOUND: Final = "actNotFound"


# Wallet identities are derived from this template, so it must never change
# between runs or every fixture account moves.
ENTROPY_TEMPLATE: Final = "*** {index} entropy ***"
ENTROPY_BYTES: Final = 16

ISSUER_INDEX: Final = 0
FIRST_TRADER_INDEX: Final = 1

DEFAULT_WALLET_COUNT = 1000
DEFAULT_FUNDING_XRP = 100_000
DEFAULT_OFFER_CURRENCY = "XAU"
OFFER_AMOUNT_MIN = 100
OFFER_AMOUNT_MAX = 1000

PROBE_RETRIES = 30
PROBE_RETRY_DELAY = 2.0
PROBE_TIMEOUT = 3.0

__all__ = [
    "ACT_NOT_FOUND",
    "DEFAULT_FUNDING_XRP",
    "DEFAULT_OFFER_CURRENCY",
    "DEFAULT_WALLET_COUNT",
    "ENTROPY_BYTES",
    "ENTROPY_TEMPLATE",
    "FIRST_TRADER_INDEX",
    "GENESIS",
    "ISSUER_INDEX",
    "OFFER_AMOUNT_MAX",
    "OFFER_AMOUNT_MIN",
    "PROBE_RETRIES",
    "PROBE_RETRY_DELAY",
    "PROBE_TIMEOUT",
    "TES_SUCCESS",
]
