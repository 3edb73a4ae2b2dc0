import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

import fillbook.constants as C

pkg_root = Path(__file__).parent
config_file = pkg_root / "config.toml"

cfg = tomllib.loads(Path(config_file).read_text())
fw = cfg.setdefault("funding_account", {})
cfg["funding_account"]["address"] = fw.get("address", C.GENESIS["address"])
cfg["funding_account"]["seed"] = fw.get("seed", C.GENESIS["seed"])


@dataclass(frozen=True)
class Settings:
    """Resolved endpoints and fixture parameters for one run."""

    user_ws_url: str
    admin_ws_url: str
    genesis_seed: str
    # None skips the seed/address consistency check
    genesis_address: str | None = None
    wallet_count: int = C.DEFAULT_WALLET_COUNT
    funding_xrp: int = C.DEFAULT_FUNDING_XRP
    offer_currency: str = C.DEFAULT_OFFER_CURRENCY
    offer_min: int = C.OFFER_AMOUNT_MIN
    offer_max: int = C.OFFER_AMOUNT_MAX
    probe_retries: int = C.PROBE_RETRIES
    probe_retry_delay: float = C.PROBE_RETRY_DELAY
    log_level: str = "INFO"
    log_file: str | None = None


def settings(conf: dict | None = None, env: dict | None = None) -> Settings:
    """Build Settings from the TOML config, letting the environment override endpoints, genesis and logging."""
    conf = cfg if conf is None else conf
    env = os.environ if env is None else env

    rippled = conf["rippled"]
    host = rippled["docker"] if Path("/.dockerenv").is_file() else rippled["local"]
    host = env.get("RIPPLED_IP", host)

    funding = conf["funding_account"]
    if "GENESIS_SEED" in env:
        # a configured address belongs to the configured seed, not to this one
        genesis_seed, genesis_address = env["GENESIS_SEED"], env.get("GENESIS_ADDRESS")
    else:
        genesis_seed, genesis_address = funding["seed"], env.get("GENESIS_ADDRESS", funding.get("address"))

    fixture = conf.get("fixture", {})
    timeout = conf.get("timeout", {})
    logs = conf.get("logging", {})
    return Settings(
        user_ws_url=env.get("USER_WS_URL", f"ws://{host}:{rippled['user_ws_port']}"),
        admin_ws_url=env.get("ADMIN_WS_URL", f"ws://{host}:{rippled['admin_ws_port']}"),
        genesis_seed=genesis_seed,
        genesis_address=genesis_address,
        wallet_count=int(fixture.get("wallet_count", C.DEFAULT_WALLET_COUNT)),
        funding_xrp=int(fixture.get("funding_xrp", C.DEFAULT_FUNDING_XRP)),
        offer_currency=fixture.get("offer_currency", C.DEFAULT_OFFER_CURRENCY),
        offer_min=int(fixture.get("offer_min", C.OFFER_AMOUNT_MIN)),
        offer_max=int(fixture.get("offer_max", C.OFFER_AMOUNT_MAX)),
        probe_retries=int(timeout.get("probe_retries", C.PROBE_RETRIES)),
        probe_retry_delay=float(timeout.get("probe_retry_delay", C.PROBE_RETRY_DELAY)),
        log_level=env.get("LOG_LEVEL", logs.get("level", "INFO")).upper(),
        log_file=env.get("LOG_FILE", logs.get("file")) or None,
    )
