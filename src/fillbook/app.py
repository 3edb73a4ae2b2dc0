import asyncio
import logging
from contextlib import asynccontextmanager
from decimal import Decimal

from fastapi import APIRouter, FastAPI, Path, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, NonNegativeInt, PositiveInt

from fillbook.clients import open_clients
from fillbook.config import settings as load_settings
from fillbook.errors import EngineResultError, RequestFailed
from fillbook.fixtures import FixtureRun
from fillbook.logging_config import setup_logging
from fillbook.probe import wait_for_endpoints
from fillbook.wallets import MAX_INDEX

log = logging.getLogger("fillbook.app")


def attach(app: FastAPI, run: FixtureRun) -> None:
    """Hang a FixtureRun on the app. Requests take turns on its connections."""
    app.state.fixture = run
    app.state.lock = asyncio.Lock()


@asynccontextmanager
async def lifespan(app: FastAPI):
    s = load_settings()
    setup_logging(s.log_level, s.log_file)
    log.info("Probing rippled...")
    await wait_for_endpoints([s.admin_ws_url, s.user_ws_url], s.probe_retries, s.probe_retry_delay)
    async with open_clients(s) as clients:
        attach(app, FixtureRun(clients, s))
        log.info("Ready.")
        yield
    log.info("Connections closed.")


app = FastAPI(
    title="Order book fixtures",
    description="Funds deterministic test wallets, fills the order book and closes ledgers on a standalone rippled.",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Ledger", "description": "Inspect and close the open ledger"},
        {"name": "Wallets", "description": "Fixture wallets"},
        {"name": "Book", "description": "Order book fixtures"},
    ],
)

r_ledger = APIRouter(prefix="/ledger", tags=["Ledger"])
r_wallets = APIRouter(prefix="/wallets", tags=["Wallets"])
r_book = APIRouter(prefix="/book", tags=["Book"])


class LedgerResp(BaseModel):
    current_index: int
    pending_transaction_count: int


class AdvanceResp(BaseModel):
    settled: int
    current_index: int


class WalletResp(BaseModel):
    index: int
    address: str
    balance_xrp: Decimal


class FillReq(BaseModel):
    count: PositiveInt


class FillResp(BaseModel):
    issuer: str
    traders: list[str]
    offers_created: NonNegativeInt
    funding_settled: NonNegativeInt
    offers_settled: NonNegativeInt


@app.exception_handler(EngineResultError)
async def engine_result_error(request: Request, exc: EngineResultError):
    log.error("%s", exc)
    return JSONResponse(
        status_code=502,
        content={"detail": str(exc), "engine_result": exc.engine_result},
    )


@app.exception_handler(RequestFailed)
async def request_failed(request: Request, exc: RequestFailed):
    log.error("%s", exc)
    return JSONResponse(
        status_code=502,
        content={"detail": str(exc), "error": exc.error},
    )


@app.get("/health")
def health():
    return {"status": "ok"}


@r_ledger.get("", response_model=LedgerResp)
async def ledger_snapshot(request: Request):
    run: FixtureRun = request.app.state.fixture
    async with request.app.state.lock:
        snap = await run.ledger.snapshot()
    return LedgerResp(current_index=snap.current_index, pending_transaction_count=snap.pending_transaction_count)


@r_ledger.post("/advance", response_model=AdvanceResp)
async def ledger_advance(request: Request, force: bool = Query(False)):
    """Close the open ledger. Without `force` an empty ledger is left alone."""
    run: FixtureRun = request.app.state.fixture
    async with request.app.state.lock:
        settled = await run.ledger.advance(force=force)
        snap = await run.ledger.snapshot()
    return AdvanceResp(settled=settled, current_index=snap.current_index)


@r_wallets.post("/{index}", response_model=WalletResp)
async def wallet_provision(request: Request, index: int = Path(ge=0, lt=MAX_INDEX)):
    run: FixtureRun = request.app.state.fixture
    async with request.app.state.lock:
        wallet = await run.provisioner.provision(index)
        balance = await run.provisioner.balance(wallet.address)
    return WalletResp(index=index, address=wallet.address, balance_xrp=balance)


@r_book.post("/fill", response_model=FillResp)
async def book_fill(request: Request, req: FillReq):
    run: FixtureRun = request.app.state.fixture
    async with request.app.state.lock:
        result = await run.fill_book(req.count)
    return FillResp(
        issuer=result.issuer,
        traders=result.traders,
        offers_created=result.offers_created,
        funding_settled=result.funding_settled,
        offers_settled=result.offers_settled,
    )


app.include_router(r_ledger)
app.include_router(r_wallets)
app.include_router(r_book)
