"""
FastAPI entry point — mock market data server.

This module is the Composition Root: it seeds the dataset, wires the price
mutator, the update scheduler and the WebSocket broadcaster, and exposes the
read-only REST surface consumed by the dashboard.

Delivery modes:
  push — the scheduler refreshes every asset class on its own timer and
         broadcasts snapshots over /ws; REST reads return the current snapshot.
  pull — no timers; every REST read refreshes its asset class once, then
         returns it.

Run locally:
    uvicorn --factory market_pulse.infrastructure.entrypoints.fastapi_app:create_app --reload --port 3001
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable, Optional

from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from market_pulse.application.services.market_data_store import MarketDataStore
from market_pulse.application.services.market_refresher import MarketRefresher
from market_pulse.application.services.price_mutator import PriceMutator, utc_now
from market_pulse.application.services.update_scheduler import UpdateScheduler
from market_pulse.application.use_cases.get_market_snapshot import GetMarketSnapshotUseCase
from market_pulse.application.use_cases.get_stock import GetStockUseCase
from market_pulse.domain.entities.market_data import AssetClass
from market_pulse.domain.exceptions import SymbolNotFoundError
from market_pulse.domain.ports.random_source_port import IRandomSource
from market_pulse.infrastructure.config.settings import Settings
from market_pulse.infrastructure.delivery.schemas import (
    CryptoAssetSchema,
    CurrencyPairSchema,
    EquitySchema,
    ErrorResponse,
    HealthResponse,
    MarketIndexSchema,
    NewsItemSchema,
)
from market_pulse.infrastructure.delivery.websocket_broadcaster import WebSocketBroadcaster
from market_pulse.infrastructure.market_data.fixtures import seed_market_data
from market_pulse.infrastructure.randomness.seeded_random import SeededRandomSource

NOT_FOUND = {404: {"model": ErrorResponse}}


def create_app(
    settings: Optional[Settings] = None,
    random_source: Optional[IRandomSource] = None,
    clock: Callable[[], datetime] = utc_now,
) -> FastAPI:
    """Wire all dependencies and return the ASGI application.

    Args:
        settings:      Runtime configuration; read from the environment when omitted.
        random_source: IRandomSource for price perturbations; defaults to a
                       SeededRandomSource using settings.random_seed.
        clock:         Timestamp source for seeding and mutations.
    """
    settings = settings or Settings.from_env()
    random_source = random_source or SeededRandomSource(settings.random_seed)

    # -----------------------------------------------------------------------
    # Composition Root
    # -----------------------------------------------------------------------
    store = MarketDataStore(seed_market_data(clock()))
    refresher = MarketRefresher(store, PriceMutator(random_source, clock))
    snapshots = GetMarketSnapshotUseCase(store, refresher, refresh_on_read=not settings.push)
    get_stock = GetStockUseCase(snapshots)
    broadcaster = WebSocketBroadcaster(store)
    scheduler = (
        UpdateScheduler(refresher, broadcaster, settings.intervals) if settings.push else None
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        sizes = ", ".join(f"{a.value}={len(store.collection(a))}" for a in AssetClass)
        logger.info(f"{settings.service_name} ready in {settings.delivery_mode} mode ({sizes})")
        if scheduler is not None:
            scheduler.start()
        try:
            yield
        finally:
            if scheduler is not None:
                await scheduler.stop()

    app = FastAPI(title=settings.service_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.broadcaster = broadcaster
    app.state.scheduler = scheduler

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # -----------------------------------------------------------------------
    # Error mapping: every error body is {"error": <message>}
    # -----------------------------------------------------------------------
    @app.exception_handler(SymbolNotFoundError)
    async def symbol_not_found(request: Request, exc: SymbolNotFoundError) -> JSONResponse:
        logger.debug(f"{request.url.path}: {exc}")
        return JSONResponse(status_code=404, content={"error": "Stock not found"})

    @app.exception_handler(ValueError)
    async def invalid_input(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    # -----------------------------------------------------------------------
    # REST surface
    # -----------------------------------------------------------------------
    @app.get("/api/stocks", response_model=list[EquitySchema])
    async def list_stocks():
        return list(snapshots.execute(AssetClass.STOCKS))

    @app.get("/api/stock/{symbol}", response_model=EquitySchema, responses=NOT_FOUND)
    async def get_stock_by_symbol(symbol: str):
        return get_stock.execute(symbol)

    @app.get("/api/indices", response_model=list[MarketIndexSchema])
    async def list_indices():
        return list(snapshots.execute(AssetClass.INDICES))

    @app.get("/api/currencies", response_model=list[CurrencyPairSchema])
    async def list_currencies():
        return list(snapshots.execute(AssetClass.CURRENCIES))

    @app.get("/api/cryptos", response_model=list[CryptoAssetSchema])
    async def list_cryptos():
        return list(snapshots.execute(AssetClass.CRYPTOS))

    @app.get(
        "/api/news",
        response_model=list[NewsItemSchema],
        response_model_exclude_none=True,
    )
    async def list_news():
        return list(snapshots.execute(AssetClass.NEWS))

    @app.get("/health", response_model=HealthResponse)
    @app.get("/api/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(
            status="OK",
            timestamp=utc_now(),
            service=settings.service_name,
            mode=settings.delivery_mode,
        )

    # -----------------------------------------------------------------------
    # Push channel
    # -----------------------------------------------------------------------
    if settings.push:

        @app.websocket("/ws")
        async def market_feed(websocket: WebSocket):
            try:
                await broadcaster.connect(websocket)
                while True:
                    await broadcaster.handle_message(websocket, await websocket.receive_text())
            except WebSocketDisconnect:
                pass
            finally:
                broadcaster.disconnect(websocket)

    return app
