"""
FastAPI application entry point for the relay service.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from portfolio_relay.config import Settings, get_settings
from portfolio_relay.dependencies import (
    create_analytics_reporter,
    create_mailer,
    create_wakatime_client,
)
from portfolio_relay.routes import analytics_router, router, wakatime_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # A failed check is logged by the mailer; the contact route stays up.
    await run_in_threadpool(app.state.mailer.verify)
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Portfolio Relay", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.mailer = create_mailer(settings)
    app.include_router(router)

    reporter = create_analytics_reporter(settings)
    if reporter is not None:
        app.state.analytics_reporter = reporter
        app.include_router(analytics_router)

    wakatime_client = create_wakatime_client(settings)
    if wakatime_client is not None:
        app.state.wakatime_client = wakatime_client
        app.include_router(wakatime_router)

    return app


app = create_app()


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    settings = get_settings()
    logger.info("Server running at: http://localhost:%s", settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
