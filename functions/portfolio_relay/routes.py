"""
HTTP routes for the relay API.

``router`` is always mounted. ``analytics_router`` and ``wakatime_router`` are
mounted only when their provider is configured.
"""

from __future__ import annotations

import logging

import requests
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from portfolio_relay.analytics import AnalyticsQueryError, AnalyticsReporter
from portfolio_relay.dependencies import (
    get_analytics_reporter,
    get_mailer,
    get_wakatime_client,
)
from portfolio_relay.mailer import MailDeliveryError, Mailer
from portfolio_relay.schemas import (
    AnalyticsResponse,
    ContactResponse,
    ContactSubmission,
    ErrorResponse,
)
from portfolio_relay.wakatime import WakaTimeClient

logger = logging.getLogger(__name__)

LIVENESS_MESSAGE = "Portfolio mail & analytics relay is up and running"

router = APIRouter()
analytics_router = APIRouter()
wakatime_router = APIRouter()


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.get("/", response_class=PlainTextResponse)
def root():
    return LIVENESS_MESSAGE


@router.post(
    "/contact",
    response_model=ContactResponse,
    responses={500: {"model": ErrorResponse}},
)
def contact(payload: ContactSubmission, mailer: Mailer = Depends(get_mailer)):
    try:
        mailer.send_contact(payload)
    except MailDeliveryError as exc:
        logger.error("Mail sending failed: %s", exc)
        return _error(500, "Failed to send message")
    logger.info("Mail sent successfully")
    return ContactResponse(code=200, status="Message Sent")


@analytics_router.get(
    "/analytics",
    response_model=AnalyticsResponse,
    responses={500: {"model": ErrorResponse}},
)
def get_analytics(reporter: AnalyticsReporter = Depends(get_analytics_reporter)):
    try:
        return reporter.fetch_visits()
    except AnalyticsQueryError as exc:
        logger.exception("Analytics error")
        return _error(500, "Error fetching analytics data", str(exc))


@wakatime_router.get("/api/wakatime", responses={500: {"model": ErrorResponse}})
def get_wakatime(client: WakaTimeClient = Depends(get_wakatime_client)):
    try:
        response = client.fetch_summaries()
        if not 200 <= response.status_code < 300:
            # Upstream body is dropped; only its status is relayed.
            return _error(response.status_code, "Failed to fetch WakaTime data")
        data = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.exception("WakaTime fetch error")
        return _error(500, "Server error", str(exc))
    return JSONResponse(content=data)
