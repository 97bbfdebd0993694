"""
Dependency wiring for the FastAPI app.

Provider clients are built once from settings when the app is created and
kept on ``app.state``; request handlers receive them through ``Depends``.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from portfolio_relay import analytics, wakatime
from portfolio_relay.analytics import AnalyticsReporter
from portfolio_relay.config import Settings
from portfolio_relay.mailer import Mailer, SmtpMailer
from portfolio_relay.wakatime import WakaTimeClient


def create_mailer(settings: Settings) -> Mailer:
    # Built even without credentials so failures surface per request.
    return SmtpMailer(
        host=settings.smtp_host,
        port=settings.smtp_port,
        user=settings.email_user or "",
        password=settings.email_pass or "",
    )


def create_analytics_reporter(settings: Settings) -> Optional[AnalyticsReporter]:
    return analytics.build_analytics_reporter(
        settings.ga_key_path, settings.ga_property_id
    )


def create_wakatime_client(settings: Settings) -> Optional[WakaTimeClient]:
    return wakatime.build_wakatime_client(
        settings.wakatime_api_key, settings.wakatime_summaries_url
    )


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer


def get_analytics_reporter(request: Request) -> AnalyticsReporter:
    return request.app.state.analytics_reporter


def get_wakatime_client(request: Request) -> WakaTimeClient:
    return request.app.state.wakatime_client
