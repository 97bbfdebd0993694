"""
Google Analytics (GA4 Data API) report proxy.

Queries daily active users over a fixed trailing window and reshapes the
row-oriented report into a visits time series plus a total.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Protocol

from google.analytics.data_v1beta import BetaAnalyticsDataClient
from google.analytics.data_v1beta.types import (
    DateRange,
    Dimension,
    Metric,
    RunReportRequest,
)
from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account

from portfolio_relay.schemas import AnalyticsResponse, VisitPoint

logger = logging.getLogger(__name__)

WINDOW_START = "30daysAgo"
WINDOW_END = "today"
METRIC_NAME = "activeUsers"
DIMENSION_NAME = "date"


class AnalyticsQueryError(Exception):
    pass


def reshape_rows(rows: Optional[Iterable[Any]]) -> AnalyticsResponse:
    """
    Turn report rows into the visits series returned to clients.

    Each row contributes one point in provider order; missing rows give an
    empty series and a zero total.
    """
    visits_over_time = [
        VisitPoint(
            date=row.dimension_values[0].value,
            visits=int(row.metric_values[0].value),
        )
        for row in rows or []
    ]
    total = sum(point.visits for point in visits_over_time)
    return AnalyticsResponse(totalVisitors=total, visitsOverTime=visits_over_time)


def build_report_request(property_id: Optional[str]) -> RunReportRequest:
    return RunReportRequest(
        property=f"properties/{property_id}",
        date_ranges=[DateRange(start_date=WINDOW_START, end_date=WINDOW_END)],
        metrics=[Metric(name=METRIC_NAME)],
        dimensions=[Dimension(name=DIMENSION_NAME)],
    )


class AnalyticsReporter(Protocol):
    """Defines the operation the analytics route needs from the provider."""

    def fetch_visits(self) -> AnalyticsResponse:
        ...


@dataclass
class GoogleAnalyticsReporter:
    """Runs the visits report against a GA4 property."""

    client: BetaAnalyticsDataClient
    property_id: Optional[str]

    def fetch_visits(self) -> AnalyticsResponse:
        request = build_report_request(self.property_id)
        try:
            # Single attempt, no client-side retry.
            response = self.client.run_report(request=request, retry=None)
            return reshape_rows(response.rows)
        except (GoogleAPIError, GoogleAuthError, ValueError, IndexError) as exc:
            raise AnalyticsQueryError(str(exc)) from exc


def load_service_account_key(path: str) -> Optional[dict]:
    """
    Read the service-account key mounted at ``path``.

    Returns:
        dict | None: The parsed key, or None when the file is absent or
            cannot be parsed.
    """
    if not os.path.exists(path):
        logger.warning(
            "Google Analytics key not found at %s. Skipping analytics route.", path
        )
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError):
        logger.exception("Error loading Google Analytics key from %s", path)
        return None


def build_analytics_reporter(
    key_path: str, property_id: Optional[str]
) -> Optional[GoogleAnalyticsReporter]:
    key = load_service_account_key(key_path)
    if key is None:
        return None
    try:
        credentials = service_account.Credentials.from_service_account_info(key)
    except (ValueError, KeyError):
        logger.exception("Malformed Google Analytics service-account key")
        return None
    if not property_id:
        logger.warning("GA_PROPERTY_ID not set. Analytics queries will fail.")
    client = BetaAnalyticsDataClient(credentials=credentials)
    logger.info("Google Analytics client initialized")
    return GoogleAnalyticsReporter(client=client, property_id=property_id)
