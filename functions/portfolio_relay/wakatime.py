"""
WakaTime summaries proxy client.
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from typing import Optional

import requests

from portfolio_relay.config import WAKATIME_SUMMARIES_URL

logger = logging.getLogger(__name__)


def encode_api_key(api_key: str) -> str:
    return base64.b64encode(api_key.encode("utf-8")).decode("ascii")


@dataclass
class WakaTimeClient:
    """
    Fetches the last-7-days coding summary with HTTP Basic auth.

    The key is encoded once at construction and reused for every request.
    """

    api_key: str
    url: str = WAKATIME_SUMMARIES_URL

    def __post_init__(self):
        self._authorization = f"Basic {encode_api_key(self.api_key)}"

    def fetch_summaries(self) -> requests.Response:
        """
        Issue the upstream GET. Network errors propagate as
        ``requests.RequestException``; status handling is left to the caller.
        """
        return requests.get(
            self.url, headers={"Authorization": self._authorization}
        )


def build_wakatime_client(
    api_key: Optional[str], url: str = WAKATIME_SUMMARIES_URL
) -> Optional[WakaTimeClient]:
    if not api_key:
        logger.warning("WAKATIME_API_KEY not set. WakaTime route will not be registered.")
        return None
    return WakaTimeClient(api_key=api_key, url=url)
