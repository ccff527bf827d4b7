"""Adapt forecast API client."""

import logging

import httpx

from carbonwidget.errors import TransportFailure

logger = logging.getLogger(__name__)

ADAPT_BASE_URL = "https://www.adapt.sh"
FORECASTS_PATH = "/api/v2/forecasts"
AUTH_HEADER = "X-AUTH-TOKEN"
DEFAULT_LIMIT = 72


class AdaptClient:
    def __init__(
        self,
        base_url: str = ADAPT_BASE_URL,
        api_key: str = "",
        limit: int = DEFAULT_LIMIT,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.limit = limit
        self.timeout = timeout

    def get_forecasts_body(self, location_code: str) -> bytes:
        """Fetch the raw forecast body for a location code.

        Raises TransportFailure on network errors, non-2xx statuses and
        empty bodies. The body is returned undecoded.
        """
        url = f"{self.base_url}{FORECASTS_PATH}"
        params = {"location": location_code, "limit": self.limit}
        headers = {AUTH_HEADER: self.api_key}
        try:
            resp = httpx.get(url, params=params, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Adapt API error for location=%s: %s", location_code, e)
            raise TransportFailure(
                f"HTTP {e.response.status_code}", status_code=e.response.status_code
            ) from e
        except httpx.RequestError as e:
            logger.error("Adapt API request failed for location=%s: %s", location_code, e)
            raise TransportFailure(str(e) or type(e).__name__) from e

        if not resp.content:
            logger.error("Adapt API returned an empty body for location=%s", location_code)
            raise TransportFailure("Empty response body", status_code=resp.status_code)
        return resp.content
