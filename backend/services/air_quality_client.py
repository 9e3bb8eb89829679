# =============================================================================
# HEALTH MONITOR BACKEND - AIR QUALITY CLIENT
# =============================================================================
"""
Async HTTP client for the OpenWeatherMap air pollution API.
"""

import logging
from typing import Optional

import httpx

from config import get_settings

logger = logging.getLogger(__name__)

# Request timeout in seconds
REQUEST_TIMEOUT = 10.0


class AirQualityClient:
    """
    Async client for current air pollution readings.

    Errors are returned rather than raised so routes can map them to a
    gateway error.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = get_settings()
        self.base_url = self.settings.air_quality_base_url
        self._transport = transport

    async def get_air_quality(
        self,
        lat: float,
        lon: float
    ) -> tuple[Optional[dict], Optional[str]]:
        """
        Fetch the air pollution reading for a location.

        Returns:
            Tuple of (response_data, error_message)
        """
        params = {
            "lat": lat,
            "lon": lon,
            "appid": self.settings.air_quality_api_key,
        }

        try:
            async with httpx.AsyncClient(
                timeout=REQUEST_TIMEOUT,
                transport=self._transport
            ) as client:
                response = await client.get(self.base_url, params=params)
                response.raise_for_status()
                return response.json(), None

        except httpx.TimeoutException:
            error = f"Timeout connecting to {self.base_url}"
            logger.warning(error)
            return None, error

        except httpx.ConnectError:
            error = f"Cannot connect to air quality service at {self.base_url}"
            logger.warning(error)
            return None, error

        except httpx.HTTPStatusError as e:
            error = f"Air quality API responded with status {e.response.status_code}"
            logger.warning(error)
            return None, error

        except ValueError as e:
            error = f"Invalid response from air quality API: {e}"
            logger.error(error)
            return None, error
