"""weatherapi.com API client.

Fetches current conditions, forecasts and air quality from weatherapi.com.
HTTP failures are classified into the weather error taxonomy here, before
any payload reaches the adapter.
"""

from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from weatherdash.shared.api.errors import (
    ErrorCode,
    LocationNotFound,
    ProviderUnavailable,
    classify_error,
)
from weatherdash.shared.config.logging import get_logger
from weatherdash.shared.config.settings import get_settings
from weatherdash.shared.constants import CURRENT_ENDPOINT, FORECAST_ENDPOINT

logger = get_logger(__name__)


class WeatherAPIClient:
    """Client for the weatherapi.com API.

    Handles current conditions, forecast and air quality retrieval with
    automatic retries on rate limiting and server errors.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize weatherapi.com client.

        Args:
            api_key: API key (defaults to settings.weather_api_key)
            base_url: API base URL (defaults to settings.weather_api_url)
            timeout: Request timeout in seconds (defaults to settings)
        """
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.weather_api_key
        self.base_url = (base_url or settings.weather_api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout_sec

        # Configure session with retries
        self.session = requests.Session()
        retry_strategy = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

        logger.info(
            "weatherapi_client_initialized",
            base_url=self.base_url,
            has_api_key=bool(self.api_key),
        )

    def _make_request(
        self, endpoint: str, params: dict[str, Any], query: str | None = None
    ) -> dict[str, Any]:
        """Make HTTP request to weatherapi.com.

        Args:
            endpoint: API endpoint path (without base URL)
            params: Query parameters (the API key is added here)
            query: Location query, reported on LocationNotFound

        Returns:
            JSON response as dictionary

        Raises:
            LocationNotFound: Provider has no match for the query (400/404)
            ProviderUnavailable: Missing key, network failure, 401/403/429/5xx
            MalformedResponse: 2xx response whose body is not JSON
        """
        if not self.api_key:
            raise ProviderUnavailable(
                message="Weather API key is not configured",
                error_code=ErrorCode.CONFIG_MISSING_API_KEY,
                retryable=False,
                endpoint=endpoint,
            )

        url = f"{self.base_url}{endpoint}"
        logger.debug("weatherapi_request", url=url, query=query)

        try:
            response = self.session.get(
                url,
                params={"key": self.api_key, **params},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()

        except (requests.RequestException, ValueError) as e:
            error = classify_error(e, endpoint=endpoint, query=query)
            logger.warning(
                "weatherapi_request_failed",
                url=url,
                kind=error.kind,
                error=str(e),
            )
            raise error from e

        logger.debug("weatherapi_request_success", url=url, status=response.status_code)
        return data

    def fetch_current_conditions(self, location_query: str) -> dict[str, Any]:
        """Get current conditions (with air quality) for a location.

        Args:
            location_query: City name, "lat,lon", postcode, etc.

        Returns:
            Raw ``current.json`` payload

        Example:
            >>> client = WeatherAPIClient(api_key="...")
            >>> raw = client.fetch_current_conditions("Paris")
            >>> temp = raw["current"]["temp_c"]
        """
        query = location_query.strip()
        if not query:
            raise LocationNotFound(
                location_query,
                error_code=ErrorCode.LOCATION_EMPTY_QUERY,
                endpoint=CURRENT_ENDPOINT,
            )

        logger.info("fetching_current_conditions", query=query)

        return self._make_request(CURRENT_ENDPOINT, {"q": query, "aqi": "yes"}, query=query)

    def fetch_current_by_coords(self, lat: float, lon: float) -> dict[str, Any]:
        """Get current conditions for a lat/lon point.

        Args:
            lat: Latitude
            lon: Longitude

        Returns:
            Raw ``current.json`` payload
        """
        return self.fetch_current_conditions(f"{lat},{lon}")

    def fetch_forecast_raw(self, lat: float, lon: float, day_span: int) -> dict[str, Any]:
        """Get a multi-day forecast with hourly entries.

        Args:
            lat: Latitude
            lon: Longitude
            day_span: Number of forecast days, today included

        Returns:
            Raw ``forecast.json`` payload
        """
        query = f"{lat},{lon}"

        logger.info("fetching_forecast", lat=lat, lon=lon, days=day_span)

        return self._make_request(
            FORECAST_ENDPOINT,
            {"q": query, "days": day_span, "aqi": "no", "alerts": "no"},
            query=query,
        )

    def fetch_air_quality_raw(self, lat: float, lon: float) -> dict[str, Any]:
        """Get current conditions including the air quality block.

        Args:
            lat: Latitude
            lon: Longitude

        Returns:
            Raw ``current.json`` payload with ``current.air_quality``
        """
        query = f"{lat},{lon}"

        logger.info("fetching_air_quality", lat=lat, lon=lon)

        return self._make_request(CURRENT_ENDPOINT, {"q": query, "aqi": "yes"}, query=query)
