"""Centralized error handling for the weather provider.

Provides the error taxonomy surfaced to the dashboard (location not found,
provider unavailable, malformed response, geolocation denied) with error
codes, retry hints, and structured logging integration.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any

import requests

from weatherdash.shared.config.logging import get_logger
from weatherdash.shared.constants import PROVIDER_NO_MATCH_CODE

logger = get_logger(__name__)


class ErrorCode(Enum):
    """Error codes for weather exceptions."""

    # Network errors (1xxx)
    NETWORK_TIMEOUT = 1001
    NETWORK_CONNECTION = 1002

    # HTTP errors (2xxx)
    HTTP_BAD_REQUEST = 2400
    HTTP_UNAUTHORIZED = 2401
    HTTP_FORBIDDEN = 2403
    HTTP_RATE_LIMIT = 2429
    HTTP_SERVER_ERROR = 2500
    HTTP_BAD_GATEWAY = 2502
    HTTP_SERVICE_UNAVAILABLE = 2503
    HTTP_GATEWAY_TIMEOUT = 2504

    # Configuration errors (3xxx)
    CONFIG_MISSING_API_KEY = 3001

    # Data errors (4xxx)
    DATA_INVALID_RESPONSE = 4001
    DATA_PARSE_ERROR = 4002
    DATA_MISSING_FIELD = 4003

    # Location errors (6xxx)
    LOCATION_NOT_FOUND = 6001
    LOCATION_EMPTY_QUERY = 6002
    GEOLOCATION_DENIED = 6003

    # Unknown/Other
    UNKNOWN_ERROR = 9999


class WeatherError(Exception):
    """Base exception for all weather errors.

    Provides structured error information including error codes,
    retry hints, and context for logging. ``kind`` is the machine-readable
    category the dashboard reports next to its user message.
    """

    kind = "weather_error"
    log_level = "error"

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        retryable: bool = False,
        endpoint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize weather error.

        Args:
            message: Human-readable error message
            error_code: Structured error code
            retryable: Whether the operation can be retried
            endpoint: Provider endpoint that failed
            details: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.retryable = retryable
        self.endpoint = endpoint
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

        getattr(logger, self.log_level)(
            "weather_error",
            kind=self.kind,
            error_code=error_code.name,
            message=message,
            retryable=retryable,
            endpoint=endpoint,
            details=details,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization.

        Returns:
            Dictionary representation of error
        """
        return {
            "kind": self.kind,
            "error_code": self.error_code.name,
            "error_value": self.error_code.value,
            "message": self.message,
            "retryable": self.retryable,
            "endpoint": self.endpoint,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class ProviderUnavailable(WeatherError):
    """Provider could not be reached or answered with a server error."""

    kind = "provider_unavailable"

    def __init__(
        self,
        message: str = "Weather provider unavailable",
        error_code: ErrorCode = ErrorCode.HTTP_SERVICE_UNAVAILABLE,
        retryable: bool = True,
        endpoint: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize provider unavailable error.

        Args:
            message: Error message
            error_code: Specific network or HTTP error code
            retryable: False for failures a retry will not fix (bad API key)
            endpoint: Failed endpoint
            status_code: HTTP status code, if a response was received
            details: Additional context
        """
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code

        super().__init__(
            message=message,
            error_code=error_code,
            retryable=retryable,
            endpoint=endpoint,
            details=details,
        )
        self.status_code = status_code


class LocationNotFound(WeatherError):
    """Provider has no location matching the query."""

    kind = "location_not_found"

    def __init__(
        self,
        query: str,
        error_code: ErrorCode = ErrorCode.LOCATION_NOT_FOUND,
        endpoint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize location not found error.

        Args:
            query: Location query that had no match
            error_code: LOCATION_NOT_FOUND or LOCATION_EMPTY_QUERY
            endpoint: Failed endpoint
            details: Additional context
        """
        details = details or {}
        details["query"] = query

        super().__init__(
            message=(
                f"No matching location found for '{query}'"
                if query.strip()
                else "Empty location query"
            ),
            error_code=error_code,
            retryable=False,
            endpoint=endpoint,
            details=details,
        )
        self.query = query


class MalformedResponse(WeatherError):
    """Provider answered 2xx with a payload that cannot be used."""

    kind = "malformed_response"

    def __init__(
        self,
        field_path: str,
        message: str | None = None,
        error_code: ErrorCode = ErrorCode.DATA_MISSING_FIELD,
        endpoint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize malformed response error.

        Args:
            field_path: Dotted path of the offending field (e.g. "location.name")
            message: Error message (derived from field_path if None)
            error_code: Specific data error code
            endpoint: Endpoint that returned the payload
            details: Additional context
        """
        details = details or {}
        details["field_path"] = field_path

        super().__init__(
            message=message or f"Missing or invalid field '{field_path}'",
            error_code=error_code,
            retryable=False,
            endpoint=endpoint,
            details=details,
        )
        self.field_path = field_path


class GeolocationDenied(WeatherError):
    """User declined to share their position."""

    kind = "geolocation_denied"
    # A denial is shown as a notice, not a failure
    log_level = "warning"

    def __init__(self, fallback_city: str | None = None) -> None:
        """Initialize geolocation denied error.

        Args:
            fallback_city: City shown instead of the user's position
        """
        details = {"fallback_city": fallback_city} if fallback_city else {}
        super().__init__(
            message="Geolocation permission denied",
            error_code=ErrorCode.GEOLOCATION_DENIED,
            retryable=False,
            details=details,
        )
        self.fallback_city = fallback_city


def provider_error_code(response_body: str | None) -> int | None:
    """Read the provider's own error code from an error body.

    weatherapi.com answers errors with ``{"error": {"code": 1006, ...}}``.

    Args:
        response_body: Response body text

    Returns:
        Provider error code, or None if the body does not carry one
    """
    if not response_body:
        return None
    try:
        data = json.loads(response_body)
    except ValueError:
        return None

    error = data.get("error") if isinstance(data, dict) else None
    code = error.get("code") if isinstance(error, dict) else None
    if isinstance(code, bool) or not isinstance(code, int):
        return None
    return code


def _status_error(
    status_code: int,
    endpoint: str | None,
    query: str | None,
    response_body: str | None,
) -> WeatherError:
    """Map an HTTP error status onto the taxonomy.

    A 400 is a missing location only when the provider says so (code 1006)
    or gives no code at all; other 400 codes (missing ``q``, invalid URL)
    are request problems a retry will not fix.

    Args:
        status_code: HTTP status code
        endpoint: Failed endpoint
        query: Location query sent with the request
        response_body: Response body text

    Returns:
        Corresponding WeatherError
    """
    details: dict[str, Any] = {"response_body": response_body} if response_body else {}
    code = provider_error_code(response_body)
    if code is not None:
        details["provider_error_code"] = code

    if status_code == 404 or (
        status_code == 400 and code in (None, PROVIDER_NO_MATCH_CODE)
    ):
        return LocationNotFound(query or "", endpoint=endpoint, details=details)

    mapping = {
        400: ErrorCode.HTTP_BAD_REQUEST,
        401: ErrorCode.HTTP_UNAUTHORIZED,
        403: ErrorCode.HTTP_FORBIDDEN,
        429: ErrorCode.HTTP_RATE_LIMIT,
        500: ErrorCode.HTTP_SERVER_ERROR,
        502: ErrorCode.HTTP_BAD_GATEWAY,
        503: ErrorCode.HTTP_SERVICE_UNAVAILABLE,
        504: ErrorCode.HTTP_GATEWAY_TIMEOUT,
    }
    error_code = mapping.get(status_code, ErrorCode.UNKNOWN_ERROR)

    # Auth failures and other 4xx will not go away on retry
    retryable = status_code == 429 or status_code >= 500

    return ProviderUnavailable(
        message=f"Weather provider returned HTTP {status_code}",
        error_code=error_code,
        retryable=retryable,
        endpoint=endpoint,
        status_code=status_code,
        details=details,
    )


def classify_error(
    exception: Exception,
    endpoint: str | None = None,
    query: str | None = None,
) -> WeatherError:
    """Classify a generic exception into a WeatherError.

    Args:
        exception: Exception to classify
        endpoint: Provider endpoint that failed
        query: Location query sent with the request

    Returns:
        Classified WeatherError instance
    """
    if isinstance(exception, WeatherError):
        return exception

    if isinstance(exception, requests.Timeout):
        return ProviderUnavailable(
            message="Request to weather provider timed out",
            error_code=ErrorCode.NETWORK_TIMEOUT,
            endpoint=endpoint,
        )

    if isinstance(exception, requests.ConnectionError):
        return ProviderUnavailable(
            message="Failed to connect to weather provider",
            error_code=ErrorCode.NETWORK_CONNECTION,
            endpoint=endpoint,
        )

    if isinstance(exception, requests.HTTPError):
        response = getattr(exception, "response", None)
        if response is None:
            return ProviderUnavailable(
                message=str(exception) or "HTTP error from weather provider",
                error_code=ErrorCode.HTTP_SERVER_ERROR,
                endpoint=endpoint,
            )
        return _status_error(response.status_code, endpoint, query, response.text)

    if isinstance(exception, ValueError):
        return MalformedResponse(
            field_path="$",
            message="Response body is not valid JSON",
            error_code=ErrorCode.DATA_PARSE_ERROR,
            endpoint=endpoint,
        )

    if isinstance(exception, requests.RequestException):
        return ProviderUnavailable(
            message=str(exception) or "Request to weather provider failed",
            error_code=ErrorCode.UNKNOWN_ERROR,
            endpoint=endpoint,
        )

    return WeatherError(
        message=str(exception),
        error_code=ErrorCode.UNKNOWN_ERROR,
        endpoint=endpoint,
        details={"exception_type": type(exception).__name__},
    )


def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable.

    Args:
        error: Exception to check

    Returns:
        True if error is retryable
    """
    if isinstance(error, WeatherError):
        return error.retryable

    return classify_error(error).retryable
