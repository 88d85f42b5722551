"""Daily forecast aggregation.

Folds a time-ordered list of forecast points into one summary per future
calendar day. Calendar days are UTC dates throughout: the reference time and
every point timestamp are keyed with the same function.
"""

from collections.abc import Sequence
from datetime import datetime, timezone

from weatherdash.shared.config.logging import get_logger
from weatherdash.shared.constants import DATE_KEY_FORMAT, MAX_DAILY_SUMMARIES
from weatherdash.shared.models.weather import DailySummary, ForecastPoint

logger = get_logger(__name__)


def calendar_date_key(timestamp: int | float | datetime) -> str:
    """Get the UTC calendar date of a timestamp as YYYY-MM-DD.

    Args:
        timestamp: Epoch seconds, or a datetime (naive values are read as UTC)

    Returns:
        Date key such as "2026-01-25"

    Example:
        >>> calendar_date_key(0)
        '1970-01-01'
    """
    if isinstance(timestamp, datetime):
        if timestamp.tzinfo is None:
            moment = timestamp.replace(tzinfo=timezone.utc)
        else:
            moment = timestamp.astimezone(timezone.utc)
    else:
        moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)

    return moment.strftime(DATE_KEY_FORMAT)


def summarize_point(date_key: str, point: ForecastPoint) -> DailySummary:
    """Build a day summary from its representative point.

    Points without a day-level range (hourly entries) use their own
    temperature for both max and min.
    """
    return DailySummary(
        date_key=date_key,
        temperature_max=(
            point.temperature_max if point.temperature_max is not None else point.temperature
        ),
        temperature_min=(
            point.temperature_min if point.temperature_min is not None else point.temperature
        ),
        condition_main=point.condition_main,
        condition_description=point.condition_description,
    )


def aggregate_daily(
    points: Sequence[ForecastPoint],
    reference_now: int | float | datetime,
    max_days: int = MAX_DAILY_SUMMARIES,
) -> list[DailySummary]:
    """Pick one representative forecast entry per future calendar day.

    Points are visited in the given order (the caller sorts them). Points
    dated today or earlier are skipped. The first point seen for a new day
    becomes that day's summary; later points of the same day are ignored
    rather than merged. Collection stops after ``max_days`` days.

    Args:
        points: Forecast points ordered by timestamp (not modified)
        reference_now: Current time, used only to find today's date
        max_days: Maximum number of summaries to return

    Returns:
        Summaries oldest first, never including today, at most ``max_days``

    Example:
        >>> summaries = aggregate_daily(points, datetime.now(timezone.utc), 5)
        >>> [s.date_key for s in summaries]
        ['2026-01-26', '2026-01-27']
    """
    if max_days <= 0 or not points:
        return []

    today_key = calendar_date_key(reference_now)
    summaries: list[DailySummary] = []
    seen: set[str] = set()

    for point in points:
        day_key = calendar_date_key(point.timestamp_epoch_seconds)

        # Keys are ISO dates, so string order is date order
        if day_key <= today_key or day_key in seen:
            continue

        seen.add(day_key)
        summaries.append(summarize_point(day_key, point))

        if len(summaries) >= max_days:
            break

    logger.debug(
        "daily_forecast_aggregated",
        today=today_key,
        num_points=len(points),
        num_days=len(summaries),
    )

    return summaries
