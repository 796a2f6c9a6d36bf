"""News deviation calculator.

Produces an IndicatorReading from a (current, forecast, previous) triple that
is either synthesized around a baseline or taken from scraped release history.
"""

import random
from datetime import datetime, timezone

from fxsignals.scraper.models import ScrapedEvent
from fxsignals.scraper.parsers import parse_numeric
from fxsignals.signals.models import IndicatorReading
from fxsignals.signals.sentiment import classify_sentiment

#: Relative spread of synthesized readings around the baseline.
_VARIANCE_PCT = 0.05
_FORECAST_SPREAD = 0.8
_PREVIOUS_SPREAD = 0.9


def compute_deviations(
    current: float, forecast: float, previous: float
) -> tuple[float, float]:
    """Return (deviation_from_forecast, deviation_from_previous)."""
    return current - forecast, current - previous


def synthesize_values(
    baseline: float, rng: random.Random
) -> tuple[float, float, float]:
    """Draw a plausible (current, forecast, previous) triple around a baseline.

    Each value is baseline + (u - 0.5) * variance with an independent uniform
    draw u; forecast and previous use a slightly narrower spread.
    """
    variance = baseline * _VARIANCE_PCT
    current = baseline + (rng.random() - 0.5) * variance
    forecast = baseline + (rng.random() - 0.5) * variance * _FORECAST_SPREAD
    previous = baseline + (rng.random() - 0.5) * variance * _PREVIOUS_SPREAD
    return current, forecast, previous


def build_reading(
    indicator: str,
    current: float,
    forecast: float,
    previous: float,
    source: str = "simulated",
    now: datetime | None = None,
) -> IndicatorReading:
    """Compute deviations and sentiment and wrap them in an IndicatorReading."""
    dev_forecast, dev_previous = compute_deviations(current, forecast, previous)
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    return IndicatorReading(
        indicator=indicator,
        current=current,
        forecast=forecast,
        previous=previous,
        deviation_from_forecast=dev_forecast,
        deviation_from_previous=dev_previous,
        sentiment=classify_sentiment(dev_forecast, dev_previous),
        timestamp=timestamp,
        source=source,
    )


def reading_from_events(
    indicator: str,
    events: list[ScrapedEvent],
    now: datetime | None = None,
) -> IndicatorReading | None:
    """Build a reading from scraped release history (newest first).

    The latest release supplies ``current`` and ``forecast``; the release
    before it supplies ``previous``. A missing forecast falls back to the
    previous value. Rows without a parseable actual are skipped.

    Returns:
        IndicatorReading, or None when fewer than two usable releases exist.
    """
    usable = [e for e in events if parse_numeric(e.actual) is not None]
    if len(usable) < 2:
        return None

    latest, prior = usable[0], usable[1]
    current = parse_numeric(latest.actual)
    previous = parse_numeric(prior.actual)
    forecast = parse_numeric(latest.forecast)
    if forecast is None:
        forecast = previous

    return build_reading(
        indicator,
        current,  # type: ignore[arg-type]
        forecast,  # type: ignore[arg-type]
        previous,  # type: ignore[arg-type]
        source="scraped",
        now=now,
    )
