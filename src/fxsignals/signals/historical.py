"""Historical pattern lookup.

Canned 12-month release statistics per indicator. Nothing here is computed
from market data; the table is read-only and unknown ids resolve to a
default row rather than an error.
"""

from fxsignals.signals.models import HistoricalPattern, SignalType
from fxsignals.signals.reference import split_pair


def _row(
    indicator: str,
    total: int,
    bullish: int,
    bearish: int,
    vol: tuple[float, float, float, float],
    best: str,
    win_rate: float,
    pips: float,
) -> HistoricalPattern:
    return HistoricalPattern(
        indicator=indicator,
        total_events=total,
        bullish_count=bullish,
        bearish_count=bearish,
        avg_volatility_3min=vol[0],
        avg_volatility_5min=vol[1],
        avg_volatility_10min=vol[2],
        avg_volatility_15min=vol[3],
        best_timeframe=best,
        win_rate=win_rate,
        avg_pip_movement=pips,
    )


HISTORICAL_PATTERNS: dict[str, HistoricalPattern] = {
    p.indicator: p
    for p in (
        _row("NFP", 12, 7, 5, (25.5, 38.2, 52.8, 61.3), "5 min", 73.5, 45.2),
        _row("UNEMPLOYMENT", 12, 6, 6, (18.3, 28.7, 39.5, 45.8), "10 min", 68.2, 32.5),
        _row("PMI_MANUFACTURING", 12, 8, 4, (12.5, 19.8, 28.3, 34.2), "15 min", 71.8, 28.7),
        _row("PMI_SERVICES", 12, 7, 5, (14.2, 22.5, 31.8, 38.5), "10 min", 69.5, 30.2),
        _row("FOMC", 8, 5, 3, (35.8, 52.3, 71.5, 85.2), "3 min", 78.5, 62.8),
        _row("HOUSING_STARTS", 12, 6, 6, (8.5, 13.2, 19.8, 24.5), "15 min", 64.2, 18.3),
        _row("BUILDING_PERMITS", 12, 7, 5, (9.2, 14.8, 21.3, 26.8), "15 min", 66.5, 20.5),
        _row("HOUSING_SALES", 12, 6, 6, (10.5, 16.3, 23.8, 29.2), "10 min", 67.8, 22.8),
        _row("CPI", 12, 7, 5, (28.5, 42.8, 58.3, 68.5), "5 min", 75.2, 52.3),
        _row("CRUDE_OIL", 52, 28, 24, (15.8, 24.5, 34.2, 41.8), "10 min", 70.5, 32.8),
        _row("GDP", 4, 3, 1, (22.5, 34.8, 48.5, 58.2), "5 min", 72.5, 42.5),
    )
}


def default_pattern(indicator: str) -> HistoricalPattern:
    """Neutral fallback row for indicators without canned statistics."""
    return _row(indicator, 12, 6, 6, (15.0, 23.0, 32.0, 39.0), "10 min", 68.0, 28.0)


def lookup_pattern(indicator: str) -> HistoricalPattern:
    """Return the canned pattern for an indicator, or the default row."""
    pattern = HISTORICAL_PATTERNS.get(indicator)
    if pattern is None:
        return default_pattern(indicator)
    return pattern


def pattern_probability(
    pattern: HistoricalPattern,
    deviation: float,
    floor: float = 55.0,
    ceiling: float = 95.0,
) -> float:
    """Probability of a directional move adjusted by history.

    Formula:
        win_rate + |deviation| / 10 * 5
                 + |bullish - bearish| / total_events * 10
    clamped to [floor, ceiling].
    """
    probability = pattern.win_rate
    probability += abs(deviation) / 10 * 5
    consistency = abs(pattern.bullish_count - pattern.bearish_count) / pattern.total_events
    probability += consistency * 10
    return min(ceiling, max(floor, probability))


def expected_volatility(
    pattern: HistoricalPattern, deviation: float
) -> dict[str, float]:
    """Scale historical average volatility by the size of the surprise."""
    multiplier = 1 + abs(deviation) / 100
    return {
        "volatility3min": pattern.avg_volatility_3min * multiplier,
        "volatility5min": pattern.avg_volatility_5min * multiplier,
        "volatility10min": pattern.avg_volatility_10min * multiplier,
        "volatility15min": pattern.avg_volatility_15min * multiplier,
    }


def pattern_direction(
    pattern: HistoricalPattern,
    deviation: float,
    pair: str,
    reserve_currency: str = "USD",
) -> SignalType:
    """Direction from reserve-currency rules, cross pairs by historical bias."""
    base, quote = split_pair(pair)
    reserve_strong = deviation > 0
    if base == reserve_currency:
        return SignalType.BUY if reserve_strong else SignalType.SELL
    if quote == reserve_currency:
        return SignalType.SELL if reserve_strong else SignalType.BUY
    if pattern.bullish_count > pattern.bearish_count:
        return SignalType.BUY
    return SignalType.SELL
