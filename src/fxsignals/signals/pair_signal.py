"""Pair signal generator.

For one currency pair and one indicator reading, decides a directional call,
a probability score, entry/stop/take-profit levels, a risk classification, a
continuation forecast and a per-timeframe volatility profile.

Direction rules (reserve currency = USD by default):
    USD/XXX  -> follows the indicator (beat = BUY)
    XXX/USD  -> inverted (beat = SELL)
    cross    -> ANALYSIS_CROSS_PAIR_POLICY ("random" coin flip by default)

All randomness comes from the injected ``random.Random``; the reserve-currency
branches never draw from it.
"""

import random
from decimal import ROUND_HALF_UP, Decimal

from fxsignals.config import AnalysisSettings
from fxsignals.signals.historical import lookup_pattern, pattern_direction
from fxsignals.signals.models import (
    Classification,
    ContinuationDirection,
    ContinuationSignal,
    IndicatorReading,
    PairAnalysis,
    SignalType,
    Strength,
    TradingSignal,
    VolatilityLevel,
    VolatilityProfile,
)
from fxsignals.signals.reference import get_base_price, split_pair
from fxsignals.signals.sentiment import is_bullish_sentiment

_PRICE_QUANT = Decimal("0.00001")
_HALF = Decimal("0.5")

IMMEDIATE_TIMEFRAME = "3 min"

#: Per-timeframe volatility multiplier ranges (low, width) for 3/5/10/15 min.
_VOLATILITY_RANGES = ((0.8, 0.4), (1.0, 0.5), (1.2, 0.6), (1.4, 0.7))


def round_half_up(value: float | Decimal) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def determine_direction(
    reading: IndicatorReading,
    pair: str,
    rng: random.Random,
    reserve_currency: str = "USD",
    cross_pair_policy: str = "random",
) -> SignalType:
    """Decide BUY/SELL for a pair from the reserve currency's strength.

    The reserve currency is considered strong when the release beat its
    forecast. Cross pairs (no reserve side) follow ``cross_pair_policy``:
    "random" flips a coin, "sentiment" buys on Expansivo/Hawkish, and
    "historical" follows the indicator's historical bullish bias.
    """
    base, quote = split_pair(pair)
    reserve_strong = reading.deviation_from_forecast > 0

    if base == reserve_currency:
        return SignalType.BUY if reserve_strong else SignalType.SELL
    if quote == reserve_currency:
        return SignalType.SELL if reserve_strong else SignalType.BUY

    if cross_pair_policy == "sentiment":
        return SignalType.BUY if is_bullish_sentiment(reading.sentiment) else SignalType.SELL
    if cross_pair_policy == "historical":
        pattern = lookup_pattern(reading.indicator)
        return pattern_direction(
            pattern, reading.deviation_from_forecast, pair, reserve_currency
        )
    # Placeholder behavior carried over from the dashboard: no verified rule
    # exists for cross pairs.
    return SignalType.BUY if rng.random() > 0.5 else SignalType.SELL


def compute_probability(
    deviation_from_forecast: float,
    base: float = 65.0,
    scale: float = 3.0,
    floor: float = 55.0,
    ceiling: float = 95.0,
) -> int:
    """Confidence score: clamp(base + |deviation| * scale, floor, ceiling), rounded."""
    raw = base + abs(deviation_from_forecast) * scale
    return round_half_up(min(ceiling, max(floor, raw)))


def risk_reward_ratio(probability: int) -> Decimal:
    """Take-profit multiple of the stop distance by probability band."""
    if probability > 80:
        return Decimal("2.5")
    if probability > 70:
        return Decimal("2.0")
    return Decimal("1.5")


def classify_signal(probability: int) -> Classification:
    """>= 80 Agressivo, >= 70 Moderado, otherwise Conservador."""
    if probability >= 80:
        return Classification.AGGRESSIVE
    if probability >= 70:
        return Classification.MODERATE
    return Classification.CONSERVATIVE


def jitter_price(
    base_price: Decimal, jitter_pct: Decimal, rng: random.Random
) -> Decimal:
    """Perturb a base price by up to +/- jitter_pct / 2 to emulate a live tick."""
    offset = (Decimal(str(rng.random())) - _HALF) * jitter_pct
    return (base_price * (1 + offset)).quantize(_PRICE_QUANT)


def compute_price_levels(
    entry: Decimal,
    signal_type: SignalType,
    stop_distance_pct: Decimal,
    reward_ratio: Decimal,
) -> tuple[Decimal, Decimal]:
    """Return (stop, take_profit) on the losing and winning side of entry."""
    stop_distance = entry * stop_distance_pct
    take_profit_distance = stop_distance * reward_ratio

    if signal_type == SignalType.BUY:
        stop = entry - stop_distance
        take_profit = entry + take_profit_distance
    else:
        stop = entry + stop_distance
        take_profit = entry - take_profit_distance

    return stop.quantize(_PRICE_QUANT), take_profit.quantize(_PRICE_QUANT)


def build_immediate_signal(
    pair: str,
    signal_type: SignalType,
    probability: int,
    entry: Decimal,
    stop_distance_pct: Decimal = Decimal("0.002"),
) -> TradingSignal:
    """Assemble the 0-3 minute signal with price levels and classification."""
    stop, take_profit = compute_price_levels(
        entry, signal_type, stop_distance_pct, risk_reward_ratio(probability)
    )
    return TradingSignal(
        type=signal_type,
        pair=pair,
        probability=probability,
        entry=entry.quantize(_PRICE_QUANT),
        stop=stop,
        take_profit=take_profit,
        timeframe=IMMEDIATE_TIMEFRAME,
        classification=classify_signal(probability),
    )


def classify_volatility(volatility_base: float) -> VolatilityLevel:
    if volatility_base > 15:
        return VolatilityLevel.HIGH
    if volatility_base > 8:
        return VolatilityLevel.MEDIUM
    return VolatilityLevel.LOW


def classify_strength(volatility_base: float) -> Strength:
    if volatility_base > 15:
        return Strength.STRONG
    if volatility_base > 8:
        return Strength.MODERATE
    return Strength.WEAK


def _intensity(level: VolatilityLevel, direction: ContinuationDirection) -> str:
    if level == VolatilityLevel.HIGH and direction == ContinuationDirection.CONTINUE:
        return "Movimento forte esperado"
    if level == VolatilityLevel.MEDIUM:
        return "Movimento moderado esperado"
    return "Movimento fraco esperado"


def build_continuation_signal(
    signal: TradingSignal,
    volatility_base: float,
    factor: Decimal = Decimal("0.85"),
) -> ContinuationSignal:
    """Derive the 3-15 minute continuation forecast from an immediate signal.

    continuation = probability * factor; >= 75 continuar, >= 60 pullback,
    otherwise reverter. The entry is shaded 5 bps in the signal's favor.
    """
    continuation = Decimal(signal.probability) * factor

    if continuation >= 75:
        direction = ContinuationDirection.CONTINUE
    elif continuation >= 60:
        direction = ContinuationDirection.PULLBACK
    else:
        direction = ContinuationDirection.REVERSE

    if signal.type == SignalType.BUY:
        entry = signal.entry * Decimal("0.9995")
    else:
        entry = signal.entry * Decimal("1.0005")

    level = classify_volatility(volatility_base)
    return ContinuationSignal(
        direction=direction,
        probability=round_half_up(continuation),
        volatility=level,
        entry=entry.quantize(_PRICE_QUANT),
        intensity=_intensity(level, direction),
    )


def volatility_profile(
    deviation_from_forecast: float, rng: random.Random
) -> VolatilityProfile:
    """Expected pip volatility per timeframe, widening with the horizon."""
    base = abs(deviation_from_forecast) * 10
    values = [
        round(base * (low + rng.random() * width), 2)
        for low, width in _VOLATILITY_RANGES
    ]
    return VolatilityProfile(
        base=base,
        min3=values[0],
        min5=values[1],
        min10=values[2],
        min15=values[3],
    )


def generate_pair_analysis(
    reading: IndicatorReading,
    pair: str,
    settings: AnalysisSettings,
    rng: random.Random,
) -> PairAnalysis:
    """Run the full per-pair scoring for one reading.

    Raises:
        UnknownPairError: If the pair has no base price or a malformed id.
    """
    base_price = get_base_price(pair)
    signal_type = determine_direction(
        reading,
        pair,
        rng,
        reserve_currency=settings.reserve_currency,
        cross_pair_policy=settings.cross_pair_policy,
    )
    probability = compute_probability(
        reading.deviation_from_forecast,
        base=settings.base_probability,
        scale=settings.deviation_scale,
        floor=settings.probability_floor,
        ceiling=settings.probability_ceiling,
    )
    entry = jitter_price(base_price, settings.price_jitter_pct, rng)
    signal = build_immediate_signal(
        pair, signal_type, probability, entry, settings.stop_distance_pct
    )

    volatility = volatility_profile(reading.deviation_from_forecast, rng)
    continuation = build_continuation_signal(
        signal, volatility.base, settings.continuation_factor
    )

    if signal_type == SignalType.BUY:
        probability_up = probability
    else:
        probability_up = 100 - probability

    return PairAnalysis(
        pair=pair,
        probability_up=probability_up,
        probability_down=100 - probability_up,
        strength=classify_strength(volatility.base),
        volatility=volatility,
        immediate_signal=signal,
        continuation_signal=continuation,
    )
