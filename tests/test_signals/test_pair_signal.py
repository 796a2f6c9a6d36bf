"""Tests for the pair signal generator.

Tests verify:
- Direction rules for reserve-base, reserve-quote and cross pairs
- Probability clamp, risk/reward bands and classification thresholds
- Price levels on the correct side of entry
- Continuation forecast thresholds and rounding
- Full per-pair analysis invariants across many random seeds
"""

import random
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from fxsignals.config import AnalysisSettings
from fxsignals.exceptions import UnknownPairError
from fxsignals.signals.deviation import build_reading
from fxsignals.signals.models import (
    Classification,
    ContinuationDirection,
    IndicatorReading,
    SignalType,
    Strength,
    TradingSignal,
    VolatilityLevel,
)
from fxsignals.signals.pair_signal import (
    build_continuation_signal,
    build_immediate_signal,
    classify_signal,
    classify_strength,
    classify_volatility,
    compute_price_levels,
    compute_probability,
    determine_direction,
    generate_pair_analysis,
    jitter_price,
    risk_reward_ratio,
    round_half_up,
    volatility_profile,
)


def _reading(dev_forecast: float, dev_previous: float = 1.0, indicator: str = "NFP") -> IndicatorReading:
    """Reading with the requested deviations around a forecast of 100."""
    return build_reading(indicator, 100 + dev_forecast, 100, 100 + dev_forecast - dev_previous)


def _signal(signal_type: SignalType, probability: int, entry: str = "1.08500") -> TradingSignal:
    return build_immediate_signal("EUR/USD", signal_type, probability, Decimal(entry))


class TestRoundHalfUp:
    """Tests for round_half_up."""

    def test_ties_round_up(self) -> None:
        assert round_half_up(59.5) == 60
        assert round_half_up(80.5) == 81

    def test_non_ties(self) -> None:
        assert round_half_up(80.75) == 81
        assert round_half_up(74.8) == 75
        assert round_half_up(60.35) == 60


class TestDetermineDirection:
    """Tests for determine_direction."""

    def test_usd_base_follows_indicator(self) -> None:
        rng = random.Random(0)
        assert determine_direction(_reading(5.0), "USD/JPY", rng) == SignalType.BUY
        assert determine_direction(_reading(-5.0), "USD/JPY", rng) == SignalType.SELL

    def test_usd_quote_inverts(self) -> None:
        rng = random.Random(0)
        assert determine_direction(_reading(5.0), "EUR/USD", rng) == SignalType.SELL
        assert determine_direction(_reading(-5.0), "EUR/USD", rng) == SignalType.BUY

    def test_reserve_branches_never_draw_randomness(self) -> None:
        """Reserve-currency pairs are deterministic: the RNG is untouched."""
        rng = MagicMock()
        for pair in ("USD/JPY", "USD/CHF", "USD/CAD", "EUR/USD", "GBP/USD"):
            determine_direction(_reading(2.0), pair, rng)
        rng.random.assert_not_called()

    def test_reserve_base_repeatable(self) -> None:
        reading = _reading(0.4)
        calls = {determine_direction(reading, "USD/CHF", random.Random(s)) for s in range(50)}
        assert calls == {SignalType.BUY}

    def test_cross_pair_random_policy_uses_rng(self) -> None:
        rng = MagicMock()
        rng.random.return_value = 0.7
        assert determine_direction(_reading(1.0), "EUR/JPY", rng) == SignalType.BUY
        rng.random.return_value = 0.3
        assert determine_direction(_reading(1.0), "EUR/JPY", rng) == SignalType.SELL
        assert rng.random.call_count == 2

    def test_cross_pair_sentiment_policy(self) -> None:
        rng = MagicMock()
        beat = _reading(1.0, dev_previous=-1.0)  # Hawkish
        miss = _reading(-1.0, dev_previous=-1.0)  # Recessivo
        assert determine_direction(beat, "CHF/JPY", rng, cross_pair_policy="sentiment") == SignalType.BUY
        assert determine_direction(miss, "CHF/JPY", rng, cross_pair_policy="sentiment") == SignalType.SELL
        rng.random.assert_not_called()

    def test_cross_pair_historical_policy(self) -> None:
        """NFP has a bullish history (7 vs 5); UNEMPLOYMENT is balanced (6 vs 6)."""
        rng = MagicMock()
        nfp = _reading(-1.0, indicator="NFP")
        unemployment = _reading(1.0, indicator="UNEMPLOYMENT")
        assert determine_direction(nfp, "EUR/JPY", rng, cross_pair_policy="historical") == SignalType.BUY
        assert (
            determine_direction(unemployment, "EUR/JPY", rng, cross_pair_policy="historical")
            == SignalType.SELL
        )

    def test_custom_reserve_currency(self) -> None:
        rng = MagicMock()
        assert determine_direction(_reading(1.0), "EUR/JPY", rng, reserve_currency="EUR") == SignalType.BUY
        assert determine_direction(_reading(1.0), "CHF/JPY", rng, reserve_currency="JPY") == SignalType.SELL

    def test_malformed_pair_raises(self) -> None:
        with pytest.raises(UnknownPairError):
            determine_direction(_reading(1.0), "EURUSD", random.Random(0))


class TestComputeProbability:
    """Tests for compute_probability."""

    def test_zero_deviation_is_base(self) -> None:
        assert compute_probability(0.0) == 65

    def test_scaled_by_abs_deviation(self) -> None:
        assert compute_probability(2.0) == 71
        assert compute_probability(-2.0) == 71

    def test_extreme_deviation_clamped_to_ceiling(self) -> None:
        assert compute_probability(10_000.0) == 95
        assert compute_probability(-10_000.0) == 95
        assert compute_probability(76_000.0) == 95

    def test_floor_applies_with_low_base(self) -> None:
        assert compute_probability(0.0, base=40.0) == 55

    @pytest.mark.parametrize("deviation", [0.0, 0.01, 1.7, 3.33, 9.99, 1e6, -1e9])
    def test_always_within_bounds(self, deviation: float) -> None:
        assert 55 <= compute_probability(deviation) <= 95


class TestRiskRewardAndClassification:
    """Tests for risk_reward_ratio and classify_signal."""

    def test_risk_reward_bands(self) -> None:
        assert risk_reward_ratio(95) == Decimal("2.5")
        assert risk_reward_ratio(81) == Decimal("2.5")
        assert risk_reward_ratio(80) == Decimal("2.0")
        assert risk_reward_ratio(71) == Decimal("2.0")
        assert risk_reward_ratio(70) == Decimal("1.5")
        assert risk_reward_ratio(55) == Decimal("1.5")

    def test_classification_thresholds(self) -> None:
        assert classify_signal(95) == Classification.AGGRESSIVE
        assert classify_signal(80) == Classification.AGGRESSIVE
        assert classify_signal(79) == Classification.MODERATE
        assert classify_signal(70) == Classification.MODERATE
        assert classify_signal(69) == Classification.CONSERVATIVE
        assert classify_signal(55) == Classification.CONSERVATIVE

    def test_wire_labels(self) -> None:
        assert Classification.AGGRESSIVE.value == "Agressivo"
        assert SignalType.SELL.value == "VENDA"


class TestPriceLevels:
    """Tests for compute_price_levels, jitter_price and build_immediate_signal."""

    def test_buy_levels(self) -> None:
        stop, take_profit = compute_price_levels(
            Decimal("1.08500"), SignalType.BUY, Decimal("0.002"), Decimal("2.0")
        )
        assert stop == Decimal("1.08283")
        assert take_profit == Decimal("1.08934")

    def test_sell_levels(self) -> None:
        stop, take_profit = compute_price_levels(
            Decimal("1.08500"), SignalType.SELL, Decimal("0.002"), Decimal("2.0")
        )
        assert stop == Decimal("1.08717")
        assert take_profit == Decimal("1.08066")

    def test_immediate_signal_fields(self) -> None:
        signal = _signal(SignalType.BUY, 75)
        assert signal.timeframe == "3 min"
        assert signal.classification == Classification.MODERATE
        # 2.0x reward on a 0.00217 stop distance
        assert signal.take_profit - signal.entry == Decimal("0.00434")
        assert signal.entry - signal.stop == Decimal("0.00217")

    def test_jitter_within_half_band(self) -> None:
        base = Decimal("149.50")
        rng = random.Random(11)
        for _ in range(100):
            price = jitter_price(base, Decimal("0.001"), rng)
            assert abs(price - base) <= base * Decimal("0.0005")

    def test_to_dict_prices_are_strings(self) -> None:
        data = _signal(SignalType.SELL, 60).to_dict()
        assert data["entry"] == "1.08500"
        assert data["type"] == "VENDA"
        assert data["classification"] == "Conservador"
        assert "takeProfit" in data


class TestContinuationSignal:
    """Tests for build_continuation_signal."""

    @pytest.mark.parametrize(
        ("probability", "direction", "expected_probability"),
        [
            (95, ContinuationDirection.CONTINUE, 81),  # 80.75
            (89, ContinuationDirection.CONTINUE, 76),  # 75.65
            (88, ContinuationDirection.PULLBACK, 75),  # 74.8 rounds to 75, still below threshold
            (71, ContinuationDirection.PULLBACK, 60),  # 60.35
            (70, ContinuationDirection.REVERSE, 60),  # 59.5
            (55, ContinuationDirection.REVERSE, 47),  # 46.75
        ],
    )
    def test_direction_thresholds(
        self, probability: int, direction: ContinuationDirection, expected_probability: int
    ) -> None:
        continuation = build_continuation_signal(_signal(SignalType.BUY, probability), 5.0)
        assert continuation.direction == direction
        assert continuation.probability == expected_probability

    def test_entry_shaded_in_signal_direction(self) -> None:
        buy = build_continuation_signal(_signal(SignalType.BUY, 80), 5.0)
        sell = build_continuation_signal(_signal(SignalType.SELL, 80), 5.0)
        assert buy.entry == Decimal("1.08446")
        assert sell.entry == Decimal("1.08554")

    def test_volatility_and_intensity(self) -> None:
        strong = build_continuation_signal(_signal(SignalType.BUY, 95), 20.0)
        assert strong.volatility == VolatilityLevel.HIGH
        assert strong.intensity == "Movimento forte esperado"

        moderate = build_continuation_signal(_signal(SignalType.BUY, 95), 10.0)
        assert moderate.volatility == VolatilityLevel.MEDIUM
        assert moderate.intensity == "Movimento moderado esperado"

        weak = build_continuation_signal(_signal(SignalType.BUY, 60), 20.0)
        assert weak.volatility == VolatilityLevel.HIGH
        assert weak.intensity == "Movimento fraco esperado"


class TestVolatility:
    """Tests for volatility bucketing and the per-timeframe profile."""

    def test_bucket_thresholds(self) -> None:
        assert classify_volatility(15.01) == VolatilityLevel.HIGH
        assert classify_volatility(15.0) == VolatilityLevel.MEDIUM
        assert classify_volatility(8.0) == VolatilityLevel.LOW
        assert classify_strength(16) == Strength.STRONG
        assert classify_strength(9) == Strength.MODERATE
        assert classify_strength(0) == Strength.WEAK

    def test_profile_ranges(self) -> None:
        rng = random.Random(5)
        for _ in range(50):
            profile = volatility_profile(-2.0, rng)
            assert profile.base == 20.0
            assert 16.0 <= profile.min3 <= 24.0
            assert 20.0 <= profile.min5 <= 30.0
            assert 24.0 <= profile.min10 <= 36.0
            assert 28.0 <= profile.min15 <= 42.0


class TestGeneratePairAnalysis:
    """Tests for generate_pair_analysis."""

    def test_probabilities_complement(self, analysis_settings: AnalysisSettings) -> None:
        analysis = generate_pair_analysis(_reading(2.0), "USD/JPY", analysis_settings, random.Random(1))
        signal = analysis.immediate_signal
        assert signal.type == SignalType.BUY
        assert analysis.probability_up == signal.probability == 71
        assert analysis.probability_down == 29

    def test_sell_probability_down(self, analysis_settings: AnalysisSettings) -> None:
        analysis = generate_pair_analysis(_reading(2.0), "EUR/USD", analysis_settings, random.Random(1))
        assert analysis.immediate_signal.type == SignalType.SELL
        assert analysis.probability_down == 71
        assert analysis.probability_up == 29

    def test_unknown_pair_raises(self, analysis_settings: AnalysisSettings) -> None:
        with pytest.raises(UnknownPairError):
            generate_pair_analysis(_reading(1.0), "USD/BRL", analysis_settings, random.Random(1))

    def test_invariants_across_seeds(self, analysis_settings: AnalysisSettings) -> None:
        """Clamp, continuation rounding and stop/TP sides hold for every draw."""
        for seed in range(40):
            rng = random.Random(seed)
            deviation = (rng.random() - 0.5) * 20_000
            reading = _reading(deviation, dev_previous=rng.random() - 0.5)
            for pair in ("EUR/USD", "USD/JPY", "EUR/JPY", "CHF/JPY"):
                analysis = generate_pair_analysis(reading, pair, analysis_settings, rng)
                signal = analysis.immediate_signal
                continuation = analysis.continuation_signal

                assert 55 <= signal.probability <= 95
                assert continuation.probability == round_half_up(
                    Decimal(signal.probability) * Decimal("0.85")
                )
                if signal.type == SignalType.BUY:
                    assert signal.stop < signal.entry < signal.take_profit
                else:
                    assert signal.take_profit < signal.entry < signal.stop

    def test_to_dict_shape(self, analysis_settings: AnalysisSettings) -> None:
        data = generate_pair_analysis(
            _reading(1.0), "USD/CAD", analysis_settings, random.Random(2)
        ).to_dict()
        assert set(data) == {
            "pair",
            "probabilityUp",
            "probabilityDown",
            "strength",
            "volatility3min",
            "volatility5min",
            "volatility10min",
            "volatility15min",
            "immediateSignal",
            "continuationSignal",
        }
        assert data["immediateSignal"]["pair"] == "USD/CAD"
