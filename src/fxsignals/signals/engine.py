"""Analysis engine orchestrating the indicator-to-signal pipeline.

The AnalysisEngine is the top-level coordinator that:
1. Resolves the indicator baseline (or takes a scraped reading)
2. Computes deviations and sentiment
3. Generates a PairAnalysis for each requested pair
4. Logs the per-pair calls at DEBUG level
5. Returns an AnalysisReport ready for JSON serialization

Every call is independent: the engine holds configuration, an RNG and a
clock, and no per-request state.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from fxsignals.config import AnalysisSettings
from fxsignals.logging import get_logger
from fxsignals.signals.deviation import build_reading, reading_from_events, synthesize_values
from fxsignals.signals.models import AnalysisReport, IndicatorReading
from fxsignals.signals.pair_signal import generate_pair_analysis
from fxsignals.signals.reference import get_base_price, get_baseline, pair_set

if TYPE_CHECKING:
    from fxsignals.scraper.models import ScrapedEvent

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AnalysisEngine:
    """Runs the scoring pipeline for one indicator across a set of pairs.

    Args:
        settings: Probability, price-level and direction parameters.
        rng: Random source for synthesized readings, price jitter, volatility
            multipliers and the cross-pair coin flip. Seed it for
            reproducible output.
        clock: Returns the current UTC datetime for reading timestamps.
    """

    def __init__(
        self,
        settings: AnalysisSettings,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._settings = settings
        self._rng = rng or random.Random()
        self._clock = clock

    @property
    def default_pairs(self) -> tuple[str, ...]:
        return pair_set(self._settings.extended_pairs)

    def resolve_pairs(self, pairs: Sequence[str] | None = None) -> list[str]:
        """Validate requested pairs, defaulting to the configured pair set.

        Raises:
            UnknownPairError: If any requested pair is not supported.
        """
        if not pairs:
            return list(self.default_pairs)
        resolved = [p.strip().upper() for p in pairs if p.strip()]
        for pair in resolved:
            get_base_price(pair)
        return resolved

    def synthesize_reading(self, indicator: str) -> IndicatorReading:
        """Draw a simulated release for an indicator around its baseline.

        Raises:
            UnknownIndicatorError: If the indicator is not supported.
        """
        baseline = get_baseline(indicator)
        current, forecast, previous = synthesize_values(baseline, self._rng)
        return build_reading(
            indicator, current, forecast, previous, source="simulated", now=self._clock()
        )

    def reading_from_history(
        self, indicator: str, events: list[ScrapedEvent]
    ) -> IndicatorReading:
        """Build a reading from scraped history, falling back to simulation.

        Raises:
            UnknownIndicatorError: If the indicator is not supported.
        """
        get_baseline(indicator)
        reading = reading_from_events(indicator, events, now=self._clock())
        if reading is None:
            logger.warning(
                "scraped_history_insufficient",
                indicator=indicator,
                rows=len(events),
            )
            return self.synthesize_reading(indicator)
        return reading

    def analyze_reading(
        self, reading: IndicatorReading, pairs: Sequence[str] | None = None
    ) -> AnalysisReport:
        """Generate pair analyses for an already-computed reading."""
        resolved = self.resolve_pairs(pairs)
        analyses = [
            generate_pair_analysis(reading, pair, self._settings, self._rng)
            for pair in resolved
        ]

        for analysis in analyses:
            logger.debug(
                "pair_signal_generated",
                indicator=reading.indicator,
                pair=analysis.pair,
                type=analysis.immediate_signal.type.value,
                probability=analysis.immediate_signal.probability,
                classification=analysis.immediate_signal.classification.value,
            )

        logger.info(
            "analysis_completed",
            indicator=reading.indicator,
            sentiment=reading.sentiment.value,
            source=reading.source,
            pairs=len(analyses),
        )
        return AnalysisReport(news_data=reading, pair_analyses=analyses)

    def analyze(
        self, indicator: str, pairs: Sequence[str] | None = None
    ) -> AnalysisReport:
        """Simulate a release for ``indicator`` and analyze every pair."""
        reading = self.synthesize_reading(indicator)
        return self.analyze_reading(reading, pairs)
