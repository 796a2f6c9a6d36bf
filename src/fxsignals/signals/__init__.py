"""Indicator-to-signal scoring pipeline.

Provides data models and computation functions for turning an economic
indicator release into per-pair trading signals: deviation calculation,
sentiment classification, pair signal generation, the historical pattern
table, and the AnalysisEngine that runs them end to end.
"""

from fxsignals.signals.deviation import build_reading, compute_deviations, synthesize_values
from fxsignals.signals.engine import AnalysisEngine
from fxsignals.signals.historical import lookup_pattern
from fxsignals.signals.models import (
    AnalysisReport,
    Classification,
    ContinuationDirection,
    HistoricalPattern,
    IndicatorReading,
    PairAnalysis,
    Sentiment,
    SignalType,
    TradingSignal,
)
from fxsignals.signals.pair_signal import generate_pair_analysis
from fxsignals.signals.sentiment import classify_sentiment

__all__ = [
    "AnalysisEngine",
    "AnalysisReport",
    "Classification",
    "ContinuationDirection",
    "HistoricalPattern",
    "IndicatorReading",
    "PairAnalysis",
    "Sentiment",
    "SignalType",
    "TradingSignal",
    "build_reading",
    "classify_sentiment",
    "compute_deviations",
    "generate_pair_analysis",
    "lookup_pattern",
    "synthesize_values",
]
