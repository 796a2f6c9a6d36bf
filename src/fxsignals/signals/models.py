"""Signal pipeline data models.

Enum values are the labels the dashboard UI renders; member names are English.
Price fields use Decimal quantized to 5 places. Indicator readings and
volatility figures are statistics, not money, and stay float.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class Sentiment(str, Enum):
    """Sign-quadrant classification of an indicator release."""

    HAWKISH = "Hawkish"
    DOVISH = "Dovish"
    EXPANSIVE = "Expansivo"
    RECESSIVE = "Recessivo"


class SignalType(str, Enum):
    """Directional call on a currency pair."""

    BUY = "COMPRA"
    SELL = "VENDA"


class Classification(str, Enum):
    """Risk classification of a signal by probability band."""

    CONSERVATIVE = "Conservador"
    MODERATE = "Moderado"
    AGGRESSIVE = "Agressivo"


class ContinuationDirection(str, Enum):
    """Expected price behavior after the immediate signal window."""

    CONTINUE = "continuar"
    PULLBACK = "pullback"
    REVERSE = "reverter"


class VolatilityLevel(str, Enum):
    """Coarse volatility bucket."""

    LOW = "baixa"
    MEDIUM = "média"
    HIGH = "alta"


class Strength(str, Enum):
    """Expected move strength for a pair."""

    WEAK = "fraco"
    MODERATE = "moderado"
    STRONG = "forte"


@dataclass
class IndicatorReading:
    """A single indicator release with its deviations and sentiment.

    Created per request; never persisted.
    """

    indicator: str
    current: float
    forecast: float
    previous: float
    deviation_from_forecast: float
    deviation_from_previous: float
    sentiment: Sentiment
    timestamp: str  # ISO 8601, UTC
    source: str = "simulated"  # "simulated" or "scraped"

    def to_dict(self) -> dict:
        """Serialize to the camelCase shape consumed by the dashboard."""
        return {
            "indicator": self.indicator,
            "current": self.current,
            "forecast": self.forecast,
            "previous": self.previous,
            "deviationFromForecast": self.deviation_from_forecast,
            "deviationFromPrevious": self.deviation_from_previous,
            "sentiment": self.sentiment.value,
            "timestamp": self.timestamp,
            "source": self.source,
        }


@dataclass
class TradingSignal:
    """Immediate (0-3 min) trading signal for one pair."""

    type: SignalType
    pair: str
    probability: int
    entry: Decimal
    stop: Decimal
    take_profit: Decimal
    timeframe: str
    classification: Classification

    def to_dict(self) -> dict:
        """Serialize with Decimal prices as strings."""
        return {
            "type": self.type.value,
            "pair": self.pair,
            "probability": self.probability,
            "entry": str(self.entry),
            "stop": str(self.stop),
            "takeProfit": str(self.take_profit),
            "timeframe": self.timeframe,
            "classification": self.classification.value,
        }


@dataclass
class ContinuationSignal:
    """Secondary (3-15 min) lower-confidence forecast following a signal."""

    direction: ContinuationDirection
    probability: int
    volatility: VolatilityLevel
    entry: Decimal
    intensity: str

    def to_dict(self) -> dict:
        """Serialize with Decimal entry as string."""
        return {
            "direction": self.direction.value,
            "probability": self.probability,
            "volatility": self.volatility.value,
            "entry": str(self.entry),
            "intensity": self.intensity,
        }


@dataclass
class VolatilityProfile:
    """Expected pip volatility per timeframe after a release."""

    base: float
    min3: float
    min5: float
    min10: float
    min15: float


@dataclass
class PairAnalysis:
    """Full per-pair analysis: probabilities, volatility, and both signals."""

    pair: str
    probability_up: int
    probability_down: int
    strength: Strength
    volatility: VolatilityProfile
    immediate_signal: TradingSignal
    continuation_signal: ContinuationSignal

    def to_dict(self) -> dict:
        """Serialize to the camelCase shape consumed by the dashboard."""
        return {
            "pair": self.pair,
            "probabilityUp": self.probability_up,
            "probabilityDown": self.probability_down,
            "strength": self.strength.value,
            "volatility3min": self.volatility.min3,
            "volatility5min": self.volatility.min5,
            "volatility10min": self.volatility.min10,
            "volatility15min": self.volatility.min15,
            "immediateSignal": self.immediate_signal.to_dict(),
            "continuationSignal": self.continuation_signal.to_dict(),
        }


@dataclass(frozen=True)
class HistoricalPattern:
    """Canned 12-month release statistics for one indicator. Read-only."""

    indicator: str
    total_events: int
    bullish_count: int
    bearish_count: int
    avg_volatility_3min: float
    avg_volatility_5min: float
    avg_volatility_10min: float
    avg_volatility_15min: float
    best_timeframe: str
    win_rate: float
    avg_pip_movement: float

    def to_dict(self) -> dict:
        """Serialize to the camelCase shape consumed by the dashboard."""
        return {
            "indicator": self.indicator,
            "totalEvents": self.total_events,
            "bullishCount": self.bullish_count,
            "bearishCount": self.bearish_count,
            "avgVolatility3min": self.avg_volatility_3min,
            "avgVolatility5min": self.avg_volatility_5min,
            "avgVolatility10min": self.avg_volatility_10min,
            "avgVolatility15min": self.avg_volatility_15min,
            "bestTimeframe": self.best_timeframe,
            "winRate": self.win_rate,
            "avgPipMovement": self.avg_pip_movement,
        }


@dataclass
class AnalysisReport:
    """Response envelope for one indicator analyzed across a pair set."""

    news_data: IndicatorReading
    pair_analyses: list[PairAnalysis] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to the ``{newsData, pairAnalyses}`` API shape."""
        return {
            "newsData": self.news_data.to_dict(),
            "pairAnalyses": [p.to_dict() for p in self.pair_analyses],
        }
