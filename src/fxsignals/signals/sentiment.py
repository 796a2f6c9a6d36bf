"""Sentiment classification of an indicator release.

A lookup over the sign quadrant of the two deviations. Magnitudes are ignored.

    dev_forecast > 0, dev_previous > 0   -> Expansivo
    dev_forecast > 0, dev_previous <= 0  -> Hawkish
    dev_forecast <= 0, dev_previous < 0  -> Recessivo
    dev_forecast <= 0, dev_previous >= 0 -> Dovish
"""

from fxsignals.signals.models import Sentiment


def classify_sentiment(
    deviation_from_forecast: float, deviation_from_previous: float
) -> Sentiment:
    """Map the signs of the two deviations to a sentiment label."""
    if deviation_from_forecast > 0:
        return Sentiment.EXPANSIVE if deviation_from_previous > 0 else Sentiment.HAWKISH
    return Sentiment.RECESSIVE if deviation_from_previous < 0 else Sentiment.DOVISH


def is_bullish_sentiment(sentiment: Sentiment) -> bool:
    """True for the two labels produced by a beat of the forecast."""
    return sentiment in (Sentiment.EXPANSIVE, Sentiment.HAWKISH)
