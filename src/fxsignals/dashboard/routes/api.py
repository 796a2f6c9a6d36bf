"""JSON API endpoints for signal analysis and historical patterns."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from fxsignals.exceptions import UnknownIndicatorError, UnknownPairError
from fxsignals.signals.engine import AnalysisEngine
from fxsignals.signals.historical import (
    expected_volatility,
    lookup_pattern,
    pattern_probability,
)
from fxsignals.signals.reference import INDICATOR_LABELS, INDICATORS, get_baseline

log = structlog.get_logger(__name__)

router = APIRouter()

DEFAULT_INDICATOR = "NFP"
_SOURCES = ("simulated", "scraped")


def _split_pairs(pairs: str | None) -> list[str] | None:
    """Parse a comma-separated pair list; None or blank means the default set."""
    if not pairs:
        return None
    return [p.strip() for p in pairs.split(",") if p.strip()]


@router.get("/analysis")
async def get_analysis(
    request: Request,
    indicator: str = DEFAULT_INDICATOR,
    source: str = "simulated",
    pairs: str | None = None,
) -> JSONResponse:
    """Analyze one indicator release across the pair set.

    Query params:
        indicator: Indicator id (default NFP).
        source: "simulated" (baseline +/- random variance) or "scraped"
            (latest releases from investing.com, simulated on insufficient data).
        pairs: Optional comma-separated pair ids; defaults to the configured set.

    Returns:
        JSON ``{newsData, pairAnalyses}``; 400 for a bad source, 404 for an
        unknown indicator or pair, 500 on unexpected errors.
    """
    if source not in _SOURCES:
        return JSONResponse(
            content={"error": f"Invalid source: {source}"}, status_code=400
        )

    engine: AnalysisEngine = request.app.state.analysis_engine
    indicator = indicator.strip().upper()
    requested_pairs = _split_pairs(pairs)

    try:
        get_baseline(indicator)
        if source == "scraped":
            market_data = request.app.state.market_data
            events = []
            if market_data is not None:
                events = await market_data.get_indicator_history(indicator) or []
            reading = engine.reading_from_history(indicator, events)
            report = engine.analyze_reading(reading, requested_pairs)
        else:
            report = engine.analyze(indicator, requested_pairs)
    except (UnknownIndicatorError, UnknownPairError) as e:
        return JSONResponse(content={"error": str(e)}, status_code=404)
    except Exception as e:
        log.error("analysis_error", indicator=indicator, error=str(e), exc_info=True)
        return JSONResponse(
            content={"error": "Failed to process analysis"}, status_code=500
        )

    return JSONResponse(content=report.to_dict())


@router.get("/patterns")
async def get_pattern(
    indicator: str | None = None, deviation: float | None = None
) -> JSONResponse:
    """Canned historical statistics for an indicator.

    Unknown ids return the default pattern row rather than an error. With
    ``deviation`` (forecast surprise), the row also carries the
    history-adjusted ``probability`` and ``expectedVolatility`` per timeframe.
    """
    if not indicator:
        return JSONResponse(
            content={"error": "Indicator not specified"}, status_code=400
        )
    pattern = lookup_pattern(indicator.strip().upper())
    content = pattern.to_dict()
    if deviation is not None:
        content["probability"] = round(pattern_probability(pattern, deviation), 2)
        content["expectedVolatility"] = {
            k: round(v, 2) for k, v in expected_volatility(pattern, deviation).items()
        }
    return JSONResponse(content=content)


@router.get("/indicators")
async def get_indicators(request: Request) -> JSONResponse:
    """Supported indicator ids with display labels, and the default pair set."""
    engine: AnalysisEngine = request.app.state.analysis_engine
    return JSONResponse(content={
        "indicators": [
            {"value": ind, "label": INDICATOR_LABELS.get(ind, ind)} for ind in INDICATORS
        ],
        "pairs": list(engine.default_pairs),
    })
