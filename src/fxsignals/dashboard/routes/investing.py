"""Investing.com data endpoints: cached reads (GET) and forced refresh (POST).

Response envelope:
    {"success": true, "data": ..., "count": n, "cacheAge": s, "timestamp": iso}
    {"success": false, "error": msg[, "details": str]}  with 400/404/500
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from fxsignals.market_data.service import (
    CALENDAR_KEY,
    MarketDataService,
    forex_key,
    indicator_key,
    multiple_forex_key,
)
from fxsignals.signals.reference import BASE_PAIRS, INDICATOR_BASELINES

log = structlog.get_logger(__name__)

router = APIRouter()

DEFAULT_MONTHS = 12


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _error(message: str, status_code: int, details: str | None = None) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(content=content, status_code=status_code)


def _parse_pairs(raw: Any) -> list[str]:
    """Accept a comma-separated string or a JSON list; default to the base pairs."""
    if not raw:
        return list(BASE_PAIRS)
    if isinstance(raw, str):
        raw = raw.split(",")
    return [str(p).strip() for p in raw if str(p).strip()]


def _parse_months(raw: Any) -> int:
    """Parse the months parameter.

    Raises:
        ValueError: If the value is not a positive integer.
    """
    if raw is None or raw == "":
        return DEFAULT_MONTHS
    months = int(raw)
    if months <= 0:
        raise ValueError(f"months must be positive, got {months}")
    return months


def _success(
    market_data: MarketDataService, key: str, data: Any, **extra: Any
) -> JSONResponse:
    """Build the success envelope.

    ``cacheAge`` is the age in seconds of the cached payload (0 right after a
    scrape), or null when the scrape failed and nothing was cached.
    """
    age = market_data.cache_age(key)
    content: dict[str, Any] = {"success": True, "data": data}
    if isinstance(data, list):
        content["count"] = len(data)
    content.update(extra)
    content["cacheAge"] = round(age, 3) if age is not None else None
    content["timestamp"] = _timestamp()
    return JSONResponse(content=content)


async def _dispatch(
    market_data: MarketDataService,
    kind: str,
    params: dict[str, Any],
    force: bool,
) -> JSONResponse:
    """Serve one request type; shared by GET (cached) and POST (forced)."""
    if kind == "calendar":
        events = await market_data.get_calendar(force=force) or []
        return _success(market_data, CALENDAR_KEY, [e.to_dict() for e in events])

    if kind == "forex":
        pair = params.get("pair")
        if not pair:
            return _error("Currency pair not specified", 400)
        quote = await market_data.get_forex_quote(pair, force=force)
        if quote is None:
            return _error(f"No data found for {pair}", 404)
        return _success(market_data, forex_key(pair), quote.to_dict())

    if kind == "multiple-forex":
        pairs = _parse_pairs(params.get("pairs"))
        quotes = await market_data.get_multiple_quotes(pairs, force=force) or []
        return _success(
            market_data, multiple_forex_key(pairs), [q.to_dict() for q in quotes]
        )

    if kind == "indicator":
        indicator = params.get("indicator")
        if not indicator:
            return _error("Indicator not specified", 400)
        indicator = str(indicator).strip().upper()
        if indicator not in INDICATOR_BASELINES:
            return _error(f"Unknown indicator: {indicator}", 404)
        try:
            months = _parse_months(params.get("months"))
        except (TypeError, ValueError) as e:
            return _error("Invalid months parameter", 400, details=str(e))
        events = await market_data.get_indicator_history(indicator, months, force=force) or []
        return _success(
            market_data,
            indicator_key(indicator, months),
            [e.to_dict() for e in events],
            indicator=indicator,
            months=months,
        )

    return _error("Invalid request type", 400)


@router.get("/investing")
async def get_investing(
    request: Request,
    type: str = "calendar",
    pair: str | None = None,
    pairs: str | None = None,
    indicator: str | None = None,
    months: str | None = None,
) -> JSONResponse:
    """Cached investing.com data by request type.

    Query params:
        type: calendar | forex | multiple-forex | indicator (default calendar).
        pair: Pair id for type=forex.
        pairs: Comma-separated pair ids for type=multiple-forex.
        indicator: Indicator id for type=indicator.
        months: History depth for type=indicator (default 12).
    """
    market_data: MarketDataService = request.app.state.market_data
    params = {"pair": pair, "pairs": pairs, "indicator": indicator, "months": months}
    try:
        return await _dispatch(market_data, type, params, force=False)
    except Exception as e:
        log.error("investing_api_error", type=type, error=str(e), exc_info=True)
        return _error("Failed to fetch investing.com data", 500, details=str(e))


@router.post("/investing")
async def refresh_investing(request: Request) -> JSONResponse:
    """Force a cache refresh for one request type.

    Expects JSON body with ``type`` and the same optional fields as GET
    (``pair``, ``pairs``, ``indicator``, ``months``).
    """
    try:
        body = await request.json()
    except Exception:
        return _error("Invalid JSON body", 400)
    if not isinstance(body, dict):
        return _error("Invalid JSON body", 400)

    kind = body.get("type", "")
    market_data: MarketDataService = request.app.state.market_data
    try:
        response = await _dispatch(market_data, kind, body, force=True)
    except Exception as e:
        log.error("investing_refresh_error", type=kind, error=str(e), exc_info=True)
        return _error("Failed to refresh cache", 500, details=str(e))

    if response.status_code == 200:
        log.info("investing_cache_refreshed", type=kind)
    return response
