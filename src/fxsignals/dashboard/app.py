"""FastAPI dashboard application factory with Jinja2 templates."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

from fxsignals.dashboard.routes import api, investing, pages

TEMPLATES_DIR = Path(__file__).parent / "templates"


def _format_price(value: Any) -> str:
    """Format Decimal prices without the Decimal('...') wrapper."""
    if value is None:
        return "-"
    if isinstance(value, Decimal):
        return f"{value:f}"
    return str(value)


def _format_number(value: Any) -> str:
    """Format indicator readings: thousands separators, two decimals for small values."""
    if value is None:
        return "-"
    number = float(value)
    if abs(number) >= 1000:
        return f"{number:,.0f}"
    return f"{number:.2f}"


def create_dashboard_app(lifespan: Any = None) -> FastAPI:
    """Create and configure the FastAPI dashboard application.

    Args:
        lifespan: Optional async context manager for application lifespan events.
                  Used by main.py to inject startup/shutdown logic.

    Returns:
        Configured FastAPI application with templates and routes. Services
        (analysis engine, market data) are attached to app.state by the
        lifespan, or directly by tests.
    """
    app = FastAPI(
        title="Forex News Signal Dashboard",
        lifespan=lifespan,
    )

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    templates.env.filters["format_price"] = _format_price
    templates.env.filters["format_number"] = _format_number
    app.state.templates = templates

    # Wired by main.py lifespan
    app.state.analysis_engine = None
    app.state.market_data = None

    app.include_router(pages.router)
    app.include_router(api.router, prefix="/api")
    app.include_router(investing.router, prefix="/api")

    return app
