"""Page routes serving the main dashboard HTML template."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from fxsignals.exceptions import UnknownIndicatorError, UnknownPairError
from fxsignals.signals.engine import AnalysisEngine
from fxsignals.signals.historical import lookup_pattern
from fxsignals.signals.reference import INDICATOR_LABELS, INDICATORS

log = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def dashboard_index(
    request: Request, indicator: str = "NFP", pair: str = "EUR/USD"
) -> HTMLResponse:
    """Main dashboard page. Runs one simulated analysis and renders index.html.

    On failure the page renders with ``error`` set so the template can show a
    "could not load data" message and a retry link.
    """
    templates: Jinja2Templates = request.app.state.templates
    engine: AnalysisEngine = request.app.state.analysis_engine
    indicator = indicator.strip().upper()

    report = None
    error = None
    try:
        report = engine.analyze(indicator)
    except (UnknownIndicatorError, UnknownPairError) as e:
        error = str(e)
    except Exception as e:
        log.error("dashboard_render_error", indicator=indicator, error=str(e), exc_info=True)
        error = "Could not load analysis data"

    selected = None
    if report is not None:
        selected = next(
            (a for a in report.pair_analyses if a.pair == pair),
            report.pair_analyses[0] if report.pair_analyses else None,
        )

    context = {
        "request": request,
        "indicators": [(ind, INDICATOR_LABELS.get(ind, ind)) for ind in INDICATORS],
        "selected_indicator": indicator,
        "selected_pair": selected.pair if selected else pair,
        "report": report,
        "selected": selected,
        "pattern": lookup_pattern(indicator),
        "error": error,
    }

    return templates.TemplateResponse(request, "index.html", context)
