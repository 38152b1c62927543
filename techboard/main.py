# ==============================================================================
# FILE: main.py
# ==============================================================================
# Main API entry point for the TechBoard technical analysis service

import logging
import threading
from collections import OrderedDict
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from techboard.config import settings
from techboard.models import PanelResponse, PanelStatus, TechnicalSummary
from techboard.modules.indicators import summarize
from techboard.modules.orchestrator import TechnicalAnalysisPanel
from techboard.symbol_normalizer import normalize_symbol, validate_symbol

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="TechBoard Technical Analysis API",
    description="AI-derived technical and fundamental stock analysis",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Panels by symbol, least recently used first; capped at settings.max_panels
panels: "OrderedDict[str, TechnicalAnalysisPanel]" = OrderedDict()
_panels_lock = threading.Lock()


def _get_panel(symbol: str) -> TechnicalAnalysisPanel:
    if not validate_symbol(symbol):
        raise HTTPException(status_code=400, detail=f"Invalid symbol: {symbol!r}")
    symbol = normalize_symbol(symbol)
    with _panels_lock:
        panel = panels.get(symbol)
        if panel is None:
            panel = panels[symbol] = TechnicalAnalysisPanel(symbol)
        else:
            panels.move_to_end(symbol)
        while len(panels) > settings.max_panels:
            evicted, _ = panels.popitem(last=False)
            logger.info(f"Evicted panel for {evicted}")
    return panel


def _respond(panel: TechnicalAnalysisPanel) -> PanelResponse:
    state = panel.snapshot()
    # no key configured: nothing to show, the client has to stop here
    if state.status == PanelStatus.ERROR and state.data is None:
        raise HTTPException(status_code=503, detail=state.error)
    return state


@app.get("/")
async def root():
    return {
        "message": settings.app_name,
        "version": "1.0.0",
        "status": "operational"
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get("/technical/{symbol}", response_model=PanelResponse)
def get_technical(symbol: str):
    """Current panel state; the first request for a symbol runs the fetch"""
    panel = _get_panel(symbol)
    panel.ensure_loaded()
    return _respond(panel)


@app.post("/technical/{symbol}/refresh", response_model=PanelResponse)
def refresh_technical(symbol: str):
    """Re-run the pipeline for a symbol"""
    panel = _get_panel(symbol)
    logger.info(f"Refreshing technical data for {panel.symbol}")
    panel.refresh()
    return _respond(panel)


@app.get("/technical/{symbol}/summary", response_model=TechnicalSummary)
def get_technical_summary(symbol: str):
    """Display-ready values for the current record"""
    panel = _get_panel(symbol)
    panel.ensure_loaded()
    state = _respond(panel)
    if state.data is None:
        raise HTTPException(status_code=404, detail=f"No technical data for {panel.symbol}")
    return summarize(state.data)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
