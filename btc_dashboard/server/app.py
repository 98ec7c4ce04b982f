from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import math

from btc_dashboard.server.state import AggregateState


def clean_nans(obj):
    """Recursively replace NaN/Inf with None for JSON compliance"""
    if isinstance(obj, float):
        if math.isnan(obj) or math.isinf(obj):
            return None
    elif isinstance(obj, dict):
        return {k: clean_nans(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [clean_nans(i) for i in obj]
    return obj


def create_app(state: AggregateState, refresh_interval_ms: int) -> FastAPI:
    """
    Read-only status API over one AggregateState.

    The app never writes the state; it serves whatever the last completed
    cycle left there.
    """
    app = FastAPI(title="Bitcoin Dashboard")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/api/info")
    async def get_info():
        return {
            "service": "btc-dashboard",
            "refresh_interval_ms": refresh_interval_ms,
        }

    @app.get("/api/status")
    async def get_status():
        return clean_nans(state.view().to_dict())

    return app
