# File: api/routers/health.py
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from api.dependencies.services import ServiceContainer, get_container
from services.section_parser import SECTIONS
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

API_VERSION = "2.0.0"


@router.get("/health")
async def health_check():
    return {"status": "ok"}


@router.get("/api/health")
def api_health(container: ServiceContainer = Depends(get_container)):
    database = "ok"
    try:
        with container.session_factory() as db:
            db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        database = "unavailable"

    return {
        "status": "OK" if database == "ok" else "DEGRADED",
        "message": "NASA bioscience experiment analysis backend is running",
        "database": database,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": API_VERSION,
    }


@router.get("/api/info")
async def api_info():
    return {
        "name": "NASA Bioscience Experiment Analysis API",
        "version": API_VERSION,
        "endpoints": {
            "experiments": [
                "/api/experiments",
                "/api/experiments/search",
                "/api/experiments/{id}",
                "/api/experiments/{id}/analyze",
                "/api/experiments/{id}/quick-summary",
                "/api/experiments/random/{count}",
                "/api/experiments/scientist/{name}",
            ],
            "analysis": [f"/api/{spec.slug}" for spec in SECTIONS],
            "ml": [
                "/api/ml/models",
                "/api/ml/classify",
                "/api/ml/predict",
                "/api/ml/anomaly-detection",
                "/api/ml/time-series",
                "/api/ml/predictions",
                "/api/ml/usage-stats",
                "/api/ml/health",
            ],
        },
    }
