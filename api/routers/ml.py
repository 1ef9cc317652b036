# File: api/routers/ml.py
import logging
import time

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from api.dependencies.services import get_ml_client, get_ml_usage
from api.errors import error_response
from api.models.ml_models import (
    AnomalyDetectionRequest,
    ClassifyRequest,
    PredictRequest,
    TimeSeriesRequest,
)
from clients.ml_client import MLApiClient
from services.errors import BadRequestError, MLServiceError
from services.ml_usage_service import MLUsageService

router = APIRouter()
logger = logging.getLogger(__name__)


def _confidence(result, key: str):
    if isinstance(result, dict):
        value = result.get(key)
        if isinstance(value, (int, float)):
            return float(value)
    return None


@router.get("/models")
def list_models(
    ml: MLApiClient = Depends(get_ml_client),
    usage: MLUsageService = Depends(get_ml_usage),
):
    try:
        models, _ = usage.track("/models", lambda: ml.get("/models"))
    except MLServiceError as e:
        return error_response(500, "Failed to fetch available models", details=str(e))

    return {"success": True, "data": models, "message": "Available ML models retrieved successfully"}


@router.post("/classify")
def classify(
    payload: ClassifyRequest,
    ml: MLApiClient = Depends(get_ml_client),
    usage: MLUsageService = Depends(get_ml_usage),
):
    if not payload.data_type or payload.input_data is None:
        raise BadRequestError("data_type and input_data are required")

    body = {
        "data_type": payload.data_type,
        "input_data": payload.input_data,
        "model_version": payload.model_version,
    }
    try:
        result, elapsed = usage.track("/classify", lambda: ml.post("/classify", body))
    except MLServiceError as e:
        return error_response(500, "Classification failed", details=str(e))

    usage.record_prediction(
        "classification",
        payload.input_data,
        result,
        processing_time=elapsed,
        confidence_score=_confidence(result, "confidence"),
    )
    return {"success": True, "data": result, "processing_time": elapsed}


@router.post("/predict")
def predict(
    payload: PredictRequest,
    ml: MLApiClient = Depends(get_ml_client),
    usage: MLUsageService = Depends(get_ml_usage),
):
    if not payload.prediction_type or not payload.historical_data:
        raise BadRequestError("prediction_type and historical_data are required")

    body = {
        "prediction_type": payload.prediction_type,
        "historical_data": payload.historical_data,
        "prediction_horizon": payload.prediction_horizon or 30,
        "parameters": payload.parameters,
    }
    try:
        result, elapsed = usage.track("/predict", lambda: ml.post("/predict", body))
    except MLServiceError as e:
        return error_response(500, "Predictive analysis failed", details=str(e))

    usage.record_prediction(
        "predictive_analysis",
        {"prediction_type": payload.prediction_type, "data_points": len(payload.historical_data)},
        result,
        processing_time=elapsed,
        confidence_score=_confidence(result, "model_confidence"),
    )
    return {"success": True, "data": result, "processing_time": elapsed}


@router.post("/anomaly-detection")
def anomaly_detection(
    payload: AnomalyDetectionRequest,
    ml: MLApiClient = Depends(get_ml_client),
    usage: MLUsageService = Depends(get_ml_usage),
):
    if not isinstance(payload.dataset, list):
        raise BadRequestError("dataset must be an array of data points")

    body = {
        "dataset": payload.dataset,
        "sensitivity": payload.sensitivity,
        "algorithm": payload.algorithm,
    }
    try:
        result, elapsed = usage.track("/anomaly-detection", lambda: ml.post("/anomaly-detection", body))
    except MLServiceError as e:
        return error_response(500, "Anomaly detection failed", details=str(e))

    usage.record_prediction(
        "anomaly_detection",
        {"data_points": len(payload.dataset), "algorithm": payload.algorithm},
        result,
        processing_time=elapsed,
    )
    return {"success": True, "data": result, "processing_time": elapsed}


@router.post("/time-series")
def time_series(
    payload: TimeSeriesRequest,
    ml: MLApiClient = Depends(get_ml_client),
    usage: MLUsageService = Depends(get_ml_usage),
):
    if not isinstance(payload.time_series_data, list):
        raise BadRequestError("time_series_data must be an array")

    body = {
        "time_series_data": payload.time_series_data,
        "analysis_type": payload.analysis_type,
        "forecast_steps": payload.forecast_steps,
    }
    try:
        result, elapsed = usage.track("/time-series", lambda: ml.post("/time-series", body))
    except MLServiceError as e:
        return error_response(500, "Time series analysis failed", details=str(e))

    usage.record_prediction(
        "time_series_analysis",
        {"data_points": len(payload.time_series_data), "analysis_type": payload.analysis_type},
        result,
        processing_time=elapsed,
    )
    return {"success": True, "data": result, "processing_time": elapsed}


@router.get("/predictions")
def prediction_history(
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    model_type: str = Query(None),
    usage: MLUsageService = Depends(get_ml_usage),
):
    rows = usage.list_predictions(limit=limit, offset=offset, model_type=model_type)
    return {"success": True, "data": rows, "total": len(rows), "limit": limit, "offset": offset}


@router.get("/usage-stats")
def usage_stats(usage: MLUsageService = Depends(get_ml_usage)):
    return {"success": True, "data": usage.usage_stats()}


@router.get("/health")
def ml_health(ml: MLApiClient = Depends(get_ml_client)):
    start = time.monotonic()
    try:
        ml.get("/health")
    except MLServiceError as e:
        logger.warning(f"ML API health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={"success": False, "error": "ML API is unavailable", "details": str(e), "api_url": ml.base_url},
        )

    return {
        "success": True,
        "message": "ML API is healthy",
        "response_time": int((time.monotonic() - start) * 1000),
        "api_url": ml.base_url,
    }
