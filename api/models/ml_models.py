# api/models/ml_models.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class ClassifyRequest(BaseModel):
    data_type: Optional[str] = None
    input_data: Optional[Any] = None
    model_version: str = "latest"


class PredictRequest(BaseModel):
    prediction_type: Optional[str] = None
    historical_data: Optional[List[Any]] = None
    prediction_horizon: Optional[int] = None
    parameters: Dict[str, Any] = Field(default_factory=dict)


class AnomalyDetectionRequest(BaseModel):
    dataset: Optional[Any] = None
    sensitivity: str = "medium"
    algorithm: str = "isolation_forest"


class TimeSeriesRequest(BaseModel):
    time_series_data: Optional[Any] = None
    analysis_type: str = "forecast"
    forecast_steps: int = 10
