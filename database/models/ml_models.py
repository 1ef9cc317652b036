# database/models/ml_models.py
from sqlalchemy import Column, Integer, String, Float, JSON, DateTime, func
from database.db import Base


class ModelUsageStat(Base):
    __tablename__ = "model_usage_stats"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    model_endpoint = Column(String(200), unique=True, index=True, nullable=False)

    request_count = Column(Integer, nullable=False, default=1)
    success_count = Column(Integer, nullable=False, default=0)
    error_count = Column(Integer, nullable=False, default=0)

    # Milliseconds
    avg_response_time = Column(Float, nullable=True)

    last_used = Column(DateTime(timezone=True), server_default=func.now())
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def to_dict(self) -> dict:
        return {
            "model_endpoint": self.model_endpoint,
            "request_count": self.request_count,
            "success_count": self.success_count,
            "error_count": self.error_count,
            "avg_response_time": self.avg_response_time,
            "last_used": self.last_used.isoformat() if self.last_used else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class MLPrediction(Base):
    __tablename__ = "ml_predictions"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    model_type = Column(String(100), index=True, nullable=False)

    input_data = Column(JSON, nullable=False)
    prediction_result = Column(JSON, nullable=False)

    confidence_score = Column(Float, nullable=True)
    processing_time = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "model_type": self.model_type,
            "input_data": self.input_data,
            "prediction_result": self.prediction_result,
            "confidence_score": self.confidence_score,
            "processing_time": self.processing_time,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
