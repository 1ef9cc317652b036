# File: services/ml_usage_service.py
import logging
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from database.models.ml_models import MLPrediction, ModelUsageStat
from services.errors import MLServiceError

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


class MLUsageService:
    """
    Usage counters and prediction history for the ML proxy.
    Logging here never fails a request: database errors are logged and dropped.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def track(self, endpoint: str, call: Callable[[], Any]) -> Tuple[Any, int]:
        """Runs an upstream call and records its outcome. Returns (result, elapsed_ms)."""
        start = time.monotonic()
        try:
            result = call()
        except MLServiceError:
            self.log_usage(endpoint, False, _elapsed_ms(start))
            raise
        elapsed = _elapsed_ms(start)
        self.log_usage(endpoint, True, elapsed)
        return result, elapsed

    def log_usage(self, endpoint: str, success: bool, response_time_ms: float) -> None:
        with self.session_factory() as db:
            try:
                insert = sqlite.insert if db.get_bind().dialect.name == "sqlite" else postgresql.insert
                stmt = insert(ModelUsageStat).values(
                    model_endpoint=endpoint,
                    request_count=1,
                    success_count=1 if success else 0,
                    error_count=0 if success else 1,
                    avg_response_time=float(response_time_ms),
                )
                previous_avg = func.coalesce(ModelUsageStat.avg_response_time, 0.0)
                stmt = stmt.on_conflict_do_update(
                    index_elements=["model_endpoint"],
                    set_={
                        "request_count": ModelUsageStat.request_count + 1,
                        "success_count": ModelUsageStat.success_count + (1 if success else 0),
                        "error_count": ModelUsageStat.error_count + (0 if success else 1),
                        # Running mean over all requests
                        "avg_response_time": previous_avg
                        + (stmt.excluded.avg_response_time - previous_avg) / (ModelUsageStat.request_count + 1),
                        "last_used": func.now(),
                    }
                )
                db.execute(stmt)
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Failed to log ML usage for {endpoint}: {e}")

    def record_prediction(
        self,
        model_type: str,
        input_data: Dict[str, Any],
        prediction_result: Any,
        processing_time: int,
        confidence_score: Optional[float] = None,
    ) -> None:
        with self.session_factory() as db:
            try:
                db.add(MLPrediction(
                    model_type=model_type,
                    input_data=input_data,
                    prediction_result=prediction_result,
                    confidence_score=confidence_score,
                    processing_time=processing_time,
                ))
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Failed to store {model_type} prediction: {e}")

    def list_predictions(self, limit: int = 50, offset: int = 0, model_type: Optional[str] = None) -> List[Dict]:
        with self.session_factory() as db:
            query = db.query(MLPrediction)
            if model_type:
                query = query.filter(MLPrediction.model_type == model_type)
            rows = (
                query.order_by(MLPrediction.created_at.desc(), MLPrediction.id.desc())
                .limit(limit)
                .offset(offset)
                .all()
            )
            return [r.to_dict() for r in rows]

    def usage_stats(self) -> List[Dict]:
        with self.session_factory() as db:
            rows = db.query(ModelUsageStat).order_by(ModelUsageStat.request_count.desc()).all()
            return [r.to_dict() for r in rows]
