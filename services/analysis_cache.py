# services/analysis_cache.py
import logging
from typing import Optional

from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from api.models.analysis_models import AnalysisResult
from database.models.analysis_model import ExperimentAnalysis
from services.errors import CacheWriteError

logger = logging.getLogger(__name__)


def _insert_for(db: Session):
    if db.get_bind().dialect.name == "sqlite":
        return sqlite.insert
    return postgresql.insert


class AnalysisCache:
    """
    experiment_analyses table, one row per experiment.

    Writes are insert-or-replace. The store is best effort: failures come
    back as a CacheWriteError value for the caller to log, and a failed read
    behaves like a miss.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def get(self, experiment_id: int) -> Optional[AnalysisResult]:
        with self.session_factory() as db:
            try:
                row = db.query(ExperimentAnalysis).filter(
                    ExperimentAnalysis.experiment_id == experiment_id
                ).first()
            except SQLAlchemyError as e:
                logger.warning(f"⚠️ Analysis cache read failed for experiment {experiment_id}: {e}")
                return None

            if not row:
                return None

            try:
                return AnalysisResult.model_validate(row.analysis_data)
            except ValidationError:
                logger.warning(f"⚠️ Discarding malformed cached analysis for experiment {experiment_id}")
                return None

    def put(self, experiment_id: int, result: AnalysisResult) -> Optional[CacheWriteError]:
        document = result.to_document()

        with self.session_factory() as db:
            try:
                insert = _insert_for(db)
                stmt = insert(ExperimentAnalysis).values(
                    experiment_id=experiment_id,
                    analysis_data=document,
                ).on_conflict_do_update(
                    index_elements=["experiment_id"],
                    set_={
                        "analysis_data": document,
                        "updated_at": func.now(),
                    }
                )
                db.execute(stmt)
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                return CacheWriteError(experiment_id, str(e))

        return None
