# File: services/experiment_service.py
import logging
import math
from typing import Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import sessionmaker

from database.models.experiment_model import Experiment

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 20
MAX_SEARCH_RESULTS = 50
MAX_RANDOM = 20


class ExperimentRepository:
    """Read access to the experiment catalog."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def get(self, experiment_id: int) -> Optional[Dict]:
        with self.session_factory() as db:
            row = db.query(Experiment).filter(Experiment.id == experiment_id).first()
            return row.to_dict() if row else None

    def list_page(self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> Dict:
        page = max(page or 1, 1)
        limit = min(limit if limit and limit > 0 else DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE)
        offset = (page - 1) * limit

        with self.session_factory() as db:
            total_count = db.query(func.count(Experiment.id)).scalar() or 0
            rows = (
                db.query(Experiment)
                .order_by(Experiment.title.asc())
                .limit(limit)
                .offset(offset)
                .all()
            )

        return {
            "experiments": [r.to_dict() for r in rows],
            "pagination": {
                "page": page,
                "limit": limit,
                "totalCount": total_count,
                "totalPages": math.ceil(total_count / limit) if total_count else 0,
                "hasMore": offset + limit < total_count,
            },
        }

    def search(self, term: str) -> List[Dict]:
        pattern = f"%{term}%"

        with self.session_factory() as db:
            substring_match = or_(Experiment.title.ilike(pattern), Experiment.authors.ilike(pattern))

            if db.get_bind().dialect.name == "postgresql":
                document = func.to_tsvector("english", Experiment.title + " " + Experiment.authors)
                tsquery = func.plainto_tsquery("english", term)
                rank = func.ts_rank(document, tsquery)
                rows = (
                    db.query(Experiment)
                    .filter(or_(document.op("@@")(tsquery), substring_match))
                    .order_by(rank.desc(), Experiment.title.asc())
                    .limit(MAX_SEARCH_RESULTS)
                    .all()
                )
            else:
                rows = (
                    db.query(Experiment)
                    .filter(substring_match)
                    .order_by(Experiment.title.asc())
                    .limit(MAX_SEARCH_RESULTS)
                    .all()
                )

            return [r.to_dict() for r in rows]

    def random(self, count: int = 5) -> List[Dict]:
        count = min(count if count and count > 0 else 5, MAX_RANDOM)
        with self.session_factory() as db:
            rows = db.query(Experiment).order_by(func.random()).limit(count).all()
            return [r.to_dict() for r in rows]

    def by_scientist(self, name: str) -> List[Dict]:
        with self.session_factory() as db:
            rows = (
                db.query(Experiment)
                .filter(Experiment.authors.ilike(f"%{name}%"))
                .order_by(Experiment.title.asc())
                .all()
            )
            return [r.to_dict() for r in rows]
