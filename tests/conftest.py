# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from api.dependencies.services import ServiceContainer
from api.main import create_app
from database.db import build_engine, init_db, make_session_factory
from database.models.experiment_model import Experiment
from services.analysis_cache import AnalysisCache
from services.analysis_service import ExperimentAnalysisService
from services.errors import MLServiceError
from services.experiment_service import ExperimentRepository
from services.ml_usage_service import MLUsageService


FULL_ANALYSIS = """## EXECUTIVE SUMMARY
Spaceflight reduced bone density in mice.

---

## EXPERIMENT DETAILS
### Methodology
- Micro-CT scans

## KEY FINDINGS
1. **Bone loss**: 12% reduction.

## KNOWLEDGE GRAPH
```json
{"nodes": [{"id": "microg", "label": "Microgravity", "type": "Condition"},
           {"id": "bone", "label": "Bone density", "type": "Phenotype"}],
 "edges": [{"source": "microg", "target": "bone", "relationship": "REDUCES"}],
 "summary": "Microgravity reduces bone density."}
```
"""


class FakeGeminiClient:
    def __init__(self, text: str = FULL_ANALYSIS, model: str = "gemini-test", error: Exception = None):
        self.text = text
        self.model = model
        self.error = error
        self.calls = []

    def analyze_experiment(self, link, title, authors):
        self.calls.append((link, title, authors))
        if self.error:
            raise self.error
        return self.text

    def quick_summary(self, title, authors):
        if self.error:
            raise self.error
        return f"A short summary of {title}."


class FakeMLClient:
    def __init__(self, responses=None, fail: bool = False):
        self.base_url = "http://ml.test"
        self.responses = responses or {}
        self.fail = fail
        self.requests = []

    def get(self, endpoint):
        return self._answer(endpoint, None)

    def post(self, endpoint, payload):
        return self._answer(endpoint, payload)

    def _answer(self, endpoint, payload):
        self.requests.append((endpoint, payload))
        if self.fail:
            raise MLServiceError("model server down")
        return self.responses.get(endpoint, {"ok": True})


@pytest.fixture
def engine():
    engine = build_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def seed_experiments(session_factory):
    def _seed(*rows):
        with session_factory() as db:
            for row in rows:
                db.add(Experiment(**row))
            db.commit()
    return _seed


@pytest.fixture
def gemini():
    return FakeGeminiClient()


@pytest.fixture
def ml_client():
    return FakeMLClient()


@pytest.fixture
def container(engine, session_factory, gemini, ml_client):
    experiments = ExperimentRepository(session_factory)
    return ServiceContainer(
        engine=engine,
        session_factory=session_factory,
        experiments=experiments,
        analysis=ExperimentAnalysisService(experiments, gemini, AnalysisCache(session_factory)),
        ml_client=ml_client,
        ml_usage=MLUsageService(session_factory),
    )


@pytest.fixture
def client(container):
    with TestClient(create_app(container)) as c:
        yield c
