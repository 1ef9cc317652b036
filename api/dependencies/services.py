# api/dependencies/services.py
import logging
from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from clients.gemini_client import GeminiAnalysisClient
from clients.ml_client import MLApiClient
from database.db import build_engine, make_session_factory
from services.analysis_cache import AnalysisCache
from services.analysis_service import ExperimentAnalysisService
from services.experiment_service import ExperimentRepository
from services.llm_factory import LLMFactory, LLMProvider
from services.ml_usage_service import MLUsageService
from utils.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Process-wide collaborators, built once at startup."""

    engine: Engine
    session_factory: sessionmaker
    experiments: ExperimentRepository
    analysis: ExperimentAnalysisService
    ml_client: MLApiClient
    ml_usage: MLUsageService


def build_container(settings: Settings) -> ServiceContainer:
    engine = build_engine(settings.database_url)
    session_factory = make_session_factory(engine)

    llm = None
    if settings.gemini_api_key:
        llm = LLMFactory.get_client(
            LLMProvider.GEMINI,
            api_key=settings.gemini_api_key,
            base_url=settings.gemini_base_url,
            timeout=settings.gemini_timeout,
            max_retries=0,
        )
    else:
        logger.warning("⚠️ GEMINI_API_KEY is not set. Analysis requests will fail until it is configured.")
    gemini = GeminiAnalysisClient(llm, model=settings.gemini_model)

    experiments = ExperimentRepository(session_factory)
    analysis = ExperimentAnalysisService(
        experiments=experiments,
        client=gemini,
        cache=AnalysisCache(session_factory),
    )

    logger.info(f"🔧 Services ready (model={settings.gemini_model}, ml_api={settings.ml_api_base_url})")

    return ServiceContainer(
        engine=engine,
        session_factory=session_factory,
        experiments=experiments,
        analysis=analysis,
        ml_client=MLApiClient(settings.ml_api_base_url, settings.ml_api_key, timeout=settings.ml_api_timeout),
        ml_usage=MLUsageService(session_factory),
    )


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_analysis_service(request: Request) -> ExperimentAnalysisService:
    return get_container(request).analysis


def get_experiment_repository(request: Request) -> ExperimentRepository:
    return get_container(request).experiments


def get_ml_client(request: Request) -> MLApiClient:
    return get_container(request).ml_client


def get_ml_usage(request: Request) -> MLUsageService:
    return get_container(request).ml_usage
