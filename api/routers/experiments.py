# File: api/routers/experiments.py
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from api.dependencies.services import get_analysis_service, get_experiment_repository
from api.models.analysis_models import AnalyzeResponse, QuickSummaryResponse
from services.analysis_service import ExperimentAnalysisService
from services.errors import BadRequestError, NotFoundError
from services.experiment_service import ExperimentRepository
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


class SearchRequest(BaseModel):
    query: str = ""


@router.post("/search")
def search_experiments(
    payload: SearchRequest,
    repo: ExperimentRepository = Depends(get_experiment_repository),
):
    term = payload.query.strip()
    if not term:
        raise BadRequestError("Search query is required")

    results = repo.search(term)
    body = {"success": True, "results": results, "query": term, "count": len(results)}
    if not results:
        body["message"] = "No experiments found matching your search"
    return body


@router.get("/random/{count}")
def random_experiments(count: int, repo: ExperimentRepository = Depends(get_experiment_repository)):
    experiments = repo.random(count)
    return {"success": True, "experiments": experiments, "count": len(experiments)}


@router.get("/scientist/{name}")
def experiments_by_scientist(name: str, repo: ExperimentRepository = Depends(get_experiment_repository)):
    experiments = repo.by_scientist(name)
    return {"success": True, "scientist": name, "experiments": experiments, "count": len(experiments)}


@router.get("/")
def list_experiments(
    page: int = Query(1),
    limit: int = Query(20),
    repo: ExperimentRepository = Depends(get_experiment_repository),
):
    data = repo.list_page(page, limit)
    return {"success": True, **data}


@router.get("/{experiment_id}")
def get_experiment(experiment_id: int, repo: ExperimentRepository = Depends(get_experiment_repository)):
    experiment = repo.get(experiment_id)
    if experiment is None:
        raise NotFoundError("Experiment not found")
    return {"success": True, "experiment": experiment}


@router.post("/{experiment_id}/analyze", response_model=AnalyzeResponse, response_model_by_alias=True)
def analyze_experiment(
    experiment_id: int,
    refresh: bool = Query(False, description="Regenerate even when a cached analysis exists"),
    service: ExperimentAnalysisService = Depends(get_analysis_service),
) -> AnalyzeResponse:
    outcome = service.analyze(experiment_id, refresh=refresh)
    return AnalyzeResponse(
        success=True,
        experiment=outcome.experiment,
        analysis=outcome.result,
        cached=outcome.cached,
    )


@router.post("/{experiment_id}/quick-summary", response_model=QuickSummaryResponse)
def quick_summary(
    experiment_id: int,
    service: ExperimentAnalysisService = Depends(get_analysis_service),
) -> QuickSummaryResponse:
    return QuickSummaryResponse(**service.quick_summary(experiment_id))
