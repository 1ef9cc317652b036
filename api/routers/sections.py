# File: api/routers/sections.py
from fastapi import APIRouter, Depends
from api.dependencies.services import get_analysis_service
from api.models.analysis_models import SectionRequest, SectionResponse
from services.analysis_service import ExperimentAnalysisService
from services.section_parser import SECTIONS, SectionSpec
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


def _section_endpoint(spec: SectionSpec):
    def endpoint(
        payload: SectionRequest,
        service: ExperimentAnalysisService = Depends(get_analysis_service),
    ) -> SectionResponse:
        label, data = service.get_section(
            spec,
            payload.experiment_link,
            payload.experiment_title,
            payload.experiment_authors,
        )
        return SectionResponse(success=True, section=label, data=data)

    endpoint.__name__ = f"get_{spec.slug.replace('-', '_')}"
    endpoint.__doc__ = f"Returns only the {spec.label} section of a fresh analysis."
    return endpoint


for _spec in SECTIONS:
    _endpoint = _section_endpoint(_spec)
    router.add_api_route(
        f"/{_spec.slug}",
        _endpoint,
        methods=["POST"],
        response_model=SectionResponse,
        tags=["Analysis Sections"],
    )
    # Trailing-slash form, served directly
    router.add_api_route(
        f"/{_spec.slug}/",
        _endpoint,
        methods=["POST"],
        response_model=SectionResponse,
        include_in_schema=False,
    )
