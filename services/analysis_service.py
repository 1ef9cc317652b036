# File: services/analysis_service.py

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from api.models.analysis_models import AnalysisResult
from services.analysis_cache import AnalysisCache
from services.errors import (
    NotFoundError,
    SectionNotFoundError,
    UpstreamError,
    UpstreamEmptyResponseError,
)
from services.experiment_service import ExperimentRepository
from services.knowledge_graph import extract_knowledge_graph
from services.section_parser import SectionSpec, parse_sections

logger = logging.getLogger(__name__)


class AnalysisClient(Protocol):
    model: str

    def analyze_experiment(self, link: str, title: str, authors: str) -> str:
        ...

    def quick_summary(self, title: str, authors: str) -> str:
        ...


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class AnalysisOutcome:
    experiment: Dict[str, Any]
    result: AnalysisResult
    cached: bool = False


class ExperimentAnalysisService:
    """
    Runs the Gemini analysis pipeline for catalog experiments:
    experiment lookup -> cache read -> Gemini -> section parsing -> cache write.
    """

    def __init__(
        self,
        experiments: ExperimentRepository,
        client: AnalysisClient,
        cache: AnalysisCache,
        parser: Callable[[str], Dict[str, str]] = parse_sections,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.experiments = experiments
        self.client = client
        self.cache = cache
        self.parser = parser
        self.clock = clock

    # ============================================================
    #  Analysis
    # ============================================================

    def analyze(self, experiment_id: int, refresh: bool = False) -> AnalysisOutcome:
        experiment = self.experiments.get(experiment_id)
        if experiment is None:
            raise NotFoundError("Experiment not found")

        if not refresh:
            cached = self.cache.get(experiment_id)
            if cached is not None:
                logger.info(f"📦 Serving cached analysis for experiment {experiment_id}")
                return AnalysisOutcome(experiment=experiment, result=cached, cached=True)

        logger.info(f"🔬 Analyzing experiment: {experiment['title']}")
        result = self.analyze_publication(
            experiment["link"],
            experiment["title"],
            experiment["authors"],
        )

        error = self.cache.put(experiment_id, result)
        if error is not None:
            logger.warning(f"⚠️ {error}. Returning uncached analysis.")

        return AnalysisOutcome(experiment=experiment, result=result, cached=False)

    def analyze_publication(self, link: str, title: str, authors: str) -> AnalysisResult:
        """Uncached pipeline for a publication given by its metadata."""
        raw_text = self.client.analyze_experiment(link, title, authors)

        return AnalysisResult(
            success=True,
            experiment_title=title or "",
            experiment_authors=authors or "",
            experiment_link=link or "",
            analysis=raw_text,
            sections=self.parser(raw_text),
            generated_at=self.clock().isoformat(),
            model=self.client.model,
        )

    def get_section(self, spec: SectionSpec, link: str, title: str, authors: str) -> Tuple[str, Any]:
        result = self.analyze_publication(link, title, authors)

        if spec.key not in result.sections:
            raise SectionNotFoundError(spec.display_name)

        text = result.sections[spec.key]
        if spec.key == "knowledgeGraph":
            graph = extract_knowledge_graph(text)
            if graph is not None:
                return spec.label, graph
        return spec.label, text

    # ============================================================
    #  Quick summary
    # ============================================================

    def quick_summary(self, experiment_id: int) -> Dict[str, Any]:
        experiment = self.experiments.get(experiment_id)
        if experiment is None:
            raise NotFoundError("Experiment not found")

        try:
            summary = self.client.quick_summary(experiment["title"], experiment["authors"])
        except (UpstreamError, UpstreamEmptyResponseError) as e:
            logger.error(f"Error generating quick summary: {e}")
            return {"success": False, "summary": "Summary generation failed", "experiment": experiment}

        return {"success": True, "summary": summary, "experiment": experiment}
