# api/models/analysis_models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional


class ExperimentOut(BaseModel):
    id: int
    title: str
    authors: str
    link: str


class AnalysisResult(BaseModel):
    """Persisted and returned shape of one Gemini analysis (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    experiment_title: str = Field("", alias="experimentTitle")
    experiment_authors: str = Field("", alias="experimentAuthors")
    experiment_link: str = Field("", alias="experimentLink")
    analysis: str = Field(..., description="Full unparsed model output")
    sections: Dict[str, str] = Field(default_factory=dict)
    generated_at: str = Field(..., alias="generatedAt", description="ISO-8601 UTC timestamp")
    model: str

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class AnalyzeResponse(BaseModel):
    success: bool = True
    experiment: ExperimentOut
    analysis: AnalysisResult
    cached: bool = False


class SectionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    experiment_link: str = Field("", alias="experimentLink")
    experiment_title: str = Field("", alias="experimentTitle")
    experiment_authors: str = Field("", alias="experimentAuthors")


class SectionResponse(BaseModel):
    success: bool = True
    section: str
    data: Any


class QuickSummaryResponse(BaseModel):
    success: bool
    summary: str
    experiment: Optional[ExperimentOut] = None
