"""Typed payloads for the analyses table.

Every Analysis row is read and written through AnalysisPayload, a union
discriminated on `type`. Each variant fixes the schema of both the aggregated
input (`data`) and the generated narrative (`insights`) for its analysis type.
"""

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

from codeinsight.schemas.insights import (
    CareerInsights,
    CodeQualityInsights,
    DevelopmentPatternInsights,
    LanguageProficiencyInsights,
)
from codeinsight.schemas.statistics import (
    CareerData,
    CodeQualityData,
    DevelopmentPatternStats,
    LanguageProficiencyData,
)


class LanguageProficiencyAnalysis(BaseModel):
    type: Literal["language_proficiency"] = "language_proficiency"
    repository_github_id: None = None
    data: LanguageProficiencyData
    insights: LanguageProficiencyInsights
    generated_at: datetime | None = None


class DevelopmentPatternsAnalysis(BaseModel):
    type: Literal["development_patterns"] = "development_patterns"
    repository_github_id: None = None
    data: DevelopmentPatternStats
    insights: DevelopmentPatternInsights
    generated_at: datetime | None = None


class CareerInsightsAnalysis(BaseModel):
    type: Literal["career_insights"] = "career_insights"
    repository_github_id: None = None
    data: CareerData
    insights: CareerInsights
    generated_at: datetime | None = None


class CodeQualityAnalysis(BaseModel):
    type: Literal["code_quality"] = "code_quality"
    repository_github_id: int
    data: CodeQualityData
    insights: CodeQualityInsights
    generated_at: datetime | None = None


AnalysisPayload = Annotated[
    LanguageProficiencyAnalysis
    | DevelopmentPatternsAnalysis
    | CareerInsightsAnalysis
    | CodeQualityAnalysis,
    Field(discriminator="type"),
]

analysis_payload_adapter: TypeAdapter[AnalysisPayload] = TypeAdapter(AnalysisPayload)


def parse_analysis(raw: dict[str, Any]) -> AnalysisPayload:
    """Validate a raw dict into the matching payload variant."""
    return analysis_payload_adapter.validate_python(raw)


def dump_analysis(payload: AnalysisPayload) -> dict[str, Any]:
    """Serialize a payload to JSON-compatible primitives.

    Aliases are applied so code-quality insights keep their camelCase names.
    """
    return analysis_payload_adapter.dump_python(payload, mode="json", by_alias=True)
