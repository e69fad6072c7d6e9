from fastapi import APIRouter
from pydantic import BaseModel

from codeinsight.api.deps import CurrentUser, DbSession
from codeinsight.core.exceptions import NotFoundError
from codeinsight.domain.analysis_operations import analysis_ops
from codeinsight.domain.repository_operations import repository_ops
from codeinsight.schemas.analysis import AnalysisPayload
from codeinsight.schemas.insights import (
    CareerInsights,
    CodeQualityInsights,
    DevelopmentPatternInsights,
    LanguageProficiencyInsights,
)
from codeinsight.schemas.statistics import CareerData, DevelopmentPatternStats, LanguageShare
from codeinsight.services.analysis import AnalysisService

router = APIRouter(prefix="/ai", tags=["ai"])


class LanguageAnalysisResult(BaseModel):
    language_stats: list[LanguageShare]
    insights: LanguageProficiencyInsights
    total_languages: int
    dominant_language: str | None


class LanguageAnalysisResponse(BaseModel):
    success: bool = True
    analysis: LanguageAnalysisResult


class PatternAnalysisResult(BaseModel):
    patterns: DevelopmentPatternStats
    insights: DevelopmentPatternInsights


class PatternAnalysisResponse(BaseModel):
    success: bool = True
    analysis: PatternAnalysisResult


class CareerAnalysisResult(BaseModel):
    career_data: CareerData
    insights: CareerInsights


class CareerAnalysisResponse(BaseModel):
    success: bool = True
    analysis: CareerAnalysisResult


class AnalysesResponse(BaseModel):
    success: bool = True
    analyses: list[AnalysisPayload]


class AnalyzedRepository(BaseModel):
    id: int
    name: str
    language: str | None


class CodeQualityResponse(BaseModel):
    success: bool = True
    repository: AnalyzedRepository
    code_quality: CodeQualityInsights


@router.post("/analyze-languages", response_model=LanguageAnalysisResponse)
async def analyze_languages(current_user: CurrentUser, db: DbSession) -> LanguageAnalysisResponse:
    """Aggregate language usage across stored repositories and generate insights."""
    stored = await AnalysisService(db).analyze_languages(current_user)
    return LanguageAnalysisResponse(
        analysis=LanguageAnalysisResult(
            language_stats=stored.data.languages,
            insights=stored.insights,
            total_languages=stored.data.total_languages,
            dominant_language=stored.data.dominant_language,
        )
    )


@router.post("/analyze-patterns", response_model=PatternAnalysisResponse)
async def analyze_patterns(current_user: CurrentUser, db: DbSession) -> PatternAnalysisResponse:
    """Derive commit timing patterns from stored commits and generate insights."""
    stored = await AnalysisService(db).analyze_patterns(current_user)
    return PatternAnalysisResponse(
        analysis=PatternAnalysisResult(patterns=stored.data, insights=stored.insights)
    )


@router.post("/career-insights", response_model=CareerAnalysisResponse)
async def career_insights(current_user: CurrentUser, db: DbSession) -> CareerAnalysisResponse:
    stored = await AnalysisService(db).career_insights(current_user)
    return CareerAnalysisResponse(
        analysis=CareerAnalysisResult(career_data=stored.data, insights=stored.insights)
    )


@router.get("/analyses", response_model=AnalysesResponse)
async def list_analyses(current_user: CurrentUser, db: DbSession) -> AnalysesResponse:
    """All stored analyses for the caller, newest first."""
    analyses = await analysis_ops.list_by_user(db, current_user.id)
    return AnalysesResponse(analyses=analyses)


@router.post("/analyze-code-quality/{repo_id}", response_model=CodeQualityResponse)
async def analyze_code_quality(
    repo_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> CodeQualityResponse:
    """Assess one stored repository. Insight scores use camelCase names."""
    repository = await repository_ops.get_by_github_id(db, current_user.id, repo_id)
    if repository is None:
        raise NotFoundError("Repository")

    stored = await AnalysisService(db).analyze_code_quality(current_user, repository)
    return CodeQualityResponse(
        repository=AnalyzedRepository(
            id=repository.github_repo_id,
            name=repository.name,
            language=repository.language,
        ),
        code_quality=stored.insights,
    )
