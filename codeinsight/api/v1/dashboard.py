"""
Dashboard reads.

Everything here is computed from stored data and stored analyses; nothing
calls GitHub or the LLM. Overview degrades to a needs-sync stub for a caller
whose profile has not been synced yet; the other views require the profile.
"""

from datetime import datetime
from typing import cast

from fastapi import APIRouter
from pydantic import BaseModel, Field

from codeinsight.api.deps import Auth, CurrentUser, DbSession
from codeinsight.domain.analysis_operations import analysis_ops
from codeinsight.domain.repository_operations import repository_ops
from codeinsight.domain.user_operations import user_ops
from codeinsight.models.analysis import AnalysisType
from codeinsight.schemas.analysis import (
    CareerInsightsAnalysis,
    DevelopmentPatternsAnalysis,
    LanguageProficiencyAnalysis,
)
from codeinsight.schemas.insights import (
    CareerInsights,
    DevelopmentPatternInsights,
    LanguageProficiencyInsights,
)
from codeinsight.schemas.statistics import (
    CareerData,
    DevelopmentPatternStats,
    LanguageShare,
    OverviewStats,
    RecentCommit,
    TimelineDay,
    TopRepository,
)
from codeinsight.services import aggregation

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


class OverviewUser(BaseModel):
    github_id: int
    login: str
    name: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    location: str | None = None
    company: str | None = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    created_at: datetime | None = None
    needs_sync: bool = False


class Overview(BaseModel):
    user: OverviewUser
    stats: OverviewStats
    top_repositories: list[TopRepository] = Field(default_factory=list)
    language_distribution: list[LanguageShare] = Field(default_factory=list)
    recent_activity: list[RecentCommit] = Field(default_factory=list)


class OverviewResponse(BaseModel):
    success: bool = True
    overview: Overview


class RepositoryLanguages(BaseModel):
    name: str
    language: str | None
    languages: dict[str, int]
    size: int


class LanguageData(BaseModel):
    distribution: list[LanguageShare]
    repositories: list[RepositoryLanguages]
    analysis: LanguageProficiencyInsights | None = None
    last_analyzed: datetime | None = None


class LanguageDataResponse(BaseModel):
    success: bool = True
    language_data: LanguageData


class PatternData(BaseModel):
    timeline: list[TimelineDay]
    heatmap: list[list[int]] = Field(description="7 rows (Sunday = 0) by 24 hours")
    analysis: DevelopmentPatternInsights | None = None
    patterns: DevelopmentPatternStats | None = None
    last_analyzed: datetime | None = None


class PatternDataResponse(BaseModel):
    success: bool = True
    pattern_data: PatternData


class CareerView(BaseModel):
    insights: CareerInsights | None = None
    profile_data: CareerData | None = None
    last_analyzed: datetime | None = None
    has_analysis: bool = False


class CareerViewResponse(BaseModel):
    success: bool = True
    career_data: CareerView


@router.get("/overview", response_model=OverviewResponse)
async def get_overview(auth: Auth, db: DbSession) -> OverviewResponse:
    user = await user_ops.get_by_github_id(db, auth.github_id)
    if user is None:
        return OverviewResponse(
            overview=Overview(
                user=OverviewUser(github_id=auth.github_id, login=auth.login, needs_sync=True),
                stats=OverviewStats(),
            )
        )

    repositories = await repository_ops.list_by_user(db, user.id)
    analyses = await analysis_ops.list_by_user(db, user.id)

    return OverviewResponse(
        overview=Overview(
            user=OverviewUser(
                github_id=user.github_id,
                login=user.login,
                name=user.name,
                avatar_url=user.avatar_url,
                bio=user.bio,
                location=user.location,
                company=user.company,
                public_repos=user.public_repos,
                followers=user.followers,
                following=user.following,
                created_at=user.github_created_at,
            ),
            stats=aggregation.overview_stats(user, repositories, len(analyses)),
            top_repositories=aggregation.top_repositories(repositories),
            language_distribution=aggregation.language_distribution(repositories),
            recent_activity=aggregation.recent_activity(repositories),
        )
    )


@router.get("/languages", response_model=LanguageDataResponse)
async def get_languages(current_user: CurrentUser, db: DbSession) -> LanguageDataResponse:
    repositories = await repository_ops.list_by_user(db, current_user.id)
    stored = cast(
        LanguageProficiencyAnalysis | None,
        await analysis_ops.get_payload(db, current_user.id, AnalysisType.LANGUAGE_PROFICIENCY),
    )

    return LanguageDataResponse(
        language_data=LanguageData(
            distribution=aggregation.language_distribution(repositories),
            repositories=[
                RepositoryLanguages(
                    name=repo.name,
                    language=repo.language,
                    languages=dict(repo.languages or {}),
                    size=repo.size,
                )
                for repo in repositories
            ],
            analysis=stored.insights if stored else None,
            last_analyzed=stored.generated_at if stored else None,
        )
    )


@router.get("/patterns", response_model=PatternDataResponse)
async def get_patterns(current_user: CurrentUser, db: DbSession) -> PatternDataResponse:
    repositories = await repository_ops.list_by_user(db, current_user.id)
    stored = cast(
        DevelopmentPatternsAnalysis | None,
        await analysis_ops.get_payload(db, current_user.id, AnalysisType.DEVELOPMENT_PATTERNS),
    )

    return PatternDataResponse(
        pattern_data=PatternData(
            timeline=aggregation.activity_timeline(repositories),
            heatmap=aggregation.commit_heatmap(repositories),
            analysis=stored.insights if stored else None,
            patterns=stored.data if stored else None,
            last_analyzed=stored.generated_at if stored else None,
        )
    )


@router.get("/career", response_model=CareerViewResponse)
async def get_career(current_user: CurrentUser, db: DbSession) -> CareerViewResponse:
    stored = cast(
        CareerInsightsAnalysis | None,
        await analysis_ops.get_payload(db, current_user.id, AnalysisType.CAREER_INSIGHTS),
    )

    return CareerViewResponse(
        career_data=CareerView(
            insights=stored.insights if stored else None,
            profile_data=stored.data if stored else None,
            last_analyzed=stored.generated_at if stored else None,
            has_analysis=stored is not None,
        )
    )
