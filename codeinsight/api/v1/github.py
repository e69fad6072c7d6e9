import logging

import httpx
from fastapi import APIRouter
from pydantic import BaseModel, Field

from codeinsight.api.deps import Auth, CurrentUser, DbSession, GitHub
from codeinsight.core.exceptions import NotFoundError, UpstreamError
from codeinsight.domain.repository_operations import repository_ops
from codeinsight.models.repository import RepositoryRead
from codeinsight.models.user import UserRead
from codeinsight.schemas.repository_detail import RepositoryDetail
from codeinsight.schemas.statistics import RepositoryStats
from codeinsight.services import aggregation
from codeinsight.services.github import GitHubAPIError
from codeinsight.services.repository_analysis import RepositoryAnalyzer
from codeinsight.services.sync import RepositorySyncService

router = APIRouter(prefix="/github", tags=["github"])
logger = logging.getLogger(__name__)


class SyncProfileResponse(BaseModel):
    success: bool = True
    user: UserRead


class SkippedRepo(BaseModel):
    name: str
    reason: str


class SyncRepositoriesResponse(BaseModel):
    success: bool = True
    message: str
    repositories: list[RepositoryRead]
    processed: int
    skipped: int = Field(description="Attempted repositories that were not stored")
    total: int = Field(description="Own, non-fork repositories on GitHub")
    skipped_repositories: list[SkippedRepo] = Field(default_factory=list)


class RepositoryListResponse(BaseModel):
    success: bool = True
    repositories: list[RepositoryRead]


class StatsResponse(BaseModel):
    success: bool = True
    stats: RepositoryStats


class RepositoryDetailResponse(BaseModel):
    success: bool = True
    analysis: RepositoryDetail


@router.post("/sync-profile", response_model=SyncProfileResponse)
async def sync_profile(db: DbSession, github: GitHub) -> SyncProfileResponse:
    """Fetch the caller's GitHub profile and store it."""
    try:
        user = await RepositorySyncService(db, github).sync_profile()
    except GitHubAPIError as e:
        logger.error(f"Profile sync failed: {e.message} (status {e.status_code})")
        raise UpstreamError.from_github(e) from None
    except httpx.HTTPError as e:
        logger.error(f"Profile sync could not reach GitHub: {e!r}")
        raise UpstreamError("Failed to sync profile") from None

    return SyncProfileResponse(user=UserRead.model_validate(user))


@router.post("/sync-repositories", response_model=SyncRepositoriesResponse)
async def sync_repositories(
    current_user: CurrentUser,
    db: DbSession,
    github: GitHub,
) -> SyncRepositoriesResponse:
    """
    Sync the caller's own repositories.

    Individual repository failures are reported in the result; only a failed
    repository listing fails the request.
    """
    try:
        result = await RepositorySyncService(db, github).sync_repositories(current_user)
    except GitHubAPIError as e:
        logger.error(f"Repository sync failed: {e.message} (status {e.status_code})")
        raise UpstreamError.from_github(e) from None
    except httpx.HTTPError as e:
        logger.error(f"Repository sync could not reach GitHub: {e!r}")
        raise UpstreamError("Failed to sync repositories") from None

    return SyncRepositoriesResponse(
        message=f"Synced {result.processed} repositories",
        repositories=[RepositoryRead.model_validate(repo) for repo in result.repositories],
        processed=result.processed,
        skipped=result.skipped,
        total=result.total,
        skipped_repositories=[
            SkippedRepo(name=item.name, reason=item.reason) for item in result.skipped_repositories
        ],
    )


@router.get("/repositories", response_model=RepositoryListResponse)
async def list_repositories(current_user: CurrentUser, db: DbSession) -> RepositoryListResponse:
    """Stored repositories, most recently updated on GitHub first."""
    repositories = await repository_ops.list_by_user(db, current_user.id)
    return RepositoryListResponse(
        repositories=[RepositoryRead.model_validate(repo) for repo in repositories]
    )


@router.get("/stats", response_model=StatsResponse)
async def get_stats(current_user: CurrentUser, db: DbSession) -> StatsResponse:
    repositories = await repository_ops.list_by_user(db, current_user.id)
    return StatsResponse(stats=aggregation.repository_stats(repositories))


@router.get("/repository/{repo_id}", response_model=RepositoryDetailResponse)
async def get_repository_detail(
    repo_id: int,
    auth: Auth,
    current_user: CurrentUser,
    db: DbSession,
    github: GitHub,
) -> RepositoryDetailResponse:
    """
    Live analysis of one stored repository.

    Metadata, contributors, branches, releases and the file tree are best
    effort; the commit fetch is required.
    """
    repository = await repository_ops.get_by_github_id(db, current_user.id, repo_id)
    if repository is None:
        raise NotFoundError("Repository")

    try:
        detail = await RepositoryAnalyzer(github).analyze(repository, auth.login)
    except GitHubAPIError as e:
        logger.error(
            f"Repository analysis failed for {repository.full_name}: {e.message} "
            f"(status {e.status_code})"
        )
        raise UpstreamError.from_github(e) from None
    except httpx.HTTPError as e:
        logger.error(f"Repository analysis could not reach GitHub: {e!r}")
        raise UpstreamError("Failed to fetch repository details") from None

    return RepositoryDetailResponse(analysis=detail)
