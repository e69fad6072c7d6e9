"""
Profile and repository sync from GitHub.

Repository sync lists the user's own repositories once, then walks at most
MAX_SYNC_REPOSITORIES of them strictly in order, one repository at a time.
A repository over the size cap is skipped without any further call; a GitHub
or network failure on one repository is logged and skipped while the rest
continue. Each repository is stored in its own savepoint, so a storage
failure rolls back only that repository. Listing failures abort the sync.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from codeinsight.domain.repository_operations import repository_ops
from codeinsight.domain.user_operations import user_ops
from codeinsight.models.repository import MAX_STORED_COMMITS, Repository
from codeinsight.models.user import User
from codeinsight.schemas.commit import (
    MAX_MESSAGE_LENGTH,
    CommitAuthor,
    CommitStats,
    CommitSummary,
)
from codeinsight.services.github import GitHubAPIError, GitHubReadOperations
from codeinsight.services.github.constants import (
    MAX_REPOSITORY_SIZE_KB,
    MAX_SYNC_REPOSITORIES,
    SYNC_COMMITS_PER_PAGE,
)
from codeinsight.services.github.types import GitHubCommit, GitHubRepo

logger = logging.getLogger(__name__)


@dataclass
class SkippedRepository:
    name: str
    reason: str


@dataclass
class SyncResult:
    """Outcome of one repository sync."""

    repositories: list[Repository]
    attempted: int  # min(candidates, MAX_SYNC_REPOSITORIES)
    total: int  # candidates after fork/owner filtering
    skipped_repositories: list[SkippedRepository] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.repositories)

    @property
    def skipped(self) -> int:
        return self.attempted - self.processed


def select_candidates(repos: list[GitHubRepo], login: str) -> list[GitHubRepo]:
    """Keep repositories the user created: not forks, owned by this login."""
    return [repo for repo in repos if not repo.is_fork and repo.owner_login == login]


def summarize_commits(commits: list[GitHubCommit]) -> list[dict[str, Any]]:
    """Stored form of the newest commits: truncated messages, zeroed stats."""
    return [
        CommitSummary(
            sha=commit.sha,
            message=commit.message[:MAX_MESSAGE_LENGTH],
            author=CommitAuthor(
                name=commit.author_name,
                email=commit.author_email,
                date=commit.date,
            ),
            stats=CommitStats(),
        ).model_dump(mode="json")
        for commit in commits[:MAX_STORED_COMMITS]
    ]


def repository_values(
    repo: GitHubRepo,
    languages: dict[str, int],
    commits: list[GitHubCommit],
) -> dict[str, Any]:
    """Column values for the repository upsert."""
    return {
        "github_repo_id": repo.github_id,
        "name": repo.name,
        "full_name": repo.full_name,
        "description": repo.description,
        "language": repo.language,
        "languages": languages,
        "size": repo.size,
        "stargazers_count": repo.stargazers_count,
        "forks_count": repo.forks_count,
        "repo_created_at": repo.created_at,
        "repo_updated_at": repo.updated_at,
        "pushed_at": repo.pushed_at,
        "commits": summarize_commits(commits),
        "is_private": repo.is_private,
        "topics": repo.topics,
    }


class RepositorySyncService:
    """Pulls a user's GitHub profile and repositories into the database."""

    def __init__(self, db: AsyncSession, github: GitHubReadOperations):
        self.db = db
        self.github = github

    async def sync_profile(self) -> User:
        """
        Fetch the token owner's profile and upsert it.

        Raises:
            GitHubAPIError: If GitHub rejects the call.
        """
        profile = await self.github.get_authenticated_user()
        user = await user_ops.upsert_from_github(
            self.db, profile.github_id, profile.profile_fields()
        )
        logger.info(f"Synced profile for {profile.login}")
        return user

    async def sync_repositories(self, user: User) -> SyncResult:
        """
        Sync the user's own repositories.

        Raises:
            GitHubAPIError: If the repository listing fails.
            httpx.HTTPError: On a network failure during listing.
        """
        listed = await self.github.list_owned_repos()
        candidates = select_candidates(listed, user.login)
        batch = candidates[:MAX_SYNC_REPOSITORIES]
        logger.info(
            f"Syncing {len(batch)} of {len(candidates)} repositories for {user.login} "
            f"({len(listed)} listed)"
        )

        stored: list[Repository] = []
        skipped: list[SkippedRepository] = []

        for index, repo in enumerate(batch, start=1):
            if repo.size > MAX_REPOSITORY_SIZE_KB:
                logger.info(f"Skipping large repository {repo.full_name} ({repo.size} KB)")
                skipped.append(SkippedRepository(repo.name, f"too large ({repo.size} KB)"))
                continue

            try:
                languages = await self.github.get_repo_languages(repo.full_name)
                commits = await self.github.get_repo_commits(
                    repo.full_name, user.login, SYNC_COMMITS_PER_PAGE
                )
            except GitHubAPIError as e:
                logger.warning(f"Skipping {repo.full_name}: {e.message} (status {e.status_code})")
                skipped.append(SkippedRepository(repo.name, e.message))
                continue
            except (httpx.HTTPError, KeyError, ValueError) as e:
                logger.warning(f"Skipping {repo.full_name}: {e!r}")
                skipped.append(SkippedRepository(repo.name, str(e) or type(e).__name__))
                continue

            try:
                async with self.db.begin_nested():
                    record = await repository_ops.upsert(
                        self.db, user.id, repository_values(repo, languages, commits)
                    )
            except SQLAlchemyError as e:
                logger.warning(f"Skipping {repo.full_name}: could not store ({type(e).__name__})")
                skipped.append(SkippedRepository(repo.name, "database error"))
                continue

            stored.append(record)
            logger.debug(f"Processed {index}/{len(batch)}: {repo.full_name}")

        await user_ops.mark_analyzed(self.db, user)
        logger.info(f"Repository sync finished for {user.login}: {len(stored)} processed")

        return SyncResult(
            repositories=stored,
            attempted=len(batch),
            total=len(candidates),
            skipped_repositories=skipped,
        )
