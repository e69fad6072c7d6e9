"""
Single-repository detail analysis.

Combines a stored Repository with live GitHub data: details, contributors,
branches and releases are fetched concurrently and each may fail on its own;
the file tree is best effort; the author's recent commits are required.
File structure, complexity and maintainability are heuristics over the tree.
"""

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, TypeVar

import httpx

from codeinsight.models.repository import Repository
from codeinsight.schemas.repository_detail import (
    FileStructureSummary,
    RepositoryDetail,
    RepositoryLanguageStat,
    RepositoryMetrics,
    RepositoryOverview,
    TimelineCommit,
)
from codeinsight.services.github import GitHubAPIError, GitHubReadOperations
from codeinsight.services.github.constants import (
    DEFAULT_BRANCH,
    DETAIL_BRANCHES_LIMIT,
    DETAIL_COMMITS_PER_PAGE,
    DETAIL_CONTRIBUTORS_LIMIT,
    DETAIL_RELEASES_LIMIT,
    DETAIL_TIMELINE_LIMIT,
)
from codeinsight.services.github.types import GitHubCommit, GitHubRepo, RepoTreeItem

logger = logging.getLogger(__name__)

T = TypeVar("T")

CODE_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".js", ".jsx", ".ts", ".tsx", ".py", ".java", ".cpp", ".c",
        ".cs", ".go", ".rs", ".php", ".rb", ".swift", ".kt",
    }
)
# Extensions that count as distinct languages for complexity (no Swift/Kotlin)
COMPLEXITY_LANGUAGE_EXTENSIONS: frozenset[str] = CODE_EXTENSIONS - {".swift", ".kt"}
DOC_EXTENSIONS: frozenset[str] = frozenset({".md", ".txt", ".rst", ".doc", ".pdf"})
CONFIG_EXTENSIONS: frozenset[str] = frozenset(
    {".json", ".yml", ".yaml", ".xml", ".toml", ".ini", ".env"}
)
CI_MARKERS = (".github/workflows", ".travis.yml", "Jenkinsfile")

BYTES_PER_LINE = 35
DEFAULT_FILE_SIZE = 500  # bytes, when the tree omits a size
TIMELINE_MESSAGE_LENGTH = 80
SHORT_SHA_LENGTH = 7


@dataclass
class FileAnalysis:
    """Classification of a repository tree."""

    directories: list[str] = field(default_factory=list)
    paths: list[str] = field(default_factory=list)
    extensions: Counter[str] = field(default_factory=Counter)
    code_files: int = 0
    document_files: int = 0
    config_files: int = 0
    estimated_lines: int = 0


def file_extension(path: str) -> str:
    """Lower-cased text after the last dot, with a leading dot.

    A name without a dot is its own extension ("Makefile" -> ".makefile").
    """
    return "." + path.rsplit(".", 1)[-1].lower()


def analyze_file_structure(items: list[RepoTreeItem]) -> FileAnalysis:
    analysis = FileAnalysis()
    for item in items:
        if item.type == "tree":
            analysis.directories.append(item.path)
            continue
        if item.type != "blob":
            continue

        ext = file_extension(item.path)
        analysis.extensions[ext] += 1
        analysis.paths.append(item.path)

        if ext in CODE_EXTENSIONS:
            analysis.code_files += 1
            analysis.estimated_lines += max(1, (item.size or DEFAULT_FILE_SIZE) // BYTES_PER_LINE)
        elif ext in DOC_EXTENSIONS:
            analysis.document_files += 1
        elif ext in CONFIG_EXTENSIONS:
            analysis.config_files += 1
    return analysis


def complexity_score(analysis: FileAnalysis) -> int:
    """1-5 from code file count, language spread and estimated size."""
    score = 1

    if analysis.code_files > 100:
        score += 2
    elif analysis.code_files > 50:
        score += 1

    languages = sum(1 for ext in analysis.extensions if ext in COMPLEXITY_LANGUAGE_EXTENSIONS)
    if languages > 5:
        score += 2
    elif languages > 3:
        score += 1

    if analysis.estimated_lines > 10000:
        score += 2
    elif analysis.estimated_lines > 5000:
        score += 1

    return min(score, 5)


def maintainability_score(
    analysis: FileAnalysis,
    updated_at: datetime | None,
    now: datetime | None = None,
) -> int:
    """1-10: README, tests and CI each add a point; recency adds or removes one."""
    score = 5
    lowered = [path.lower() for path in analysis.paths]

    if any("readme" in path for path in lowered):
        score += 1
    if any("test" in path or "spec" in path for path in lowered):
        score += 1
    if any(marker in path for path in analysis.paths for marker in CI_MARKERS):
        score += 1

    if updated_at is not None:
        days_since_update = ((now or datetime.now(UTC)) - updated_at).total_seconds() / 86400
        if days_since_update < 30:
            score += 1
        elif days_since_update > 180:
            score -= 1

    return max(1, min(score, 10))


def commit_frequency(dates: list[datetime]) -> float:
    """Commits per week between the first and last date (at least one day)."""
    if not dates:
        return 0.0
    elapsed_days = max(1.0, (max(dates) - min(dates)).total_seconds() / 86400)
    return round(len(dates) / elapsed_days * 7, 1)


def timeline_entry(commit: GitHubCommit) -> TimelineCommit:
    first_line = commit.message.split("\n", 1)[0]
    return TimelineCommit(
        sha=commit.sha[:SHORT_SHA_LENGTH],
        message=first_line[:TIMELINE_MESSAGE_LENGTH],
        date=commit.date,
        author=commit.author_name,
        url=commit.html_url,
    )


def repository_language_stats(languages: dict[str, int]) -> list[RepositoryLanguageStat]:
    """Per-language share of the repository's total language bytes."""
    total = sum(languages.values())
    if total == 0:
        return []
    stats = [
        RepositoryLanguageStat(
            language=language,
            bytes=count,
            percentage=round(count / total * 100, 2),
        )
        for language, count in languages.items()
    ]
    stats.sort(key=lambda stat: stat.bytes, reverse=True)
    return stats


def _settled(result: T | BaseException, what: str, full_name: str, default: T) -> T:
    if isinstance(result, BaseException):
        logger.warning(f"Could not fetch {what} for {full_name}: {result}")
        return default
    return result


class RepositoryAnalyzer:
    """Builds the detail view for one stored repository."""

    def __init__(self, github: GitHubReadOperations):
        self.github = github

    async def analyze(self, repository: Repository, login: str) -> RepositoryDetail:
        """
        Fetch live data for a repository and derive its metrics.

        Raises:
            GitHubAPIError: If the author's commits cannot be fetched.
            httpx.HTTPError: On a network failure fetching commits.
        """
        full_name = repository.full_name
        logger.info(f"Analyzing repository {full_name}")

        results: list[Any] = await asyncio.gather(
            self.github.get_repo_details(full_name),
            self.github.get_repo_contributors(full_name, DETAIL_CONTRIBUTORS_LIMIT),
            self.github.get_repo_branches(full_name, DETAIL_BRANCHES_LIMIT),
            self.github.get_repo_releases(full_name, DETAIL_RELEASES_LIMIT),
            return_exceptions=True,
        )
        details: GitHubRepo | None = _settled(results[0], "details", full_name, None)
        contributors = _settled(results[1], "contributors", full_name, [])
        branches = _settled(results[2], "branches", full_name, [])
        releases = _settled(results[3], "releases", full_name, [])

        branch = (details.default_branch if details else None) or DEFAULT_BRANCH
        tree_items: list[RepoTreeItem] = []
        truncated = False
        try:
            tree = await self.github.get_repo_tree(full_name, branch)
            tree_items, truncated = tree.items, tree.truncated
        except (GitHubAPIError, httpx.HTTPError) as e:
            logger.info(f"Could not fetch file tree for {full_name}: {e}")

        commits = await self.github.get_repo_commits(full_name, login, DETAIL_COMMITS_PER_PAGE)
        timeline = [timeline_entry(commit) for commit in commits]

        files = analyze_file_structure(tree_items)

        return RepositoryDetail(
            repository=RepositoryOverview(
                id=repository.github_repo_id,
                name=repository.name,
                full_name=full_name,
                description=repository.description,
                language=repository.language,
                size=repository.size,
                stars=repository.stargazers_count,
                forks=repository.forks_count,
                watchers=details.watchers_count if details else 0,
                open_issues=details.open_issues_count if details else 0,
                created_at=repository.repo_created_at,
                updated_at=repository.repo_updated_at,
                pushed_at=repository.pushed_at,
                is_private=repository.is_private,
                topics=list(repository.topics or []),
                default_branch=details.default_branch if details else None,
                has_wiki=details.has_wiki if details else False,
                has_pages=details.has_pages if details else False,
            ),
            metrics=RepositoryMetrics(
                total_files=len(tree_items),
                code_files=files.code_files,
                total_lines=files.estimated_lines,
                complexity=complexity_score(files),
                maintainability=maintainability_score(files, repository.repo_updated_at),
                last_activity=repository.pushed_at,
                commit_frequency=commit_frequency([entry.date for entry in timeline]),
                language_distribution=dict(repository.languages or {}),
            ),
            file_structure=FileStructureSummary(
                total_files=len(files.paths),
                directories=len(files.directories),
                code_files=files.code_files,
                document_files=files.document_files,
                config_files=files.config_files,
                estimated_lines=files.estimated_lines,
                extensions=dict(files.extensions),
                truncated=truncated,
            ),
            commit_timeline=timeline[:DETAIL_TIMELINE_LIMIT],
            contributors=contributors,
            branches=branches,
            releases=releases,
            language_stats=repository_language_stats(dict(repository.languages or {})),
        )
