"""
Aggregations over stored repositories.

Pure functions: no I/O, no session. They feed both the insight generators
and the dashboard responses.

Weekdays are numbered with Sunday = 0. Heatmap, weekday, hour and month
buckets use each commit timestamp as stored (GitHub reports UTC); timeline
days are explicitly UTC calendar dates.
"""

import math
from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import UTC, date, datetime

from codeinsight.models.repository import Repository
from codeinsight.models.user import User
from codeinsight.schemas.commit import CommitSummary
from codeinsight.schemas.statistics import (
    CareerData,
    CareerProfile,
    CareerRepository,
    CodeChanges,
    CodeQualityData,
    CommitPatternSummary,
    DevelopmentPatternStats,
    LanguageCount,
    LanguageProficiencyData,
    LanguageShare,
    OverviewStats,
    RecentCommit,
    RepositorySnapshot,
    RepositoryStats,
    TimelineDay,
    TopRepository,
)

RECENT_ACTIVITY_LIMIT = 20
TOP_REPOSITORIES_LIMIT = 5
CAREER_REPOSITORIES_LIMIT = 10
CAREER_LANGUAGES_LIMIT = 5


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def weekday_index(moment: datetime) -> int:
    """Day of week with Sunday = 0 ... Saturday = 6."""
    return (moment.weekday() + 1) % 7


def _utc_date(moment: datetime) -> date:
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(UTC).date()


def repository_commits(repository: Repository) -> list[CommitSummary]:
    """Validate the commit summaries stored on a repository."""
    return [CommitSummary.model_validate(raw) for raw in repository.commits or []]


def _all_commits(repositories: Iterable[Repository]) -> list[tuple[Repository, CommitSummary]]:
    return [(repo, commit) for repo in repositories for commit in repository_commits(repo)]


# ─────────────────────────────────────────────────────────────
# Languages
# ─────────────────────────────────────────────────────────────


def language_bytes(repositories: Iterable[Repository]) -> dict[str, int]:
    """Sum byte counts per language, in first-seen order."""
    totals: dict[str, int] = {}
    for repo in repositories:
        for language, count in (repo.languages or {}).items():
            totals[language] = totals.get(language, 0) + count
    return totals


def language_distribution(repositories: Sequence[Repository]) -> list[LanguageShare]:
    """
    Share of bytes per language across repositories.

    Sorted by byte count descending; ties keep first-seen order. Returns an
    empty list when there are no bytes at all.
    """
    totals = language_bytes(repositories)
    grand_total = sum(totals.values())
    if grand_total == 0:
        return []

    shares = [
        LanguageShare(
            language=language,
            bytes=count,
            percentage=round(count / grand_total * 100, 2),
            repositories=sum(1 for repo in repositories if language in (repo.languages or {})),
        )
        for language, count in totals.items()
    ]
    shares.sort(key=lambda share: share.bytes, reverse=True)
    return shares


def language_proficiency_data(repositories: Sequence[Repository]) -> LanguageProficiencyData:
    distribution = language_distribution(repositories)
    return LanguageProficiencyData(
        languages=distribution,
        total_languages=len(distribution),
        dominant_language=distribution[0].language if distribution else None,
    )


# ─────────────────────────────────────────────────────────────
# Commit activity
# ─────────────────────────────────────────────────────────────


def activity_timeline(repositories: Iterable[Repository]) -> list[TimelineDay]:
    """Commits, additions and deletions per UTC day, oldest day first."""
    days: dict[date, TimelineDay] = {}
    for _, commit in _all_commits(repositories):
        day = _utc_date(commit.author.date)
        bucket = days.setdefault(day, TimelineDay(date=day))
        bucket.commits += 1
        bucket.additions += commit.stats.additions
        bucket.deletions += commit.stats.deletions
    return sorted(days.values(), key=lambda bucket: bucket.date)


def commit_heatmap(repositories: Iterable[Repository]) -> list[list[int]]:
    """7x24 grid of commit counts indexed [weekday][hour], Sunday = 0."""
    grid = [[0] * 24 for _ in range(7)]
    for _, commit in _all_commits(repositories):
        moment = commit.author.date
        grid[weekday_index(moment)][moment.hour] += 1
    return grid


def recent_activity(
    repositories: Iterable[Repository],
    limit: int = RECENT_ACTIVITY_LIMIT,
) -> list[RecentCommit]:
    """Most recent stored commits across repositories, newest first."""
    flattened = [
        RecentCommit(
            sha=commit.sha,
            message=commit.message,
            date=commit.author.date,
            repository=repo.name,
            additions=commit.stats.additions,
            deletions=commit.stats.deletions,
        )
        for repo, commit in _all_commits(repositories)
    ]
    flattened.sort(key=lambda entry: entry.date, reverse=True)
    return flattened[:limit]


def commit_pattern_summary(commits: Sequence[CommitSummary]) -> CommitPatternSummary:
    """
    Cadence, message quality and consistency of a set of commits.

    Months are counted as 30-day spans with a floor of one month; consistency
    is distinct active days over elapsed days (floor of one day).
    """
    if not commits:
        return CommitPatternSummary(avg_commits_per_month=0, message_quality="unknown", consistency="low")

    dates = [commit.author.date for commit in commits]
    elapsed_days = (max(dates) - min(dates)).total_seconds() / 86400
    months = max(1.0, elapsed_days / 30)
    avg_per_month = _round_half_up(len(commits) / months)

    avg_length = sum(len(commit.message) for commit in commits) / len(commits)
    if avg_length > 50:
        quality = "excellent"
    elif avg_length > 30:
        quality = "good"
    elif avg_length > 15:
        quality = "fair"
    else:
        quality = "poor"

    active_days = len({moment.date() for moment in dates})
    ratio = active_days / max(1.0, elapsed_days)
    if ratio > 0.10:
        consistency = "high"
    elif ratio > 0.05:
        consistency = "medium"
    else:
        consistency = "low"

    return CommitPatternSummary(
        avg_commits_per_month=avg_per_month,
        message_quality=quality,  # type: ignore[arg-type]
        consistency=consistency,  # type: ignore[arg-type]
    )


def _busiest(counts: dict[int, int]) -> int | None:
    # Ties go to the lowest key
    if not counts:
        return None
    return max(sorted(counts), key=lambda key: counts[key])


def development_pattern_stats(repositories: Sequence[Repository]) -> DevelopmentPatternStats:
    """Weekday, hour and month activity plus change totals across all commits."""
    commits = [commit for _, commit in _all_commits(repositories)]

    by_day: Counter[int] = Counter()
    by_hour: Counter[int] = Counter()
    by_month: dict[str, int] = {}
    additions = 0
    deletions = 0

    for commit in commits:
        moment = commit.author.date
        by_day[weekday_index(moment)] += 1
        by_hour[moment.hour] += 1
        month_key = f"{moment.year}-{moment.month}"
        by_month[month_key] = by_month.get(month_key, 0) + 1
        additions += commit.stats.additions
        deletions += commit.stats.deletions

    total = len(commits)
    return DevelopmentPatternStats(
        total_commits=total,
        average_commits_per_repo=round(total / len(repositories), 2) if repositories else 0.0,
        most_active_day=_busiest(dict(by_day)),
        most_active_hour=_busiest(dict(by_hour)),
        commits_by_month=by_month,
        code_changes=CodeChanges(
            total_additions=additions,
            total_deletions=deletions,
            net_changes=additions - deletions,
            average_changes_per_commit=round((additions + deletions) / total, 2) if total else 0.0,
        ),
        commits_by_hour=dict(sorted(by_hour.items())),
        commits_by_day=dict(sorted(by_day.items())),
    )


# ─────────────────────────────────────────────────────────────
# Profile-level summaries
# ─────────────────────────────────────────────────────────────


def career_data(
    user: User,
    repositories: Sequence[Repository],
    now: datetime | None = None,
) -> CareerData:
    """Profile, leading repositories and most used primary languages."""
    now = now or datetime.now(UTC)
    account_age = 0
    if user.github_created_at:
        account_age = max(0, (now - user.github_created_at).days // 365)

    language_counts = Counter(repo.language for repo in repositories if repo.language)
    top_languages = sorted(language_counts.items(), key=lambda item: item[1], reverse=True)

    return CareerData(
        profile=CareerProfile(
            name=user.name,
            bio=user.bio,
            location=user.location,
            company=user.company,
            public_repos=user.public_repos,
            followers=user.followers,
            account_age_years=account_age,
        ),
        repositories=[
            CareerRepository(
                name=repo.name,
                language=repo.language,
                stars=repo.stargazers_count,
                forks=repo.forks_count,
                size=repo.size,
                topics=list(repo.topics or []),
                commits=len(repo.commits or []),
            )
            for repo in repositories[:CAREER_REPOSITORIES_LIMIT]
        ],
        top_languages=[
            LanguageCount(language=language, repositories=count)
            for language, count in top_languages[:CAREER_LANGUAGES_LIMIT]
        ],
    )


def code_quality_data(repository: Repository) -> CodeQualityData:
    """Everything sent for a single repository's code-quality review."""
    return CodeQualityData(
        repository=RepositorySnapshot(
            name=repository.name,
            description=repository.description,
            language=repository.language,
            languages=dict(repository.languages or {}),
            size=repository.size,
            commits=len(repository.commits or []),
            topics=list(repository.topics or []),
            created_at=repository.repo_created_at,
            updated_at=repository.repo_updated_at,
        ),
        commit_patterns=commit_pattern_summary(repository_commits(repository)),
        language_distribution=language_distribution([repository]),
        primary_language=repository.language,
        languages=list((repository.languages or {}).keys()),
    )


def top_repositories(
    repositories: Sequence[Repository],
    limit: int = TOP_REPOSITORIES_LIMIT,
) -> list[TopRepository]:
    """Most starred repositories."""
    ranked = sorted(repositories, key=lambda repo: repo.stargazers_count, reverse=True)
    return [
        TopRepository(
            id=repo.github_repo_id,
            name=repo.name,
            description=repo.description,
            language=repo.language,
            stars=repo.stargazers_count,
            forks=repo.forks_count,
            updated_at=repo.repo_updated_at,
        )
        for repo in ranked[:limit]
    ]


def overview_stats(
    user: User,
    repositories: Sequence[Repository],
    analyses_count: int,
) -> OverviewStats:
    return OverviewStats(
        total_repositories=len(repositories),
        total_commits=sum(len(repo.commits or []) for repo in repositories),
        total_stars=sum(repo.stargazers_count for repo in repositories),
        total_forks=sum(repo.forks_count for repo in repositories),
        languages_count=len({repo.language for repo in repositories if repo.language}),
        last_analysis=user.last_analysis,
        analyses_count=analyses_count,
    )


def repository_stats(repositories: Sequence[Repository]) -> RepositoryStats:
    return RepositoryStats(
        total_repos=len(repositories),
        total_commits=sum(len(repo.commits or []) for repo in repositories),
        total_stars=sum(repo.stargazers_count for repo in repositories),
        total_forks=sum(repo.forks_count for repo in repositories),
        languages=language_bytes(repositories),
        recent_activity=recent_activity(repositories),
    )
