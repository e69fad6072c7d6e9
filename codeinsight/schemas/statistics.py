"""Aggregate shapes derived from stored repositories.

These are the `data` halves of the stored analyses and the building blocks of
the dashboard responses. They are produced by codeinsight.services.aggregation.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

MessageQuality = Literal["excellent", "good", "fair", "poor", "unknown"]
Consistency = Literal["high", "medium", "low"]


class LanguageShare(BaseModel):
    """A language's share of the bytes across a set of repositories."""

    language: str
    bytes: int = Field(ge=0)
    percentage: float = Field(description="Share of total bytes, rounded to 2 decimals")
    repositories: int = Field(description="Number of repositories containing the language")


class TimelineDay(BaseModel):
    date: date
    commits: int = 0
    additions: int = 0
    deletions: int = 0


class RecentCommit(BaseModel):
    """A stored commit flattened with the name of its repository."""

    sha: str
    message: str
    date: datetime
    repository: str
    additions: int = 0
    deletions: int = 0


class CommitPatternSummary(BaseModel):
    avg_commits_per_month: int = 0
    message_quality: MessageQuality = "unknown"
    consistency: Consistency = "low"


class CodeChanges(BaseModel):
    total_additions: int = 0
    total_deletions: int = 0
    net_changes: int = 0
    average_changes_per_commit: float = 0.0


class DevelopmentPatternStats(BaseModel):
    """Commit activity across all stored repositories.

    Weekdays are numbered with Sunday = 0. Months are keyed "YYYY-M".
    """

    total_commits: int = 0
    average_commits_per_repo: float = 0.0
    most_active_day: int | None = None
    most_active_hour: int | None = None
    commits_by_month: dict[str, int] = Field(default_factory=dict)
    code_changes: CodeChanges = Field(default_factory=CodeChanges)
    commits_by_hour: dict[int, int] = Field(default_factory=dict)
    commits_by_day: dict[int, int] = Field(default_factory=dict)


class LanguageProficiencyData(BaseModel):
    languages: list[LanguageShare] = Field(default_factory=list)
    total_languages: int = 0
    dominant_language: str | None = None


class CareerProfile(BaseModel):
    name: str | None = None
    bio: str | None = None
    location: str | None = None
    company: str | None = None
    public_repos: int = 0
    followers: int = 0
    account_age_years: int = 0


class CareerRepository(BaseModel):
    name: str
    language: str | None = None
    stars: int = 0
    forks: int = 0
    size: int = 0
    topics: list[str] = Field(default_factory=list)
    commits: int = 0


class LanguageCount(BaseModel):
    language: str
    repositories: int


class CareerData(BaseModel):
    profile: CareerProfile
    repositories: list[CareerRepository] = Field(default_factory=list)
    top_languages: list[LanguageCount] = Field(default_factory=list)


class RepositorySnapshot(BaseModel):
    name: str
    description: str | None = None
    language: str | None = None
    languages: dict[str, int] = Field(default_factory=dict)
    size: int = 0
    commits: int = 0
    topics: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CodeQualityData(BaseModel):
    repository: RepositorySnapshot
    commit_patterns: CommitPatternSummary
    language_distribution: list[LanguageShare] = Field(default_factory=list)
    primary_language: str | None = None
    languages: list[str] = Field(default_factory=list)


class TopRepository(BaseModel):
    id: int = Field(description="GitHub repository id")
    name: str
    description: str | None = None
    language: str | None = None
    stars: int = 0
    forks: int = 0
    updated_at: datetime | None = None


class OverviewStats(BaseModel):
    total_repositories: int = 0
    total_commits: int = 0
    total_stars: int = 0
    total_forks: int = 0
    languages_count: int = 0
    last_analysis: datetime | None = None
    analyses_count: int = 0


class RepositoryStats(BaseModel):
    total_repos: int = 0
    total_commits: int = 0
    total_stars: int = 0
    total_forks: int = 0
    languages: dict[str, int] = Field(default_factory=dict)
    recent_activity: list[RecentCommit] = Field(default_factory=list)
