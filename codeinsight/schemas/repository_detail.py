"""Response shape of the single-repository detail view.

Commits here are timeline entries fetched live from GitHub, not the stored
CommitSummary records written by sync.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from codeinsight.services.github.types import BranchInfo, ContributorInfo, ReleaseInfo


class RepositoryOverview(BaseModel):
    id: int
    name: str
    full_name: str
    description: str | None = None
    language: str | None = None
    size: int = 0
    stars: int = 0
    forks: int = 0
    watchers: int = 0
    open_issues: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    pushed_at: datetime | None = None
    is_private: bool = False
    topics: list[str] = Field(default_factory=list)
    default_branch: str | None = None
    has_wiki: bool = False
    has_pages: bool = False


class FileStructureSummary(BaseModel):
    total_files: int = 0
    directories: int = 0
    code_files: int = 0
    document_files: int = 0
    config_files: int = 0
    estimated_lines: int = 0
    extensions: dict[str, int] = Field(default_factory=dict)
    truncated: bool = False


class RepositoryMetrics(BaseModel):
    total_files: int = Field(description="Tree entries, files and directories")
    code_files: int
    total_lines: int = Field(description="Estimated from code file sizes")
    complexity: int = Field(ge=1, le=5)
    maintainability: int = Field(ge=1, le=10)
    last_activity: datetime | None = None
    commit_frequency: float = Field(description="Commits per week")
    language_distribution: dict[str, int] = Field(default_factory=dict)


class TimelineCommit(BaseModel):
    sha: str = Field(description="Abbreviated 7-character SHA")
    message: str = Field(description="First line, at most 80 characters")
    date: datetime
    author: str | None = None
    url: str | None = None


class RepositoryLanguageStat(BaseModel):
    language: str
    bytes: int
    percentage: float


class RepositoryDetail(BaseModel):
    repository: RepositoryOverview
    metrics: RepositoryMetrics
    file_structure: FileStructureSummary
    commit_timeline: list[TimelineCommit] = Field(default_factory=list)
    contributors: list[ContributorInfo] = Field(default_factory=list)
    branches: list[BranchInfo] = Field(default_factory=list)
    releases: list[ReleaseInfo] = Field(default_factory=list)
    language_stats: list[RepositoryLanguageStat] = Field(default_factory=list)
