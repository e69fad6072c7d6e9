"""Data types for GitHub API responses."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class GitHubUser:
    """Normalized authenticated-user profile."""

    github_id: int
    login: str
    name: str | None = None
    email: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    location: str | None = None
    company: str | None = None
    blog: str | None = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    created_at: datetime | None = None

    def profile_fields(self) -> dict[str, Any]:
        """Column values for the users table."""
        return {
            "login": self.login,
            "name": self.name,
            "email": self.email,
            "avatar_url": self.avatar_url,
            "bio": self.bio,
            "location": self.location,
            "company": self.company,
            "blog": self.blog,
            "public_repos": self.public_repos,
            "followers": self.followers,
            "following": self.following,
            "github_created_at": self.created_at,
        }


@dataclass
class GitHubRepo:
    """Normalized GitHub repository data."""

    github_id: int
    name: str
    full_name: str
    owner_login: str
    description: str | None
    language: str | None
    size: int  # KB
    stargazers_count: int
    forks_count: int
    is_fork: bool
    is_private: bool
    default_branch: str | None = None
    topics: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    pushed_at: datetime | None = None
    # Only meaningful on the single-repository endpoint
    watchers_count: int = 0
    open_issues_count: int = 0
    has_wiki: bool = False
    has_pages: bool = False


@dataclass
class GitHubCommit:
    """A commit from the commits listing (no per-commit stats)."""

    sha: str
    message: str
    author_name: str | None
    author_email: str | None
    date: datetime
    html_url: str | None = None


@dataclass
class RepoTreeItem:
    """Single item in a repository tree."""

    path: str
    type: str  # "blob" (file) or "tree" (directory)
    size: int | None  # Size in bytes (only for blobs)
    sha: str


@dataclass
class RepoTree:
    """Repository file tree structure."""

    sha: str
    items: list[RepoTreeItem]
    truncated: bool  # True if tree was too large and truncated


@dataclass
class ContributorInfo:
    login: str
    avatar_url: str | None
    contributions: int
    html_url: str | None = None


@dataclass
class BranchInfo:
    name: str
    protected: bool
    commit_sha: str | None = None


@dataclass
class ReleaseInfo:
    tag_name: str
    name: str | None
    published_at: datetime | None
    prerelease: bool = False
    html_url: str | None = None
