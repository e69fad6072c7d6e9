import uuid as uuid_pkg
from datetime import datetime
from typing import Any

from sqlalchemy import BigInteger, Column, DateTime, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

from codeinsight.models.base import TimestampMixin, UserOwnedMixin, UUIDMixin
from codeinsight.schemas.commit import CommitSummary

MAX_STORED_COMMITS = 5


class RepositoryBase(SQLModel):
    """Base fields for Repository."""

    name: str = Field(max_length=255, index=True)
    full_name: str = Field(max_length=500)
    description: str | None = Field(default=None)
    language: str | None = Field(default=None, max_length=50)
    size: int = Field(default=0)  # KB, as reported by GitHub
    stargazers_count: int = Field(default=0)
    forks_count: int = Field(default=0)
    is_private: bool = Field(default=False)


class Repository(RepositoryBase, UUIDMixin, TimestampMixin, UserOwnedMixin, table=True):
    """A GitHub repository owned by a User, refreshed by each sync.

    `languages` maps language name to byte count. `commits` holds at most
    MAX_STORED_COMMITS CommitSummary dicts, newest first, and is replaced
    wholesale on re-sync.
    """

    __tablename__ = "repositories"
    __table_args__ = (
        UniqueConstraint("user_id", "github_repo_id", name="uq_repositories_user_github_repo"),
    )

    github_repo_id: int = Field(sa_column=Column(BigInteger, nullable=False, index=True))

    languages: dict[str, int] = Field(
        default_factory=dict,
        sa_column=Column(JSONB, nullable=False, server_default="{}"),
    )
    commits: list[dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSONB, nullable=False, server_default="[]"),
    )
    topics: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSONB, nullable=False, server_default="[]"),
    )

    # GitHub's own timestamps (distinct from our created_at/updated_at)
    repo_created_at: datetime | None = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )
    repo_updated_at: datetime | None = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True, index=True)
    )
    pushed_at: datetime | None = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )


class RepositoryRead(RepositoryBase):
    """API shape of a stored repository."""

    id: uuid_pkg.UUID
    github_repo_id: int
    languages: dict[str, int] = Field(default_factory=dict)
    commits: list[CommitSummary] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)
    repo_created_at: datetime | None = None
    repo_updated_at: datetime | None = None
    pushed_at: datetime | None = None
