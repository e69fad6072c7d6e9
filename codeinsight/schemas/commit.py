"""Pydantic schema for commit summaries embedded in repositories.

This schema defines the structure of each entry in the `commits` JSONB column
of the repositories table. Bulk sync writes these with zeroed stats; the
single-repository detail view uses its own timeline shape instead.
"""

from datetime import datetime

from pydantic import BaseModel, Field

MAX_MESSAGE_LENGTH = 100


class CommitAuthor(BaseModel):
    name: str | None = None
    email: str | None = None
    date: datetime


class CommitStats(BaseModel):
    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)


class CommitSummary(BaseModel):
    """One commit as stored on a Repository record."""

    sha: str
    message: str = Field(max_length=MAX_MESSAGE_LENGTH)
    author: CommitAuthor
    stats: CommitStats = Field(default_factory=CommitStats)
