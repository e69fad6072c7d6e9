import uuid as uuid_pkg
from datetime import datetime

from sqlalchemy import BigInteger, Column, DateTime
from sqlmodel import Field, SQLModel

from codeinsight.models.base import TimestampMixin, UUIDMixin


class UserBase(SQLModel):
    """GitHub profile fields mirrored on sync."""

    login: str = Field(max_length=255, index=True)
    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    avatar_url: str | None = Field(default=None, max_length=500)
    bio: str | None = Field(default=None)
    location: str | None = Field(default=None, max_length=255)
    company: str | None = Field(default=None, max_length=255)
    blog: str | None = Field(default=None, max_length=500)
    public_repos: int = Field(default=0)
    followers: int = Field(default=0)
    following: int = Field(default=0)


class User(UserBase, UUIDMixin, TimestampMixin, table=True):
    """A GitHub account that has signed in.

    One row per GitHub identity; profile sync upserts on github_id.
    """

    __tablename__ = "users"

    github_id: int = Field(
        sa_column=Column(BigInteger, unique=True, index=True, nullable=False),
    )
    github_created_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )
    # Stamped at the end of every repository sync
    last_analysis: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )


class UserRead(UserBase):
    """API shape of a stored user."""

    id: uuid_pkg.UUID
    github_id: int
    github_created_at: datetime | None = None
    last_analysis: datetime | None = None
