"""Analysis model for generated insights."""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from sqlalchemy import BigInteger, Column, DateTime, Index, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

from codeinsight.models.base import TimestampMixin, UserOwnedMixin, UUIDMixin


class AnalysisType(str, Enum):
    """Kind of generated analysis."""

    LANGUAGE_PROFICIENCY = "language_proficiency"
    DEVELOPMENT_PATTERNS = "development_patterns"
    CAREER_INSIGHTS = "career_insights"
    CODE_QUALITY = "code_quality"


class Analysis(UUIDMixin, TimestampMixin, UserOwnedMixin, SQLModel, table=True):
    """
    Latest generated analysis for a user.

    At most one row per (user, type). Code-quality rows are additionally
    keyed by the repository they describe; for every other type
    repository_github_id is NULL, and NULLs compare equal in the unique index.

    `data` is the aggregate that was sent for generation and `insights` is
    what came back (or the fallback). Both are stored as JSONB and go through
    codeinsight.schemas.analysis.AnalysisPayload on every read and write.
    """

    __tablename__ = "analyses"
    __table_args__ = (
        Index(
            "ix_analyses_user_type_repo",
            "user_id",
            "type",
            "repository_github_id",
            unique=True,
            postgresql_nulls_not_distinct=True,
        ),
    )

    type: str = Field(max_length=30, nullable=False)
    repository_github_id: int | None = Field(
        default=None, sa_column=Column(BigInteger, nullable=True)
    )

    data: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSONB, nullable=False, server_default="{}"),
    )
    insights: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSONB, nullable=False, server_default="{}"),
    )

    generated_at: datetime = Field(  # type: ignore[call-overload]
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": text("now()")},
    )
