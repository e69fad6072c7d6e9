import uuid as uuid_pkg
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from codeinsight.domain.base_operations import BaseOperations
from codeinsight.models.analysis import Analysis, AnalysisType
from codeinsight.schemas.analysis import AnalysisPayload, dump_analysis, parse_analysis

# Columns of the ix_analyses_user_type_repo unique index
ANALYSIS_KEY = ("user_id", "type", "repository_github_id")


class AnalysisOperations(BaseOperations[Analysis]):
    """Operations for Analysis model.

    Callers deal in AnalysisPayload values; rows never leave this module
    with untyped data or insights.
    """

    def __init__(self) -> None:
        super().__init__(Analysis)

    async def get_record(
        self,
        db: AsyncSession,
        user_id: uuid_pkg.UUID,
        analysis_type: AnalysisType,
        repository_github_id: int | None = None,
    ) -> Analysis | None:
        """Get the current analysis row for a key."""
        repo_clause = (
            Analysis.repository_github_id.is_(None)  # type: ignore[union-attr]
            if repository_github_id is None
            else Analysis.repository_github_id == repository_github_id
        )
        statement = select(Analysis).where(
            Analysis.user_id == user_id,  # type: ignore[arg-type]
            Analysis.type == analysis_type.value,  # type: ignore[arg-type]
            repo_clause,
        )
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    async def get_payload(
        self,
        db: AsyncSession,
        user_id: uuid_pkg.UUID,
        analysis_type: AnalysisType,
        repository_github_id: int | None = None,
    ) -> AnalysisPayload | None:
        """Get the current analysis for a key as a typed payload."""
        record = await self.get_record(db, user_id, analysis_type, repository_github_id)
        return to_payload(record) if record else None

    async def list_by_user(self, db: AsyncSession, user_id: uuid_pkg.UUID) -> list[AnalysisPayload]:
        """Get all of a user's analyses, most recently generated first."""
        records = await self.get_multi_by_user(
            db, user_id, order_by=Analysis.generated_at.desc()  # type: ignore[attr-defined]
        )
        return [to_payload(record) for record in records]

    def build_upsert_statement(
        self,
        user_id: uuid_pkg.UUID,
        payload: AnalysisPayload,
        generated_at: datetime,
    ) -> Any:
        """Build the INSERT ... ON CONFLICT (user_id, type, repository_github_id) DO UPDATE statement."""
        raw = dump_analysis(payload)
        stmt = insert(Analysis).values(
            user_id=user_id,
            type=payload.type,
            repository_github_id=payload.repository_github_id,
            data=raw["data"],
            insights=raw["insights"],
            generated_at=generated_at,
        )
        return stmt.on_conflict_do_update(
            index_elements=list(ANALYSIS_KEY),
            set_={
                "data": stmt.excluded["data"],
                "insights": stmt.excluded["insights"],
                "generated_at": stmt.excluded["generated_at"],
                "updated_at": func.now(),
            },
        ).returning(Analysis)

    async def upsert(
        self,
        db: AsyncSession,
        user_id: uuid_pkg.UUID,
        payload: AnalysisPayload,
    ) -> AnalysisPayload:
        """
        Replace the current analysis for the payload's key.

        The key is (user, type) plus the repository id for code quality; the
        unique index treats NULL repository ids as equal, so every other type
        conflicts on (user, type) alone. generated_at is stamped here.
        """
        stmt = self.build_upsert_statement(user_id, payload, datetime.now(UTC))
        result = await db.execute(stmt.execution_options(populate_existing=True))
        record = result.scalar_one()
        await db.flush()
        return to_payload(record)


def to_payload(record: Analysis) -> AnalysisPayload:
    """Validate a stored row into its payload variant."""
    return parse_analysis(
        {
            "type": record.type,
            "repository_github_id": record.repository_github_id,
            "data": record.data,
            "insights": record.insights,
            "generated_at": record.generated_at,
        }
    )


analysis_ops = AnalysisOperations()
