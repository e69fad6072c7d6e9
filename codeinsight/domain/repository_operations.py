import uuid as uuid_pkg
from typing import Any

from sqlalchemy import func, nulls_last, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from codeinsight.domain.base_operations import BaseOperations
from codeinsight.models.repository import Repository

# Columns replaced wholesale on re-sync
SYNCED_FIELDS = (
    "name",
    "full_name",
    "description",
    "language",
    "languages",
    "size",
    "stargazers_count",
    "forks_count",
    "repo_created_at",
    "repo_updated_at",
    "pushed_at",
    "commits",
    "is_private",
    "topics",
)


class RepositoryOperations(BaseOperations[Repository]):
    """Operations for Repository model."""

    def __init__(self) -> None:
        super().__init__(Repository)

    async def get_by_github_id(
        self,
        db: AsyncSession,
        user_id: uuid_pkg.UUID,
        github_repo_id: int,
    ) -> Repository | None:
        """Get a user's repository by its GitHub repository id."""
        statement = select(Repository).where(
            Repository.user_id == user_id,  # type: ignore[arg-type]
            Repository.github_repo_id == github_repo_id,  # type: ignore[arg-type]
        )
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    async def list_by_user(self, db: AsyncSession, user_id: uuid_pkg.UUID) -> list[Repository]:
        """Get a user's repositories, most recently updated on GitHub first."""
        return await self.get_multi_by_user(
            db,
            user_id,
            order_by=nulls_last(Repository.repo_updated_at.desc()),  # type: ignore[union-attr]
        )

    def build_upsert_statement(self, user_id: uuid_pkg.UUID, values: dict[str, Any]) -> Any:
        """Build the INSERT ... ON CONFLICT (user_id, github_repo_id) DO UPDATE statement."""
        stmt = insert(Repository).values(user_id=user_id, **values)
        return stmt.on_conflict_do_update(
            index_elements=["user_id", "github_repo_id"],
            set_={
                **{field: stmt.excluded[field] for field in SYNCED_FIELDS if field in values},
                "updated_at": func.now(),
            },
        ).returning(Repository)

    async def upsert(
        self,
        db: AsyncSession,
        user_id: uuid_pkg.UUID,
        values: dict[str, Any],
    ) -> Repository:
        """
        Insert or replace a synced repository.

        Args:
            db: Database session
            user_id: Owning user
            values: Column values; must include github_repo_id

        Returns:
            The persisted Repository row.
        """
        stmt = self.build_upsert_statement(user_id, values)
        result = await db.execute(stmt.execution_options(populate_existing=True))
        repository = result.scalar_one()
        await db.flush()
        return repository


repository_ops = RepositoryOperations()
