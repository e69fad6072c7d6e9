"""Domain operations for GitHub users."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from codeinsight.models.user import User

# Profile columns refreshed from GitHub on every sync
PROFILE_FIELDS = (
    "login",
    "name",
    "email",
    "avatar_url",
    "bio",
    "location",
    "company",
    "blog",
    "public_repos",
    "followers",
    "following",
    "github_created_at",
)


class UserOperations:
    """
    Operations for User model.

    Note: This doesn't extend BaseOperations because users are looked up
    by their GitHub identity, not owned by another user.
    """

    async def get_by_github_id(self, db: AsyncSession, github_id: int) -> User | None:
        """Get a user by GitHub account id."""
        statement = select(User).where(User.github_id == github_id)  # type: ignore[arg-type]
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    def build_upsert_statement(self, github_id: int, profile: dict[str, Any]) -> Any:
        """Build the INSERT ... ON CONFLICT (github_id) DO UPDATE statement."""
        values = {field: profile.get(field) for field in PROFILE_FIELDS}
        values["public_repos"] = values["public_repos"] or 0
        values["followers"] = values["followers"] or 0
        values["following"] = values["following"] or 0

        stmt = insert(User).values(github_id=github_id, **values)
        return stmt.on_conflict_do_update(
            index_elements=["github_id"],
            set_={**{field: stmt.excluded[field] for field in PROFILE_FIELDS}, "updated_at": func.now()},
        ).returning(User)

    async def upsert_from_github(
        self,
        db: AsyncSession,
        github_id: int,
        profile: dict[str, Any],
    ) -> User:
        """
        Create or refresh the user for a GitHub identity.

        Args:
            db: Database session
            github_id: GitHub account id (the upsert key)
            profile: Column values keyed by PROFILE_FIELDS names

        Returns:
            The persisted User row.
        """
        stmt = self.build_upsert_statement(github_id, profile)
        result = await db.execute(stmt.execution_options(populate_existing=True))
        user = result.scalar_one()
        await db.flush()
        return user

    async def mark_analyzed(
        self,
        db: AsyncSession,
        user: User,
        when: datetime | None = None,
    ) -> User:
        """Stamp last_analysis on a user after a repository sync."""
        user.last_analysis = when or datetime.now(UTC)
        db.add(user)
        await db.flush()
        return user


user_ops = UserOperations()
