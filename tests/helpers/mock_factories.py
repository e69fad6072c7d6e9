"""Object factories for unit and API tests.

Builds real (unsaved) model instances with the shapes sync writes, plus
mock execute() results for tests where the database session is mocked.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any
from unittest.mock import MagicMock

from codeinsight.models.repository import Repository
from codeinsight.models.user import User


def make_user(**overrides: Any) -> User:
    return User(
        id=overrides.get("id", uuid.uuid4()),
        github_id=overrides.get("github_id", 42),
        login=overrides.get("login", "octocat"),
        name=overrides.get("name", "The Octocat"),
        email=overrides.get("email", "octocat@example.com"),
        avatar_url=overrides.get("avatar_url", "https://avatars.example.com/u/42"),
        bio=overrides.get("bio"),
        location=overrides.get("location", "San Francisco"),
        company=overrides.get("company", "@github"),
        blog=overrides.get("blog"),
        public_repos=overrides.get("public_repos", 8),
        followers=overrides.get("followers", 100),
        following=overrides.get("following", 5),
        github_created_at=overrides.get("github_created_at", datetime(2015, 1, 1, tzinfo=UTC)),
        last_analysis=overrides.get("last_analysis"),
    )


def make_commit(
    sha: str = "abc1234def",
    message: str = "Fix bug",
    date: datetime | None = None,
    additions: int = 0,
    deletions: int = 0,
) -> dict[str, Any]:
    """A commit entry as stored in Repository.commits."""
    moment = date or datetime(2024, 1, 15, 9, 0, tzinfo=UTC)
    return {
        "sha": sha,
        "message": message,
        "author": {
            "name": "The Octocat",
            "email": "octocat@example.com",
            "date": moment.isoformat(),
        },
        "stats": {"additions": additions, "deletions": deletions, "total": additions + deletions},
    }


def make_repository(**overrides: Any) -> Repository:
    name = overrides.get("name", "hello-world")
    return Repository(
        id=overrides.get("id", uuid.uuid4()),
        user_id=overrides.get("user_id", uuid.uuid4()),
        github_repo_id=overrides.get("github_repo_id", 1296269),
        name=name,
        full_name=overrides.get("full_name", f"octocat/{name}"),
        description=overrides.get("description", "My first repository"),
        language=overrides.get("language", "Python"),
        languages=overrides.get("languages", {"Python": 1000}),
        size=overrides.get("size", 120),
        stargazers_count=overrides.get("stargazers_count", 10),
        forks_count=overrides.get("forks_count", 2),
        is_private=overrides.get("is_private", False),
        topics=overrides.get("topics", []),
        commits=overrides.get("commits", []),
        repo_created_at=overrides.get("repo_created_at", datetime(2020, 1, 1, tzinfo=UTC)),
        repo_updated_at=overrides.get("repo_updated_at", datetime(2024, 1, 20, tzinfo=UTC)),
        pushed_at=overrides.get("pushed_at", datetime(2024, 1, 20, tzinfo=UTC)),
    )


def mock_scalars_result(values: list) -> MagicMock:
    """Create a mock execute() result that yields values via .scalars().all()."""
    result = MagicMock()
    result.scalars.return_value.all.return_value = values
    result.scalars.return_value.first.return_value = values[0] if values else None
    return result


def mock_scalar_result(value: object) -> MagicMock:
    """Create a mock execute() result that yields a single value."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    result.scalar_one.return_value = value
    result.scalar.return_value = value
    return result
