"""API endpoint tests for dashboard reads."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from codeinsight.core.security import create_access_token
from codeinsight.schemas.analysis import CareerInsightsAnalysis, LanguageProficiencyAnalysis
from codeinsight.schemas.statistics import CareerData, CareerProfile, LanguageProficiencyData
from codeinsight.services.insights import career_insights_generator, language_proficiency_generator

from tests.helpers.mock_factories import make_commit, make_repository, make_user

GENERATED_AT = datetime(2024, 2, 1, 12, 0, tzinfo=UTC)


# ═══════════════════════════════════════════════════════════════════════════
# GET /api/v1/dashboard/overview
# ═══════════════════════════════════════════════════════════════════════════


class TestOverview:
    @patch("codeinsight.api.v1.dashboard.user_ops")
    @pytest.mark.asyncio
    async def test_unsynced_user_gets_stub(self, mock_user_ops, anonymous_client: AsyncClient):
        mock_user_ops.get_by_github_id = AsyncMock(return_value=None)
        token = create_access_token(7, "newcomer", "gho_abc")

        response = await anonymous_client.get(
            "/api/v1/dashboard/overview", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
        overview = response.json()["overview"]
        assert overview["user"]["login"] == "newcomer"
        assert overview["user"]["needs_sync"] is True
        assert overview["stats"]["total_repositories"] == 0
        assert overview["top_repositories"] == []

    @patch("codeinsight.api.v1.dashboard.analysis_ops")
    @patch("codeinsight.api.v1.dashboard.repository_ops")
    @patch("codeinsight.api.v1.dashboard.user_ops")
    @pytest.mark.asyncio
    async def test_synced_user(
        self, mock_user_ops, mock_repo_ops, mock_analysis_ops, api_client: AsyncClient
    ):
        user = make_user(last_analysis=GENERATED_AT)
        mock_user_ops.get_by_github_id = AsyncMock(return_value=user)
        mock_repo_ops.list_by_user = AsyncMock(
            return_value=[
                make_repository(name="small", stargazers_count=1, commits=[make_commit()]),
                make_repository(
                    name="big", github_repo_id=2, stargazers_count=50, language="Go",
                    languages={"Go": 3000},
                ),
            ]
        )
        mock_analysis_ops.list_by_user = AsyncMock(return_value=[object(), object()])

        response = await api_client.get("/api/v1/dashboard/overview")

        overview = response.json()["overview"]
        assert overview["user"]["needs_sync"] is False
        assert overview["user"]["name"] == "The Octocat"
        assert overview["stats"]["total_repositories"] == 2
        assert overview["stats"]["total_stars"] == 51
        assert overview["stats"]["languages_count"] == 2
        assert overview["stats"]["analyses_count"] == 2
        assert overview["top_repositories"][0]["name"] == "big"
        assert overview["language_distribution"][0]["language"] == "Go"
        assert len(overview["recent_activity"]) == 1


# ═══════════════════════════════════════════════════════════════════════════
# GET /api/v1/dashboard/languages, /patterns, /career
# ═══════════════════════════════════════════════════════════════════════════


class TestLanguages:
    @patch("codeinsight.api.v1.dashboard.analysis_ops")
    @patch("codeinsight.api.v1.dashboard.repository_ops")
    @pytest.mark.asyncio
    async def test_with_stored_analysis(self, mock_repo_ops, mock_analysis_ops, api_client: AsyncClient):
        mock_repo_ops.list_by_user = AsyncMock(
            return_value=[make_repository(languages={"Python": 500, "Shell": 100})]
        )
        mock_analysis_ops.get_payload = AsyncMock(
            return_value=LanguageProficiencyAnalysis(
                data=LanguageProficiencyData(),
                insights=language_proficiency_generator.fallback(),
                generated_at=GENERATED_AT,
            )
        )

        response = await api_client.get("/api/v1/dashboard/languages")

        data = response.json()["language_data"]
        assert [d["percentage"] for d in data["distribution"]] == [83.33, 16.67]
        assert data["repositories"][0]["languages"] == {"Python": 500, "Shell": 100}
        assert data["analysis"]["overall_score"] == 7
        assert data["last_analyzed"].startswith("2024-02-01T12:00:00")

    @patch("codeinsight.api.v1.dashboard.analysis_ops")
    @patch("codeinsight.api.v1.dashboard.repository_ops")
    @pytest.mark.asyncio
    async def test_without_analysis(self, mock_repo_ops, mock_analysis_ops, api_client: AsyncClient):
        mock_repo_ops.list_by_user = AsyncMock(return_value=[])
        mock_analysis_ops.get_payload = AsyncMock(return_value=None)

        response = await api_client.get("/api/v1/dashboard/languages")

        data = response.json()["language_data"]
        assert data["distribution"] == []
        assert data["analysis"] is None
        assert data["last_analyzed"] is None


class TestPatterns:
    @patch("codeinsight.api.v1.dashboard.analysis_ops")
    @patch("codeinsight.api.v1.dashboard.repository_ops")
    @pytest.mark.asyncio
    async def test_heatmap_and_timeline(self, mock_repo_ops, mock_analysis_ops, api_client: AsyncClient):
        # 2024-01-15 is a Monday
        mock_repo_ops.list_by_user = AsyncMock(
            return_value=[
                make_repository(
                    commits=[
                        make_commit("a", date=datetime(2024, 1, 15, 9, 0, tzinfo=UTC)),
                        make_commit("b", date=datetime(2024, 1, 15, 9, 30, tzinfo=UTC)),
                    ]
                )
            ]
        )
        mock_analysis_ops.get_payload = AsyncMock(return_value=None)

        response = await api_client.get("/api/v1/dashboard/patterns")

        data = response.json()["pattern_data"]
        assert len(data["heatmap"]) == 7
        assert all(len(row) == 24 for row in data["heatmap"])
        assert data["heatmap"][1][9] == 2
        assert data["timeline"] == [
            {"date": "2024-01-15", "commits": 2, "additions": 0, "deletions": 0}
        ]
        assert data["analysis"] is None
        assert data["patterns"] is None


class TestCareer:
    @patch("codeinsight.api.v1.dashboard.analysis_ops")
    @pytest.mark.asyncio
    async def test_without_analysis(self, mock_analysis_ops, api_client: AsyncClient):
        mock_analysis_ops.get_payload = AsyncMock(return_value=None)

        response = await api_client.get("/api/v1/dashboard/career")

        assert response.json()["career_data"] == {
            "insights": None,
            "profile_data": None,
            "last_analyzed": None,
            "has_analysis": False,
        }

    @patch("codeinsight.api.v1.dashboard.analysis_ops")
    @pytest.mark.asyncio
    async def test_with_analysis(self, mock_analysis_ops, api_client: AsyncClient):
        mock_analysis_ops.get_payload = AsyncMock(
            return_value=CareerInsightsAnalysis(
                data=CareerData(profile=CareerProfile(name="The Octocat")),
                insights=career_insights_generator.fallback(),
                generated_at=GENERATED_AT,
            )
        )

        response = await api_client.get("/api/v1/dashboard/career")

        career = response.json()["career_data"]
        assert career["has_analysis"] is True
        assert career["profile_data"]["profile"]["name"] == "The Octocat"
        assert career["insights"]["career_score"] == 6


class TestRequiresSyncedProfile:
    @patch("codeinsight.api.deps.auth.user_ops")
    @pytest.mark.asyncio
    async def test_views_404_before_sync(self, mock_user_ops, anonymous_client: AsyncClient):
        mock_user_ops.get_by_github_id = AsyncMock(return_value=None)
        token = create_access_token(7, "newcomer", "gho_abc")

        response = await anonymous_client.get(
            "/api/v1/dashboard/career", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "User not found"}
