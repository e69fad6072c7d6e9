"""API endpoint tests for insight generation routes."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from codeinsight.schemas.analysis import (
    CareerInsightsAnalysis,
    CodeQualityAnalysis,
    DevelopmentPatternsAnalysis,
    LanguageProficiencyAnalysis,
)
from codeinsight.schemas.statistics import (
    CareerData,
    CareerProfile,
    CodeQualityData,
    CommitPatternSummary,
    DevelopmentPatternStats,
    LanguageProficiencyData,
    LanguageShare,
    RepositorySnapshot,
)
from codeinsight.services.insights import (
    career_insights_generator,
    code_quality_generator,
    development_patterns_generator,
    language_proficiency_generator,
)

from tests.helpers.mock_factories import make_repository

GENERATED_AT = datetime(2024, 2, 1, 12, 0, tzinfo=UTC)


def _language_analysis() -> LanguageProficiencyAnalysis:
    return LanguageProficiencyAnalysis(
        data=LanguageProficiencyData(
            languages=[
                LanguageShare(language="Python", bytes=500, percentage=83.33, repositories=2),
                LanguageShare(language="Shell", bytes=100, percentage=16.67, repositories=1),
            ],
            total_languages=2,
            dominant_language="Python",
        ),
        insights=language_proficiency_generator.fallback(),
        generated_at=GENERATED_AT,
    )


def _code_quality_analysis(repo_id: int) -> CodeQualityAnalysis:
    return CodeQualityAnalysis(
        repository_github_id=repo_id,
        data=CodeQualityData(
            repository=RepositorySnapshot(name="hello-world"),
            commit_patterns=CommitPatternSummary(),
        ),
        insights=code_quality_generator.fallback(),
        generated_at=GENERATED_AT,
    )


class TestAnalyzeLanguages:
    @patch("codeinsight.api.v1.ai.AnalysisService")
    @pytest.mark.asyncio
    async def test_response_shape(self, mock_service_cls, api_client: AsyncClient, test_user):
        mock_service_cls.return_value.analyze_languages = AsyncMock(return_value=_language_analysis())

        response = await api_client.post("/api/v1/ai/analyze-languages")

        assert response.status_code == 200
        analysis = response.json()["analysis"]
        assert analysis["total_languages"] == 2
        assert analysis["dominant_language"] == "Python"
        assert analysis["language_stats"][0]["percentage"] == 83.33
        assert analysis["insights"]["overall_score"] == 7
        mock_service_cls.return_value.analyze_languages.assert_awaited_once_with(test_user)


class TestAnalyzePatterns:
    @patch("codeinsight.api.v1.ai.AnalysisService")
    @pytest.mark.asyncio
    async def test_response_shape(self, mock_service_cls, api_client: AsyncClient):
        mock_service_cls.return_value.analyze_patterns = AsyncMock(
            return_value=DevelopmentPatternsAnalysis(
                data=DevelopmentPatternStats(total_commits=4, most_active_day=1, most_active_hour=9),
                insights=development_patterns_generator.fallback(),
            )
        )

        response = await api_client.post("/api/v1/ai/analyze-patterns")

        analysis = response.json()["analysis"]
        assert analysis["patterns"]["total_commits"] == 4
        assert analysis["patterns"]["most_active_hour"] == 9
        assert analysis["insights"]["consistency_rating"] == "Medium"


class TestCareerInsights:
    @patch("codeinsight.api.v1.ai.AnalysisService")
    @pytest.mark.asyncio
    async def test_response_shape(self, mock_service_cls, api_client: AsyncClient):
        mock_service_cls.return_value.career_insights = AsyncMock(
            return_value=CareerInsightsAnalysis(
                data=CareerData(profile=CareerProfile(name="The Octocat", account_age_years=9)),
                insights=career_insights_generator.fallback(),
            )
        )

        response = await api_client.post("/api/v1/ai/career-insights")

        analysis = response.json()["analysis"]
        assert analysis["career_data"]["profile"]["account_age_years"] == 9
        assert analysis["insights"]["current_level"] == "Mid-Level"


class TestListAnalyses:
    @patch("codeinsight.api.v1.ai.analysis_ops")
    @pytest.mark.asyncio
    async def test_lists_every_type(self, mock_ops, api_client: AsyncClient):
        mock_ops.list_by_user = AsyncMock(
            return_value=[_code_quality_analysis(7), _language_analysis()]
        )

        response = await api_client.get("/api/v1/ai/analyses")

        analyses = response.json()["analyses"]
        assert [a["type"] for a in analyses] == ["code_quality", "language_proficiency"]
        assert analyses[0]["repository_github_id"] == 7
        assert "overallScore" in analyses[0]["insights"]
        assert analyses[1]["repository_github_id"] is None


class TestAnalyzeCodeQuality:
    @patch("codeinsight.api.v1.ai.repository_ops")
    @pytest.mark.asyncio
    async def test_unknown_repository(self, mock_ops, api_client: AsyncClient):
        mock_ops.get_by_github_id = AsyncMock(return_value=None)

        response = await api_client.post("/api/v1/ai/analyze-code-quality/999")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Repository not found"}

    @patch("codeinsight.api.v1.ai.AnalysisService")
    @patch("codeinsight.api.v1.ai.repository_ops")
    @pytest.mark.asyncio
    async def test_camel_case_scores(
        self, mock_ops, mock_service_cls, api_client: AsyncClient, test_user, mock_db
    ):
        repo = make_repository(user_id=test_user.id)
        mock_ops.get_by_github_id = AsyncMock(return_value=repo)
        mock_service_cls.return_value.analyze_code_quality = AsyncMock(
            return_value=_code_quality_analysis(repo.github_repo_id)
        )

        response = await api_client.post("/api/v1/ai/analyze-code-quality/1296269")

        assert response.status_code == 200
        body = response.json()
        assert body["repository"] == {"id": 1296269, "name": "hello-world", "language": "Python"}
        assert body["code_quality"]["overallScore"] == 7
        assert body["code_quality"]["categories"]["testing"] == 5
        mock_ops.get_by_github_id.assert_awaited_once_with(mock_db, test_user.id, 1296269)

    @pytest.mark.asyncio
    async def test_non_numeric_id(self, api_client: AsyncClient):
        response = await api_client.post("/api/v1/ai/analyze-code-quality/abc")

        assert response.status_code == 422
        assert response.json()["success"] is False
