"""
Insight analyses for a user.

Each analysis aggregates the stored repositories, asks its generator for
insights (which falls back instead of failing), and replaces the stored
analysis for its key.
"""

import logging
from typing import cast

from sqlalchemy.ext.asyncio import AsyncSession

from codeinsight.domain.analysis_operations import analysis_ops
from codeinsight.domain.repository_operations import repository_ops
from codeinsight.models.repository import Repository
from codeinsight.models.user import User
from codeinsight.schemas.analysis import (
    CareerInsightsAnalysis,
    CodeQualityAnalysis,
    DevelopmentPatternsAnalysis,
    LanguageProficiencyAnalysis,
)
from codeinsight.services import aggregation
from codeinsight.services.insights import (
    career_insights_generator,
    code_quality_generator,
    development_patterns_generator,
    language_proficiency_generator,
)

logger = logging.getLogger(__name__)


class AnalysisService:
    """Runs and stores the four analysis types."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def analyze_languages(self, user: User) -> LanguageProficiencyAnalysis:
        repositories = await repository_ops.list_by_user(self.db, user.id)
        data = aggregation.language_proficiency_data(repositories)
        insights = await language_proficiency_generator.generate(data)

        stored = await analysis_ops.upsert(
            self.db, user.id, LanguageProficiencyAnalysis(data=data, insights=insights)
        )
        logger.info(f"Language analysis stored for {user.login} ({data.total_languages} languages)")
        return cast(LanguageProficiencyAnalysis, stored)

    async def analyze_patterns(self, user: User) -> DevelopmentPatternsAnalysis:
        repositories = await repository_ops.list_by_user(self.db, user.id)
        data = aggregation.development_pattern_stats(repositories)
        insights = await development_patterns_generator.generate(data)

        stored = await analysis_ops.upsert(
            self.db, user.id, DevelopmentPatternsAnalysis(data=data, insights=insights)
        )
        logger.info(f"Pattern analysis stored for {user.login} ({data.total_commits} commits)")
        return cast(DevelopmentPatternsAnalysis, stored)

    async def career_insights(self, user: User) -> CareerInsightsAnalysis:
        repositories = await repository_ops.list_by_user(self.db, user.id)
        data = aggregation.career_data(user, repositories)
        insights = await career_insights_generator.generate(data)

        stored = await analysis_ops.upsert(
            self.db, user.id, CareerInsightsAnalysis(data=data, insights=insights)
        )
        logger.info(f"Career insights stored for {user.login}")
        return cast(CareerInsightsAnalysis, stored)

    async def analyze_code_quality(self, user: User, repository: Repository) -> CodeQualityAnalysis:
        data = aggregation.code_quality_data(repository)
        insights = await code_quality_generator.generate(data)

        stored = await analysis_ops.upsert(
            self.db,
            user.id,
            CodeQualityAnalysis(
                repository_github_id=repository.github_repo_id,
                data=data,
                insights=insights,
            ),
        )
        logger.info(f"Code quality analysis stored for {repository.full_name}")
        return cast(CodeQualityAnalysis, stored)
