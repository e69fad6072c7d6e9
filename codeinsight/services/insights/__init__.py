"""Structured insight generation with Claude."""

from codeinsight.services.insights.base import BaseInsightGenerator
from codeinsight.services.insights.generators import (
    CareerInsightsGenerator,
    CodeQualityGenerator,
    DevelopmentPatternsGenerator,
    LanguageProficiencyGenerator,
    career_insights_generator,
    code_quality_generator,
    development_patterns_generator,
    language_proficiency_generator,
)

__all__ = [
    "BaseInsightGenerator",
    "CareerInsightsGenerator",
    "CodeQualityGenerator",
    "DevelopmentPatternsGenerator",
    "LanguageProficiencyGenerator",
    "career_insights_generator",
    "code_quality_generator",
    "development_patterns_generator",
    "language_proficiency_generator",
]
