"""Pydantic schemas for stored JSON payloads and generated insights."""

from codeinsight.schemas.analysis import (
    AnalysisPayload,
    CareerInsightsAnalysis,
    CodeQualityAnalysis,
    DevelopmentPatternsAnalysis,
    LanguageProficiencyAnalysis,
    dump_analysis,
    parse_analysis,
)
from codeinsight.schemas.commit import CommitAuthor, CommitStats, CommitSummary
from codeinsight.schemas.insights import (
    CareerInsights,
    CodeQualityCategories,
    CodeQualityInsights,
    DevelopmentPatternInsights,
    LanguageAssessment,
    LanguageProficiencyInsights,
    WorkPatterns,
)
from codeinsight.schemas.statistics import (
    CareerData,
    CareerProfile,
    CareerRepository,
    CodeChanges,
    CodeQualityData,
    CommitPatternSummary,
    DevelopmentPatternStats,
    LanguageCount,
    LanguageProficiencyData,
    LanguageShare,
    OverviewStats,
    RecentCommit,
    RepositoryStats,
    RepositorySnapshot,
    TimelineDay,
    TopRepository,
)

__all__ = [
    "AnalysisPayload",
    "CareerData",
    "CareerInsights",
    "CareerInsightsAnalysis",
    "CareerProfile",
    "CareerRepository",
    "CodeChanges",
    "CodeQualityAnalysis",
    "CodeQualityCategories",
    "CodeQualityData",
    "CodeQualityInsights",
    "CommitAuthor",
    "CommitPatternSummary",
    "CommitStats",
    "CommitSummary",
    "DevelopmentPatternInsights",
    "DevelopmentPatternStats",
    "DevelopmentPatternsAnalysis",
    "LanguageAssessment",
    "LanguageCount",
    "LanguageProficiencyAnalysis",
    "LanguageProficiencyData",
    "LanguageProficiencyInsights",
    "LanguageShare",
    "OverviewStats",
    "RecentCommit",
    "RepositoryStats",
    "RepositorySnapshot",
    "TimelineDay",
    "TopRepository",
    "WorkPatterns",
    "dump_analysis",
    "parse_analysis",
]
