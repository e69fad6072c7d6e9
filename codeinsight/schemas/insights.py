"""Pydantic schemas for generated insights.

Each model doubles as the input schema of the tool the model is forced to
call, so field descriptions are written for the model as much as for readers.
Code-quality insights keep camelCase names on the wire.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LanguageAssessment(BaseModel):
    language: str
    proficiency: Literal["Beginner", "Intermediate", "Advanced"]
    score: int = Field(ge=1, le=10)
    recommendation: str


class LanguageProficiencyInsights(BaseModel):
    """Assessment of a developer's language portfolio."""

    summary: str = Field(description="Two or three sentence overview of the language portfolio")
    recommendations: list[str] = Field(description="Concrete next steps")
    strengths: list[str]
    improvements: list[str]
    overall_score: int = Field(ge=1, le=10)
    language_assessments: list[LanguageAssessment] = Field(default_factory=list)


class WorkPatterns(BaseModel):
    best_hours: str
    frequency: str
    consistency: str


class DevelopmentPatternInsights(BaseModel):
    """Assessment of when and how consistently a developer commits."""

    summary: str
    recommendations: list[str]
    strengths: list[str]
    improvements: list[str]
    productivity_score: int = Field(ge=1, le=10)
    consistency_rating: Literal["Low", "Medium", "High"]
    work_patterns: WorkPatterns


class CareerInsights(BaseModel):
    """Career positioning derived from profile and repository data."""

    summary: str
    current_level: Literal["Junior", "Mid-Level", "Senior", "Lead", "Principal"]
    recommendations: list[str]
    next_steps: list[str]
    market_insights: str
    career_score: int = Field(ge=1, le=10)
    skill_gaps: list[str]
    growth_opportunities: list[str]


class CodeQualityCategories(BaseModel):
    architecture: int = Field(ge=1, le=10)
    documentation: int = Field(ge=1, le=10)
    testing: int = Field(ge=1, le=10)
    consistency: int = Field(ge=1, le=10)
    complexity: int = Field(ge=1, le=10)


class CodeQualityInsights(BaseModel):
    """Code-quality review of a single repository."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    overall_score: int = Field(ge=1, le=10)
    maintainability_score: int = Field(ge=1, le=10)
    code_organization: str
    technical_debt: str
    best_practices: str
    strengths: list[str]
    weaknesses: list[str]
    recommendations: list[str]
    industry_comparison: str
    categories: CodeQualityCategories
