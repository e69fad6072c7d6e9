"""The four insight generators, one per analysis type."""

from codeinsight.schemas.insights import (
    CareerInsights,
    CodeQualityCategories,
    CodeQualityInsights,
    DevelopmentPatternInsights,
    LanguageProficiencyInsights,
    WorkPatterns,
)
from codeinsight.schemas.statistics import (
    CareerData,
    CodeQualityData,
    DevelopmentPatternStats,
    LanguageProficiencyData,
)
from codeinsight.services.insights.base import BaseInsightGenerator


class LanguageProficiencyGenerator(
    BaseInsightGenerator[LanguageProficiencyData, LanguageProficiencyInsights]
):
    output_model = LanguageProficiencyInsights
    tool_name = "save_language_proficiency"
    tool_description = "Save the language proficiency assessment for this developer."

    def build_prompt(self, data_json: str) -> str:
        return f"""Analyze this developer's language proficiency based on their GitHub repositories.

Language statistics:
{data_json}

Provide:
1. An overall skill assessment and summary
2. A proficiency level (Beginner/Intermediate/Advanced) and 1-10 score per language
3. Specific recommendations for skill development
4. Strengths and areas to improve

Weigh usage percentage and repository count per language, the diversity of the
stack, and market demand for these skills. Scores are integers from 1 to 10."""

    def fallback(self) -> LanguageProficiencyInsights:
        return LanguageProficiencyInsights(
            summary="Analysis completed successfully",
            recommendations=[
                "Continue developing your strongest languages",
                "Consider learning trending technologies",
            ],
            strengths=["Diverse language portfolio"],
            improvements=["Focus on depth in key languages"],
            overall_score=7,
            language_assessments=[],
        )


class DevelopmentPatternsGenerator(
    BaseInsightGenerator[DevelopmentPatternStats, DevelopmentPatternInsights]
):
    output_model = DevelopmentPatternInsights
    tool_name = "save_development_patterns"
    tool_description = "Save the development pattern assessment for this developer."

    def build_prompt(self, data_json: str) -> str:
        return f"""Analyze this developer's coding patterns and work habits.

Development patterns (weekdays are numbered with Sunday = 0, hours are UTC):
{data_json}

Assess:
1. Work schedule and productivity patterns
2. Coding consistency and development habits
3. Commit patterns and project management
4. Areas for productivity improvement
5. Work-life balance indicators

Scores are integers from 1 to 10."""

    def fallback(self) -> DevelopmentPatternInsights:
        return DevelopmentPatternInsights(
            summary="Development patterns analyzed successfully",
            recommendations=["Maintain consistent coding schedule", "Focus on meaningful commits"],
            strengths=["Regular development activity"],
            improvements=["Consider work-life balance"],
            productivity_score=7,
            consistency_rating="Medium",
            work_patterns=WorkPatterns(
                best_hours="Various times",
                frequency="Regular",
                consistency="Good",
            ),
        )


class CareerInsightsGenerator(BaseInsightGenerator[CareerData, CareerInsights]):
    output_model = CareerInsights
    tool_name = "save_career_insights"
    tool_description = "Save career insights and recommendations for this developer."

    def build_prompt(self, data_json: str) -> str:
        return f"""As a senior software engineering career advisor, analyze this developer's GitHub profile.

Career data:
{data_json}

Assess:
1. Current skill level and market positioning
2. Career trajectory and growth potential
3. Technical strengths and skill gaps
4. Alignment with industry trends
5. Specific, actionable next steps for career advancement

Consider years of experience, project complexity, stack relevance and community
engagement. The career score is an integer from 1 to 10."""

    def fallback(self) -> CareerInsights:
        return CareerInsights(
            summary="Career analysis completed successfully",
            current_level="Mid-Level",
            recommendations=["Build portfolio projects", "Contribute to open source"],
            next_steps=["Focus on one technology stack", "Create production-ready applications"],
            market_insights="Strong demand for full-stack developers",
            career_score=6,
            skill_gaps=["Advanced system design", "Leadership skills"],
            growth_opportunities=["Technical mentoring", "Architecture design"],
        )


class CodeQualityGenerator(BaseInsightGenerator[CodeQualityData, CodeQualityInsights]):
    output_model = CodeQualityInsights
    tool_name = "save_code_quality"
    tool_description = "Save the code quality assessment for this repository."

    def build_prompt(self, data_json: str) -> str:
        return f"""As a senior software engineer and code quality expert, analyze this GitHub repository.

Repository analysis:
{data_json}

Assess:
1. Overall code quality
2. Code organization and architecture
3. Technical debt indicators
4. Adherence to best practices
5. Maintainability and complexity
6. How it compares with similar projects

Consider language choice, project structure, commit patterns and documentation.
All scores, including each category, are integers from 1 to 10."""

    def fallback(self) -> CodeQualityInsights:
        return CodeQualityInsights(
            overall_score=7,
            maintainability_score=7,
            code_organization="Repository shows good organization with clear structure",
            technical_debt="Technical debt appears manageable with room for improvement",
            best_practices="Follows standard development practices with some areas for enhancement",
            strengths=["Clear project structure", "Consistent coding style"],
            weaknesses=["Could improve documentation", "Consider adding more tests"],
            recommendations=[
                "Add comprehensive README documentation",
                "Implement automated testing",
                "Consider adding CI/CD pipeline",
                "Add code quality tools and linting",
            ],
            industry_comparison="Meets industry standards for similar projects",
            categories=CodeQualityCategories(
                architecture=7,
                documentation=6,
                testing=5,
                consistency=7,
                complexity=6,
            ),
        )


language_proficiency_generator = LanguageProficiencyGenerator()
development_patterns_generator = DevelopmentPatternsGenerator()
career_insights_generator = CareerInsightsGenerator()
code_quality_generator = CodeQualityGenerator()
