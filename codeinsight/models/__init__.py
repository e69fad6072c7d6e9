from codeinsight.models.analysis import Analysis, AnalysisType
from codeinsight.models.repository import MAX_STORED_COMMITS, Repository, RepositoryRead
from codeinsight.models.user import User, UserRead

__all__ = [
    "Analysis",
    "AnalysisType",
    "MAX_STORED_COMMITS",
    "Repository",
    "RepositoryRead",
    "User",
    "UserRead",
]
