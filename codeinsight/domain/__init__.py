from codeinsight.domain.analysis_operations import analysis_ops
from codeinsight.domain.repository_operations import repository_ops
from codeinsight.domain.user_operations import user_ops

__all__ = [
    "analysis_ops",
    "repository_ops",
    "user_ops",
]
