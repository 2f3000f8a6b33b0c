"""Models package."""

from language_audit.models.schemas import (
    ClassificationBuckets,
    DetectionResult,
    JobConfig,
    JobSummary,
    ManualAnalysisRecord,
    ManualAnalysisTally,
    MethodTally,
    ResultRecord,
    SourceRow,
)

__all__ = [
    "ClassificationBuckets",
    "DetectionResult",
    "JobConfig",
    "JobSummary",
    "ManualAnalysisRecord",
    "ManualAnalysisTally",
    "MethodTally",
    "ResultRecord",
    "SourceRow",
]
