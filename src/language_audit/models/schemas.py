"""Pydantic models for the language detection audit."""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class SourceRow(BaseModel):
    """A single row of a job's materials file."""

    model_config = ConfigDict(extra="ignore")

    id: str
    fileurl: str
    name: str = ""


class JobConfig(BaseModel):
    """Static definition of one audit job."""

    key: str
    materials: str
    current_language: str
    expected_language: str
    output: str
    aggregated_results_folder: str

    @model_validator(mode="after")
    def _check_languages(self) -> "JobConfig":
        # Equal labels would put every matching record in two buckets.
        if self.current_language == self.expected_language:
            raise ValueError(
                f"Job '{self.key}': current_language and expected_language "
                f"must differ (both are '{self.current_language}')"
            )
        return self


class DetectionResult(BaseModel):
    """Language guesses from both detectors for one text."""

    new: str
    old: str = ""


class ResultRecord(BaseModel):
    """Per-document audit result, serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str
    name: str
    fileurl: str
    current_language: str
    expected_language: str
    new_detected_language: str
    old_detected_language: str
    text_preview_length: int
    text_preview: str


class ManualAnalysisRecord(ResultRecord):
    """A sampled record annotated by a reviewer."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    fileurl: str = ""
    old_detected_language: str = ""
    text_preview_length: int = 0
    text_preview: str = ""
    new_analysis: str = ""
    old_analysis: str = ""


class ClassificationBuckets(BaseModel):
    """Records grouped by how the new detector compares to the labels."""

    different: list[ResultRecord] = []
    same_as_current: list[ResultRecord] = []
    same_as_expected: list[ResultRecord] = []

    def named_buckets(self) -> list[tuple[str, list[ResultRecord]]]:
        """Return (file stem, bucket) pairs in output order."""
        return [
            ("different-than-expected-and-current", self.different),
            ("same-as-current", self.same_as_current),
            ("same-as-expected", self.same_as_expected),
        ]


class MethodTally(BaseModel):
    """Correct/incorrect counters for one detection method."""

    correct: int = 0
    incorrect: int = 0


class ManualAnalysisTally(BaseModel):
    """Totals of reviewer verdicts across all sample files."""

    new_method: MethodTally = Field(default_factory=MethodTally)
    old_method: MethodTally = Field(default_factory=MethodTally)
    total: int = 0


class JobSummary(BaseModel):
    """Result of running one audit job."""

    key: str
    total: int
    different: int
    same_as_current: int
    same_as_expected: int
