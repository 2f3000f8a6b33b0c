"""Configuration management for the language detection audit."""

import json
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from language_audit.models.schemas import JobConfig

# Load .env file from project root
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)

DEFAULT_JOBS_FILE = Path(__file__).parent.parent.parent / ".config" / "jobs.json"

MAX_TEXT_LENGTH = 24000
SAMPLE_SIZE = 25

# Built-in job definitions, used when no jobs file is present.
# Each job audits materials suspected to carry the other job's label.
DEFAULT_JOBS: list[JobConfig] = [
    JobConfig(
        key="pt",
        materials="materiais-pd-marcados-como-es.csv",
        current_language="es",
        expected_language="pt",
        output="results/results-materiais-pd-marcados-como-es.json",
        aggregated_results_folder="aggregated-results/materiais-pd",
    ),
    JobConfig(
        key="es",
        materials="materiais-studenta-marcados-como-pt.csv",
        current_language="pt",
        expected_language="es",
        output="results/results-materiais-studenta-marcados-como-pt.json",
        aggregated_results_folder="aggregated-results/materiais-studenta",
    ),
]


@dataclass
class Config:
    """Audit configuration loaded from environment variables."""

    # AWS
    aws_region: str = os.getenv("REGION") or os.getenv("AWS_REGION", "us-east-1")
    aws_profile: str = os.getenv("AWS_PROFILE", "")

    # S3 bucket holding the TextPreview/<fingerprint>/<page>.txt objects
    bucket: str = os.getenv("BUCKET", "")

    # Language detection service
    language_detection_url: str = os.getenv(
        "LANGUAGE_DETECTION_URL", "http://localhost:8064"
    )
    detection_timeout: float = float(os.getenv("DETECTION_TIMEOUT", "60"))

    # Pipeline limits
    max_text_length: int = int(os.getenv("MAX_TEXT_LENGTH", str(MAX_TEXT_LENGTH)))
    sample_size: int = int(os.getenv("SAMPLE_SIZE", str(SAMPLE_SIZE)))
    max_workers: int = int(os.getenv("MAX_WORKERS", "16"))

    jobs_file: str = os.getenv("JOBS_FILE", str(DEFAULT_JOBS_FILE))

    def validate(self) -> None:
        """Validate required configuration."""
        if not self.bucket:
            raise ValueError("BUCKET environment variable is required")
        if self.max_workers < 1:
            raise ValueError("MAX_WORKERS must be at least 1")


def load_jobs(jobs_file: str | Path | None = None) -> list[JobConfig]:
    """
    Load job definitions from a JSON file.

    The file holds a list of objects with the JobConfig fields. When it
    does not exist, the built-in jobs are returned.

    Args:
        jobs_file: Path to the JSON file. Defaults to the configured one.

    Returns:
        Ordered list of JobConfig.
    """
    path = Path(jobs_file or config.jobs_file)
    if not path.exists():
        return list(DEFAULT_JOBS)

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    return [JobConfig(**entry) for entry in data]


config = Config()
