"""Infrastructure package."""

from language_audit.infrastructure.language_detection_client import (
    LanguageDetectionClient,
)
from language_audit.infrastructure.legacy_detector import LegacyDetector
from language_audit.infrastructure.s3_client import S3Client

__all__ = [
    "LanguageDetectionClient",
    "LegacyDetector",
    "S3Client",
]
