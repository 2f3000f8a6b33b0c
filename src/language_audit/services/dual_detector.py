"""Runs the legacy and the service language detectors side by side."""

import logging

from language_audit.exceptions import LanguageDetectionError
from language_audit.infrastructure.language_detection_client import (
    LanguageDetectionClient,
)
from language_audit.infrastructure.legacy_detector import LegacyDetector
from language_audit.models.schemas import DetectionResult

logger = logging.getLogger(__name__)


class DualLanguageDetector:
    """Gets one language guess from each detector for the same text."""

    def __init__(
        self,
        detection_client: LanguageDetectionClient,
        legacy_detector: LegacyDetector,
    ):
        self._detection_client = detection_client
        self._legacy_detector = legacy_detector

    def detect_new(self, text: str) -> str:
        """Top guess of the detection service. Raises DetectionServiceError."""
        return self._detection_client.detect(text, count=1)

    def detect_old(self, text: str) -> str:
        """Top guess of the legacy detector, or "". Raises LegacyDetectionError."""
        return self._legacy_detector.detect(text)

    def detect(self, text: str, best_effort: bool = False) -> DetectionResult:
        """
        Detect the language of text with both methods.

        Args:
            text: Text preview.
            best_effort: When True, a failing detector is logged and its
                guess recorded as an empty string instead of raising.

        Returns:
            DetectionResult with the new and old guesses.
        """
        new = self._guard(self.detect_new, text, best_effort)
        old = self._guard(self.detect_old, text, best_effort)
        return DetectionResult(new=new, old=old)

    @staticmethod
    def _guard(detect_fn, text: str, best_effort: bool) -> str:
        if not best_effort:
            return detect_fn(text)
        try:
            return detect_fn(text)
        except LanguageDetectionError as e:
            logger.warning("Detection failed, recording empty guess: %s", e)
            return ""
