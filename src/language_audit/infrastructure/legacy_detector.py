"""In-process statistical language detector (the legacy method)."""

import logging

from langdetect import DetectorFactory, LangDetectException, detect_langs
from langdetect.detector_factory import init_factory

from language_audit.exceptions import LegacyDetectionError

logger = logging.getLogger(__name__)

# langdetect is randomized; a fixed seed keeps guesses stable between runs.
DetectorFactory.seed = 0


class LegacyDetector:
    """Wraps langdetect to return its single top guess."""

    def __init__(self):
        # Load language profiles once, before worker threads share the factory.
        init_factory()

    def detect(self, text: str) -> str:
        """
        Return the top language code for text.

        Returns an empty string when the detector declines to guess,
        e.g. on empty or featureless text.

        Raises:
            LegacyDetectionError: On any other detector failure.
        """
        if not text.strip():
            return ""

        try:
            guesses = detect_langs(text)
        except LangDetectException as e:
            logger.debug("Legacy detector declined to guess: %s", e)
            return ""
        except Exception as e:
            raise LegacyDetectionError(f"Legacy language detection failed: {e}") from e

        if not guesses:
            return ""
        return guesses[0].lang
