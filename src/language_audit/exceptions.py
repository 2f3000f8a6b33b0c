"""Exceptions raised by the language detectors."""


class LanguageDetectionError(Exception):
    """Base error for a failed language detection."""


class DetectionServiceError(LanguageDetectionError):
    """The language detection service call failed or returned no candidate."""


class LegacyDetectionError(LanguageDetectionError):
    """The in-process legacy detector failed unexpectedly."""
