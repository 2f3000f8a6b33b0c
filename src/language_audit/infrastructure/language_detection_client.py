"""HTTP client for the language detection service."""

import logging

import httpx

from language_audit.exceptions import DetectionServiceError

logger = logging.getLogger(__name__)


class LanguageDetectionClient:
    """Calls POST /language-detection and returns the top language code."""

    ENDPOINT = "/language-detection"

    def __init__(self, client: httpx.Client):
        """
        Initialize the service client.

        Args:
            client: httpx.Client configured with the service base URL.
        """
        self._client = client

    def detect(self, text: str, count: int = 1) -> str:
        """
        Ask the service for its best guess.

        Args:
            text: Text to classify.
            count: Number of candidates to request.

        Returns:
            Language code of the first candidate.

        Raises:
            DetectionServiceError: On transport errors, non-2xx responses,
                invalid JSON or a missing candidate list.
        """
        try:
            response = self._client.post(
                self.ENDPOINT,
                json={"text": text, "count": count},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise DetectionServiceError(f"Language detection request failed: {e}") from e
        except ValueError as e:
            raise DetectionServiceError(f"Invalid JSON from language detection: {e}") from e

        candidates = data.get("language") if isinstance(data, dict) else None
        if not isinstance(candidates, list) or not candidates:
            raise DetectionServiceError("Language detection returned no candidates")

        codex = candidates[0].get("codex") if isinstance(candidates[0], dict) else None
        if not isinstance(codex, str) or not codex:
            raise DetectionServiceError("Language detection candidate has no codex")

        return codex
