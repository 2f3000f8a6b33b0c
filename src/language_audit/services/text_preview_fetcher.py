"""Fetches bounded text previews from paginated S3 storage."""

import logging

from language_audit.config import MAX_TEXT_LENGTH
from language_audit.infrastructure.s3_client import S3Client
from language_audit.utils.text_normalizer import join_pages, normalize_page

logger = logging.getLogger(__name__)


class TextPreviewFetcher:
    """Builds a document's text preview from its TextPreview/ pages."""

    KEY_TEMPLATE = "TextPreview/{fingerprint}/{page}.txt"

    def __init__(
        self,
        s3_client: S3Client,
        bucket: str,
        max_length: int = MAX_TEXT_LENGTH,
    ):
        """
        Initialize the fetcher.

        Args:
            s3_client: S3Client instance.
            bucket: Bucket holding the preview pages.
            max_length: Maximum preview length in characters.
        """
        self._s3_client = s3_client
        self._bucket = bucket
        self._max_length = max_length

    def page_key(self, file_fingerprint: str, page: int) -> str:
        """Return the S3 key of one preview page."""
        return self.KEY_TEMPLATE.format(fingerprint=file_fingerprint, page=page)

    def fetch(self, file_fingerprint: str) -> str:
        """
        Fetch and normalize the preview of one document.

        Pages 1, 2, ... are appended until the preview reaches the maximum
        length or a page does not exist. Storage errors other than a
        missing key propagate.

        Args:
            file_fingerprint: Document fingerprint (the fileurl column).

        Returns:
            Normalized preview, at most max_length characters.
        """
        page = 1
        text_preview = ""

        while len(text_preview) < self._max_length:
            content = self._s3_client.get_object_content(
                self._bucket, self.page_key(file_fingerprint, page)
            )
            if content is None:
                break

            text_preview = join_pages(text_preview, normalize_page(content))
            page += 1

        logger.debug(
            "Fetched %d page(s) for %s (%d chars)",
            page - 1,
            file_fingerprint,
            len(text_preview),
        )
        return text_preview[: self._max_length]
