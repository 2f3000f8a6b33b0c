"""S3 client wrapper for AWS operations."""

import logging
from typing import Any

from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {"NoSuchKey", "404"}


class S3Client:
    """Handles S3 operations."""

    def __init__(self, client: Any):
        """
        Initialize S3 client wrapper.

        Args:
            client: boto3 S3 client instance.
        """
        self._client = client

    def get_object_content(self, bucket: str, key: str) -> str | None:
        """
        Get object content as string.

        Args:
            bucket: S3 bucket name.
            key: S3 object key.

        Returns:
            Object content as string, or None if the key does not exist.

        Raises:
            ClientError: For any failure other than a missing key.
        """
        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
        except ClientError as e:
            if e.response["Error"]["Code"] in NOT_FOUND_CODES:
                logger.debug("No object at s3://%s/%s", bucket, key)
                return None
            logger.error("Failed to get object s3://%s/%s: %s", bucket, key, e)
            raise

        content = response["Body"].read().decode("utf-8")
        logger.debug("Read content from s3://%s/%s", bucket, key)
        return content
