"""Classifies results by agreement of the new detector with the labels."""

import logging
from pathlib import Path

from language_audit.models.schemas import ClassificationBuckets, ResultRecord
from language_audit.services.result_store import ResultStore

logger = logging.getLogger(__name__)


def classify(records: list[ResultRecord]) -> ClassificationBuckets:
    """
    Split records into the three agreement buckets.

    Each rule is evaluated on its own:
      - same_as_current: new guess equals the current label
      - same_as_expected: new guess equals the expected label
      - different: new guess equals neither

    When current and expected differ (enforced by JobConfig) every record
    lands in exactly one bucket. Input order is kept within each bucket.
    """
    buckets = ClassificationBuckets()

    for record in records:
        detected = record.new_detected_language
        if detected == record.current_language:
            buckets.same_as_current.append(record)
        if detected == record.expected_language:
            buckets.same_as_expected.append(record)
        if detected not in (record.current_language, record.expected_language):
            buckets.different.append(record)

    return buckets


class ResultClassifier:
    """Classifies records and writes each bucket to its own file."""

    def __init__(self, result_store: ResultStore):
        self._result_store = result_store

    def classify(self, records: list[ResultRecord]) -> ClassificationBuckets:
        """Split records into the three buckets."""
        return classify(records)

    def write(self, buckets: ClassificationBuckets, folder: str | Path) -> list[Path]:
        """
        Write each bucket as <folder>/<bucket-name>.json.

        Returns:
            Written paths in bucket order.
        """
        folder = Path(folder)
        return [
            self._result_store.write_records(folder / f"{name}.json", bucket)
            for name, bucket in buckets.named_buckets()
        ]
