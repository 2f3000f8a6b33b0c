"""Draws random samples of each bucket for manual review."""

import logging
import random
from pathlib import Path

from language_audit.config import SAMPLE_SIZE
from language_audit.models.schemas import ClassificationBuckets, ResultRecord
from language_audit.services.result_store import ResultStore

logger = logging.getLogger(__name__)

MANUAL_ANALYSIS_FOLDER = "manual-analysis"


class Sampler:
    """Picks up to sample_size records per bucket."""

    def __init__(
        self,
        result_store: ResultStore,
        sample_size: int = SAMPLE_SIZE,
        rng: random.Random | None = None,
    ):
        """
        Initialize the sampler.

        Args:
            result_store: Store used to write sample files.
            sample_size: Maximum records per sample.
            rng: Random source. Defaults to an unseeded generator, so
                samples differ between runs.
        """
        self._result_store = result_store
        self._sample_size = sample_size
        self._rng = rng or random.Random()

    def sample(self, bucket: list[ResultRecord]) -> list[ResultRecord]:
        """Return min(sample_size, len(bucket)) records from a shuffled copy."""
        shuffled = list(bucket)
        self._rng.shuffle(shuffled)
        return shuffled[: self._sample_size]

    def sample_all(
        self, buckets: ClassificationBuckets
    ) -> list[tuple[str, list[ResultRecord]]]:
        """Sample every bucket independently."""
        return [(name, self.sample(bucket)) for name, bucket in buckets.named_buckets()]

    def write(
        self,
        samples: list[tuple[str, list[ResultRecord]]],
        folder: str | Path,
    ) -> list[Path]:
        """Write samples as <folder>/manual-analysis/<bucket-name>-sample.json."""
        target = Path(folder) / MANUAL_ANALYSIS_FOLDER
        return [
            self._result_store.write_records(target / f"{name}-sample.json", sample)
            for name, sample in samples
        ]
