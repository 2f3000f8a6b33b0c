"""Reads a job's materials CSV."""

import csv
import logging
from pathlib import Path

from language_audit.models.schemas import SourceRow

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("id", "fileurl", "name")


class MaterialsReader:
    """Loads SourceRow entries from a delimited file."""

    def __init__(self, delimiter: str = ","):
        self._delimiter = delimiter

    def read(self, path: str | Path) -> list[SourceRow]:
        """
        Read all rows of a materials file.

        Args:
            path: CSV file with at least the id, fileurl and name columns.

        Returns:
            Rows in file order.

        Raises:
            ValueError: If a required column is missing from the header.
        """
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f, delimiter=self._delimiter)
            missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
            if missing:
                raise ValueError(f"{path}: missing column(s) {', '.join(missing)}")

            # Extra cells land under a None key, missing cells are None
            rows = [
                SourceRow.model_validate({k: v for k, v in row.items() if k and v is not None})
                for row in reader
            ]

        logger.info("Read %d rows from %s", len(rows), path)
        return rows
