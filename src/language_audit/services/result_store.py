"""JSON persistence for audit results."""

import json
import logging
from pathlib import Path

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ResultStore:
    """Writes and reads JSON arrays of records on the local filesystem."""

    def write_records(self, path: str | Path, records: list[BaseModel]) -> Path:
        """
        Serialize records to a JSON array, replacing any existing file.

        Args:
            path: Destination file. Parent folders are created.
            records: Pydantic models, dumped with their aliases.

        Returns:
            The written path.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        payload = [record.model_dump(by_alias=True) for record in records]
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)

        logger.info("Wrote %d records to %s", len(records), path)
        return path

    def read_records(self, path: str | Path) -> list[dict]:
        """Load a JSON array written by write_records (or edited by hand)."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array in {path}")
        return data
