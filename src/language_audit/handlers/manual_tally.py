"""Handler tallying reviewer verdicts in annotated sample files."""

import logging
from pathlib import Path

from language_audit.models.schemas import ManualAnalysisRecord, ManualAnalysisTally
from language_audit.services.result_store import ResultStore
from language_audit.services.sampler import MANUAL_ANALYSIS_FOLDER

logger = logging.getLogger(__name__)

CORRECT_MARKER = "Correto"

SAMPLE_FILES = (
    "different-than-expected-and-current-sample.json",
    "same-as-current-sample.json",
    "same-as-expected-sample.json",
)


def load_manual_analysis(
    folder: str | Path, result_store: ResultStore
) -> list[ManualAnalysisRecord]:
    """Load all annotated sample records under <folder>/manual-analysis/."""
    target = Path(folder) / MANUAL_ANALYSIS_FOLDER
    records = []
    for filename in SAMPLE_FILES:
        for item in result_store.read_records(target / filename):
            records.append(ManualAnalysisRecord.model_validate(item))
    return records


def count_manual_analysis(
    folders: list[str | Path],
    result_store: ResultStore,
) -> ManualAnalysisTally:
    """
    Count correct/incorrect verdicts per detection method.

    A verdict counts as correct only when it is exactly "Correto";
    anything else, including a missing verdict, is incorrect.

    Args:
        folders: Aggregated results folders of the annotated jobs.
        result_store: Store used to read the sample files.

    Returns:
        ManualAnalysisTally across all folders.
    """
    tally = ManualAnalysisTally()

    for folder in folders:
        records = load_manual_analysis(folder, result_store)
        logger.info("Loaded %d annotated records from %s", len(records), folder)

        for record in records:
            tally.total += 1

            if record.new_analysis == CORRECT_MARKER:
                tally.new_method.correct += 1
            else:
                tally.new_method.incorrect += 1

            if record.old_analysis == CORRECT_MARKER:
                tally.old_method.correct += 1
            else:
                tally.old_method.incorrect += 1

    logger.info(
        "New method: %d correct, %d incorrect",
        tally.new_method.correct,
        tally.new_method.incorrect,
    )
    logger.info(
        "Old method: %d correct, %d incorrect",
        tally.old_method.correct,
        tally.old_method.incorrect,
    )
    return tally
