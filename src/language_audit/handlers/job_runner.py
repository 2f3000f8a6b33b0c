"""Handler running one audit job end to end."""

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait

from language_audit.models.schemas import JobConfig, JobSummary, ResultRecord, SourceRow
from language_audit.services.dual_detector import DualLanguageDetector
from language_audit.services.materials_reader import MaterialsReader
from language_audit.services.result_classifier import ResultClassifier
from language_audit.services.result_store import ResultStore
from language_audit.services.sampler import Sampler
from language_audit.services.text_preview_fetcher import TextPreviewFetcher

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 16


def process_row(
    row: SourceRow,
    job: JobConfig,
    fetcher: TextPreviewFetcher,
    detector: DualLanguageDetector,
) -> ResultRecord:
    """
    Fetch the preview of one document and detect its language.

    Args:
        row: Materials row.
        job: Job the row belongs to.
        fetcher: Preview fetcher.
        detector: Dual language detector.

    Returns:
        The document's ResultRecord.
    """
    text_preview = fetcher.fetch(row.fileurl)
    detection = detector.detect(text_preview)

    return ResultRecord(
        id=row.id,
        name=row.name,
        fileurl=row.fileurl,
        current_language=job.current_language,
        expected_language=job.expected_language,
        new_detected_language=detection.new,
        old_detected_language=detection.old,
        text_preview_length=len(text_preview),
        text_preview=text_preview,
    )


def process_rows(
    rows: list[SourceRow],
    job: JobConfig,
    fetcher: TextPreviewFetcher,
    detector: DualLanguageDetector,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[ResultRecord]:
    """
    Process all rows on a bounded thread pool.

    Results keep the input order. The first failing row cancels the rows
    not yet started and its exception is re-raised once in-flight rows
    finish.
    """
    if not rows:
        return []

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(process_row, row, job, fetcher, detector) for row in rows
        ]
        done, _ = wait(futures, return_when=FIRST_EXCEPTION)

        for future in futures:
            if future in done and future.exception() is not None:
                for pending in futures:
                    pending.cancel()
                raise future.exception()

        return [future.result() for future in futures]


def run_job(
    job: JobConfig,
    materials_reader: MaterialsReader,
    fetcher: TextPreviewFetcher,
    detector: DualLanguageDetector,
    result_store: ResultStore,
    classifier: ResultClassifier,
    sampler: Sampler,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> JobSummary:
    """
    Run one audit job.

    1. Read the materials file
    2. Fetch previews and detect languages for every row
    3. Write full results
    4. Classify and write the buckets
    5. Sample each bucket and write the samples

    Nothing is written if any row fails.

    Returns:
        JobSummary with bucket sizes.
    """
    logger.info("=" * 60)
    logger.info("Running job: %s", job.key)
    logger.info("=" * 60)

    logger.info("Reading file %s...", job.materials)
    rows = materials_reader.read(job.materials)

    logger.info("Fetching results for %d rows...", len(rows))
    records = process_rows(rows, job, fetcher, detector, max_workers=max_workers)

    logger.info("Writing results...")
    result_store.write_records(job.output, records)

    logger.info("Analysing results for key: %s...", job.key)
    buckets = classifier.classify(records)
    classifier.write(buckets, job.aggregated_results_folder)

    summary = JobSummary(
        key=job.key,
        total=len(records),
        different=len(buckets.different),
        same_as_current=len(buckets.same_as_current),
        same_as_expected=len(buckets.same_as_expected),
    )
    logger.info("Different than expected and current: %d", summary.different)
    logger.info("Same as current: %d", summary.same_as_current)
    logger.info("Same as expected: %d", summary.same_as_expected)
    logger.info("Total: %d", summary.total)

    logger.info("Getting sample for manual analysis...")
    sampler.write(sampler.sample_all(buckets), job.aggregated_results_folder)

    logger.info("Done!")
    return summary


def run_jobs(jobs: list[JobConfig], **dependencies) -> list[JobSummary]:
    """Run jobs one after another. A failing job stops the remaining ones."""
    return [run_job(job, **dependencies) for job in jobs]
