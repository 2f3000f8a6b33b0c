"""Main entry point for the language detection audit."""

import argparse
import logging
import sys

from language_audit.config import config, load_jobs
from language_audit.handlers.job_runner import run_jobs
from language_audit.handlers.manual_tally import count_manual_analysis
from language_audit.infrastructure.dependency_injection import DependenciesContainer
from language_audit.models.schemas import JobConfig

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def select_jobs(jobs: list[JobConfig], keys: list[str]) -> list[JobConfig]:
    """Keep the jobs named in keys, in configuration order. No keys keeps all."""
    if not keys:
        return jobs

    known = {job.key for job in jobs}
    unknown = [key for key in keys if key not in known]
    if unknown:
        raise ValueError(f"Unknown job(s): {', '.join(unknown)}")

    return [job for job in jobs if job.key in keys]


def run_audit(jobs: list[JobConfig], container: DependenciesContainer) -> None:
    """Run the given jobs with dependencies from the container."""
    config.validate()

    summaries = run_jobs(
        jobs,
        materials_reader=container.materials_reader(),
        fetcher=container.text_preview_fetcher(),
        detector=container.dual_detector(),
        result_store=container.result_store(),
        classifier=container.result_classifier(),
        sampler=container.sampler(),
        max_workers=config.max_workers,
    )

    for summary in summaries:
        logger.info(
            "[%s] total=%d different=%d same_as_current=%d same_as_expected=%d",
            summary.key,
            summary.total,
            summary.different,
            summary.same_as_current,
            summary.same_as_expected,
        )


def run_tally(jobs: list[JobConfig], container: DependenciesContainer) -> None:
    """Tally the annotated samples of the given jobs."""
    tally = count_manual_analysis(
        [job.aggregated_results_folder for job in jobs],
        result_store=container.result_store(),
    )
    logger.info("Manual analysis result: %s", tally.model_dump())


def main():
    """Entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="Compare legacy and service language detection against document labels"
    )
    parser.add_argument(
        "jobs",
        nargs="*",
        help="Job keys to run (e.g., pt es). Defaults to all configured jobs.",
    )
    parser.add_argument(
        "--tally",
        action="store_true",
        help="Tally annotated manual-analysis samples instead of running jobs",
    )

    args = parser.parse_args()
    setup_logging()

    try:
        jobs = select_jobs(load_jobs(), args.jobs)
        container = DependenciesContainer()

        if args.tally:
            run_tally(jobs, container)
        else:
            run_audit(jobs, container)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
