"""Handlers package."""

from language_audit.handlers.job_runner import process_rows, run_job, run_jobs
from language_audit.handlers.manual_tally import count_manual_analysis

__all__ = ["count_manual_analysis", "process_rows", "run_job", "run_jobs"]
