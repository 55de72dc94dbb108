# SPDX-License-Identifier: MIT
"""
Running batches of independent jobs (downloads, uploads) with a fixed
number of jobs in flight.

A job is any object with a ``description`` and a ``run()`` method. A job
that raises is recorded as failed; it never stops the rest of the batch.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from os import PathLike
from typing import Iterable, List, Optional

from . import config, logger
from .request import request_download


@dataclass
class DownloadJob:
    """Download one URL to one file, optionally resizing the animation."""

    description: str
    url: str
    target: PathLike
    size: Optional[int] = None

    def run(self):
        request_download(self.url, self.target, size=self.size)


@dataclass
class JobFailure:
    description: str
    error: Exception

    def __str__(self):
        return f"{self.description} {self.error}"


@dataclass
class BatchReport:
    succeeded: List[str] = field(default_factory=list)
    failed: List[JobFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed

    def log_summary(self):
        logger.info(f"ℹ️ Completed with {len(self.failed)} errors")
        for failure in self.failed:
            logger.info(f"🚫 {failure}")


def _run_job(job) -> Optional[Exception]:
    try:
        job.run()
    except Exception as e:
        return e
    return None


def run_batch(jobs: Iterable, concurrency: int = config.CONCURRENCY) -> BatchReport:
    """
    Run all jobs with at most `concurrency` of them in flight, and log a
    status line for each job as it completes followed by a summary.
    """
    if concurrency < 1:
        raise ValueError(f"Invalid concurrency: {concurrency}")

    report = BatchReport()

    with ThreadPoolExecutor(max_workers=concurrency) as executor:
        futures = {executor.submit(_run_job, job): job for job in jobs}

        # Results are collected here, in the calling thread only.
        for future in as_completed(futures):
            job = futures[future]
            error = future.result()
            if error is None:
                logger.info(f"✅ {job.description}")
                report.succeeded.append(job.description)
            else:
                logger.info(f"🚫 {job.description} {error}")
                report.failed.append(JobFailure(job.description, error))

    report.log_summary()
    return report
