"""Metric derivation for AWS Batch job queues.

A collection pass queries every (queue, status) pair, counts the jobs
returned and, for RUNNING jobs, measures how long each one has been running.
Results are returned as a flat mapping of dot-delimited metric keys to float
values. Nothing is cached between passes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Iterable

from batchmon.core.jobs import (
    TRACKED_STATUSES,
    BatchJobsAdapter,
    JobQueue,
    JobStatus,
    JobSummary,
)

METRIC_PREFIX = "aws.batch"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

MetricSnapshot = dict[str, float]


class MetricCategory(str, Enum):
    """Metric groups emitted by the collector."""

    JOBS = "jobs"
    RUNTIME = "runtime"


def metric_key(category: MetricCategory, queue: JobQueue, leaf: str) -> str:
    """
    Build a namespaced metric key.

    Examples:
        aws.batch.jobs.<queue>.<STATUS>
        aws.batch.runtime.<queue>.<job-name>
    """
    return f"{METRIC_PREFIX}.{category.value}.{queue}.{leaf}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def job_runtime_minutes(job: JobSummary, now: datetime) -> float:
    """
    Return elapsed minutes between the job start and ``now``.

    A job without a start timestamp is measured from the Unix epoch, which
    yields a very large value rather than an error.
    """
    started_at = job.started_at or _EPOCH
    return (now - started_at).total_seconds() / 60.0


def _queue_metrics(
    adapter: BatchJobsAdapter,
    queue: JobQueue,
    now: datetime,
) -> Iterable[tuple[str, float]]:
    """Yield count and runtime metric points for one queue."""
    for status in TRACKED_STATUSES:
        jobs = adapter.list_jobs(queue, status)
        yield metric_key(MetricCategory.JOBS, queue, status.value), float(len(jobs))

        if status == JobStatus.RUNNING:
            for job in jobs:
                yield (
                    metric_key(MetricCategory.RUNTIME, queue, job.name),
                    job_runtime_minutes(job, now),
                )


def collect(
    adapter: BatchJobsAdapter,
    queues: list[JobQueue],
    now: datetime | None = None,
) -> MetricSnapshot:
    """
    Collect one metric snapshot for the given job queues.

    Queues and statuses are queried sequentially. Any adapter error aborts
    the whole pass and propagates to the caller; a partially filled snapshot
    is never returned. Runtime metrics of jobs sharing a name within a queue
    overwrite each other (last one wins).

    Args:
        adapter: Batch jobs adapter used to list jobs.
        queues: Job queue names to collect. An empty list yields {}.
        now: Measurement instant for runtime metrics. Defaults to the
             current UTC time, taken once for the whole pass.

    Returns:
        A mapping of metric key to value.
    """
    if now is None:
        now = _utcnow()

    snapshot: MetricSnapshot = {}
    for queue in queues:
        for key, value in _queue_metrics(adapter, queue, now):
            snapshot[key] = value
    return snapshot
