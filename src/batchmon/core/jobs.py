"""Core batch job domain models and the job listing interface.

This module defines the job data structures (JobSummary, JobStatus) and the
query protocol the collector relies on. It is intentionally free of AWS SDK
types and CLI concerns so the metric logic can be driven by any adapter
(boto3, stubs in tests).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol

JobQueue = str


class JobStatus(str, Enum):
    """
    Lifecycle stages of an AWS Batch job tracked by the collector.

    Terminal states (SUCCEEDED, FAILED) are not tracked. Member order is the
    order in which statuses are queried and graphed.
    """

    SUBMITTED = "SUBMITTED"
    PENDING = "PENDING"
    RUNNABLE = "RUNNABLE"
    STARTING = "STARTING"
    RUNNING = "RUNNING"


TRACKED_STATUSES: tuple[JobStatus, ...] = tuple(JobStatus)


@dataclass(frozen=True)
class JobSummary:
    """
    Represents a single in-flight job returned by a status query.

    Attributes:
        job_id: Identifier of the job in the batch service.
        name: Job name, used as the trailing segment of runtime metric keys.
        started_at: Timezone-aware start time. None when the service did
                    not report one (jobs that have not started yet).
    """

    job_id: str
    name: str
    started_at: datetime | None = None


class BatchQueryError(RuntimeError):
    """Raised when listing jobs for a queue and status fails."""

    def __init__(self, queue: JobQueue, status: JobStatus, message: str):
        super().__init__(
            f"Listing {status.value} jobs in queue '{queue}' failed: {message}"
        )
        self.queue = queue
        self.status = status


class BatchJobsAdapter(Protocol):
    """Interface for job listing operations used by the collector."""

    def list_jobs(self, queue: JobQueue, status: JobStatus) -> list[JobSummary]:
        """Return jobs in the queue with the given status (first page only)."""
        ...
