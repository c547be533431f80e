from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from botocore.exceptions import BotoCoreError, ClientError

from batchmon.core.jobs import BatchQueryError, JobQueue, JobStatus, JobSummary


class AwsBatchJobsAdapter:
    """Adapter around the boto3 AWS Batch ListJobs API."""

    def __init__(self, client: Any):
        """Create a jobs adapter for a boto3 Batch client."""
        self.client = client

    @staticmethod
    def _parse_started_at(raw: Any) -> datetime | None:
        """Convert an epoch-milliseconds start time to an aware datetime."""
        if raw is None:
            return None
        return datetime.fromtimestamp(int(raw) / 1000.0, tz=timezone.utc)

    def _to_summary(self, item: Mapping[str, Any]) -> JobSummary:
        return JobSummary(
            job_id=str(item.get("jobId", "")),
            name=str(item.get("jobName", "")),
            started_at=self._parse_started_at(item.get("startedAt")),
        )

    def list_jobs(self, queue: JobQueue, status: JobStatus) -> list[JobSummary]:
        """
        Return jobs in the queue with the given status.

        Only the first page of results is read; nextToken is ignored.
        """
        try:
            resp = self.client.list_jobs(jobQueue=queue, jobStatus=status.value)
        except (ClientError, BotoCoreError) as exc:
            raise BatchQueryError(queue, status, str(exc)) from exc

        return [self._to_summary(item) for item in resp.get("jobSummaryList") or []]
