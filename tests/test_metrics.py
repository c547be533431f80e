from datetime import datetime, timedelta, timezone

import pytest

from batchmon.core.jobs import BatchQueryError, JobStatus, JobSummary
from batchmon.core.metrics import (
    MetricCategory,
    collect,
    job_runtime_minutes,
    metric_key,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class _JobsAdapterStub:
    def __init__(self, jobs=None, fail_on=None):
        self.jobs = jobs or {}
        self.fail_on = fail_on
        self.calls: list[tuple[str, JobStatus]] = []

    def list_jobs(self, queue: str, status: JobStatus) -> list[JobSummary]:
        self.calls.append((queue, status))
        if (queue, status) == self.fail_on:
            raise BatchQueryError(queue, status, "throttled")
        return list(self.jobs.get((queue, status), []))


def _jobs(n: int, prefix: str = "job") -> list[JobSummary]:
    return [JobSummary(job_id=f"{prefix}-{i}", name=f"{prefix}-{i}") for i in range(n)]


def test_metric_key_formats():
    assert metric_key(MetricCategory.JOBS, "q1", "RUNNING") == "aws.batch.jobs.q1.RUNNING"
    assert metric_key(MetricCategory.RUNTIME, "q1", "etl") == "aws.batch.runtime.q1.etl"


def test_collect_returns_empty_snapshot_for_no_queues():
    adapter = _JobsAdapterStub()

    assert collect(adapter, [], now=NOW) == {}
    assert adapter.calls == []


def test_collect_example_snapshot():
    running = JobSummary(
        job_id="abc", name="nightly", started_at=NOW - timedelta(minutes=5)
    )
    adapter = _JobsAdapterStub(
        jobs={
            ("q1", JobStatus.SUBMITTED): _jobs(2),
            ("q1", JobStatus.RUNNABLE): _jobs(1),
            ("q1", JobStatus.RUNNING): [running],
        }
    )

    snapshot = collect(adapter, ["q1"], now=NOW)

    assert set(snapshot) == {
        "aws.batch.jobs.q1.SUBMITTED",
        "aws.batch.jobs.q1.PENDING",
        "aws.batch.jobs.q1.RUNNABLE",
        "aws.batch.jobs.q1.STARTING",
        "aws.batch.jobs.q1.RUNNING",
        "aws.batch.runtime.q1.nightly",
    }
    assert snapshot["aws.batch.jobs.q1.SUBMITTED"] == 2.0
    assert snapshot["aws.batch.jobs.q1.PENDING"] == 0.0
    assert snapshot["aws.batch.jobs.q1.RUNNABLE"] == 1.0
    assert snapshot["aws.batch.jobs.q1.STARTING"] == 0.0
    assert snapshot["aws.batch.jobs.q1.RUNNING"] == 1.0
    assert snapshot["aws.batch.runtime.q1.nightly"] == pytest.approx(5.0)


@pytest.mark.parametrize("count", [0, 1, 7])
def test_collect_counts_every_status(count: int):
    adapter = _JobsAdapterStub(
        jobs={("q1", status): _jobs(count, status.value) for status in JobStatus}
    )

    snapshot = collect(adapter, ["q1"], now=NOW)

    for status in JobStatus:
        value = snapshot[f"aws.batch.jobs.q1.{status.value}"]
        assert isinstance(value, float)
        assert value == float(count)


def test_collect_queries_statuses_in_fixed_order_per_queue():
    adapter = _JobsAdapterStub()

    collect(adapter, ["q1", "q2"], now=NOW)

    order = [
        JobStatus.SUBMITTED,
        JobStatus.PENDING,
        JobStatus.RUNNABLE,
        JobStatus.STARTING,
        JobStatus.RUNNING,
    ]
    assert adapter.calls == [("q1", s) for s in order] + [("q2", s) for s in order]


def test_collect_runtime_only_for_running_jobs():
    started = NOW - timedelta(minutes=90)
    adapter = _JobsAdapterStub(
        jobs={
            ("q1", JobStatus.STARTING): [
                JobSummary(job_id="s", name="starting-job", started_at=started)
            ],
            ("q1", JobStatus.RUNNING): [
                JobSummary(job_id="r", name="running-job", started_at=started)
            ],
        }
    )

    snapshot = collect(adapter, ["q1"], now=NOW)

    runtime_keys = [k for k in snapshot if k.startswith("aws.batch.runtime.")]
    assert runtime_keys == ["aws.batch.runtime.q1.running-job"]
    assert snapshot["aws.batch.runtime.q1.running-job"] == pytest.approx(90.0)


def test_collect_duplicate_job_names_last_one_wins():
    adapter = _JobsAdapterStub(
        jobs={
            ("q1", JobStatus.RUNNING): [
                JobSummary(job_id="a", name="dup", started_at=NOW - timedelta(minutes=10)),
                JobSummary(job_id="b", name="dup", started_at=NOW - timedelta(minutes=3)),
            ]
        }
    )

    snapshot = collect(adapter, ["q1"], now=NOW)

    assert snapshot["aws.batch.jobs.q1.RUNNING"] == 2.0
    assert snapshot["aws.batch.runtime.q1.dup"] == pytest.approx(3.0)


def test_collect_fails_whole_pass_on_any_query_error():
    adapter = _JobsAdapterStub(
        jobs={("q1", JobStatus.SUBMITTED): _jobs(3)},
        fail_on=("q2", JobStatus.PENDING),
    )

    with pytest.raises(BatchQueryError, match="q2"):
        collect(adapter, ["q1", "q2", "q3"], now=NOW)

    # q3 is never queried once the pass is aborted
    assert ("q3", JobStatus.SUBMITTED) not in adapter.calls


def test_job_runtime_minutes_is_fractional():
    job = JobSummary(job_id="x", name="x", started_at=NOW - timedelta(seconds=90))

    assert job_runtime_minutes(job, NOW) == pytest.approx(1.5)


def test_job_runtime_minutes_without_start_counts_from_epoch():
    job = JobSummary(job_id="x", name="x", started_at=None)

    expected = NOW.timestamp() / 60.0
    assert job_runtime_minutes(job, NOW) == pytest.approx(expected)


def test_collect_defaults_measurement_time_to_now():
    started = datetime.now(timezone.utc) - timedelta(minutes=2)
    adapter = _JobsAdapterStub(
        jobs={("q1", JobStatus.RUNNING): [JobSummary("r", "r", started_at=started)]}
    )

    snapshot = collect(adapter, ["q1"])

    assert 2.0 <= snapshot["aws.batch.runtime.q1.r"] < 3.0
