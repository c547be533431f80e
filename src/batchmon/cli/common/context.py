"""Application context management for the CLI."""

from dataclasses import dataclass
from typing import Any

from batchmon.cli.common.exits import die
from batchmon.core.adapters.awsbatch import AwsBatchJobsAdapter
from batchmon.core.auth import AuthError, AwsSettings, get_client
from batchmon.core.jobs import JobQueue


@dataclass
class CollectorContext:
    """Per-invocation context holding the Batch client, adapter and queues."""

    settings: AwsSettings
    queues: list[JobQueue]
    client: Any
    adapter: AwsBatchJobsAdapter


def build_collector_context(
    settings: AwsSettings, queues: list[JobQueue]
) -> CollectorContext:
    """Build the collector context with a configured Batch client and adapter.

    Args:
        settings: Resolved AWS connection settings.
        queues: Job queues to collect.

    Returns:
        CollectorContext: Context with configured client and adapter.
    """
    try:
        client = get_client(settings)
    except AuthError as exc:
        die(str(exc), code=1)
    adapter = AwsBatchJobsAdapter(client)
    return CollectorContext(
        settings=settings, queues=queues, client=client, adapter=adapter
    )
