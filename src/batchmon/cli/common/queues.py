"""Job queue option parsing."""

from typing import Iterable

from batchmon.core.jobs import JobQueue


def build_queues(names: Iterable[str]) -> list[JobQueue]:
    """
    Normalize job queue names given on the command line.

    Surrounding whitespace is stripped and repeated names are kept once, in
    first-seen order. An empty input is valid and yields an empty list.

    Raises:
        ValueError: If a name is blank.
    """
    queues: list[JobQueue] = []
    for raw in names:
        name = raw.strip()
        if not name:
            raise ValueError("Invalid job queue: empty name")
        if name not in queues:
            queues.append(name)
    return queues
