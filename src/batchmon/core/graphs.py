"""Static graph definitions published to the monitoring agent.

These describe how the agent groups and renders metrics and do not depend on
live data, so they can be requested before the first collection pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from batchmon.core.jobs import TRACKED_STATUSES
from batchmon.core.metrics import METRIC_PREFIX, MetricCategory

# Agent-side placeholders: "#" matches the queue segment, "*" any metric name,
# "%2" renders the third key segment below the graph name (the job name).
_QUEUE_WILDCARD = "#"
_ANY_METRIC = "*"
_JOB_NAME_LABEL = "%2"


@dataclass(frozen=True)
class GraphMetric:
    """One metric line inside a graph."""

    name: str
    label: str
    stacked: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "label": self.label, "stacked": self.stacked}


@dataclass(frozen=True)
class GraphDefinition:
    """A graph group: display label, unit and the metrics it contains."""

    label: str
    unit: str
    metrics: tuple[GraphMetric, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "unit": self.unit,
            "metrics": [m.to_dict() for m in self.metrics],
        }


def graph_name(category: MetricCategory) -> str:
    """Return the wildcard graph name for a metric category."""
    return f"{METRIC_PREFIX}.{category.value}.{_QUEUE_WILDCARD}"


def describe() -> dict[str, GraphDefinition]:
    """
    Return the graph definitions for job counts and job runtimes.

    The runtime graph carries a single wildcard metric; per-job lines are
    resolved by the agent once runtime metrics arrive.
    """
    return {
        graph_name(MetricCategory.JOBS): GraphDefinition(
            label="AWS Batch Jobs",
            unit="integer",
            metrics=tuple(
                GraphMetric(name=status.value, label=status.value)
                for status in TRACKED_STATUSES
            ),
        ),
        graph_name(MetricCategory.RUNTIME): GraphDefinition(
            label="AWS Batch Jobs Runtime",
            unit="float",
            metrics=(GraphMetric(name=_ANY_METRIC, label=_JOB_NAME_LABEL),),
        ),
    }
