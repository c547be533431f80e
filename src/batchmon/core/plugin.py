"""Rendering of metrics and graph definitions in the agent plugin format."""

from __future__ import annotations

import json
import os
import time
from typing import Mapping

from batchmon.core.graphs import GraphDefinition

META_ENV = "MACKEREL_AGENT_PLUGIN_META"
META_HEADER = "# mackerel-agent-plugin"


def wants_meta(environ: Mapping[str, str] | None = None) -> bool:
    """Return True if the agent is asking for graph definitions."""
    env = os.environ if environ is None else environ
    return env.get(META_ENV, "") != ""


def format_metric_lines(
    snapshot: Mapping[str, float],
    timestamp: int | None = None,
) -> list[str]:
    """
    Render a snapshot as `<key>\\t<value>\\t<epoch>` lines, sorted by key.

    All lines of one snapshot share the same timestamp.
    """
    if timestamp is None:
        timestamp = int(time.time())
    return [f"{key}\t{snapshot[key]:f}\t{timestamp}" for key in sorted(snapshot)]


def format_graph_meta(graphs: Mapping[str, GraphDefinition]) -> str:
    """Render graph definitions as the agent meta document."""
    payload = {"graphs": {name: graph.to_dict() for name, graph in graphs.items()}}
    return f"{META_HEADER}\n{json.dumps(payload)}"
