"""Commands for collecting and publishing AWS Batch queue metrics."""

from dataclasses import dataclass

import typer

from batchmon.cli.common.context import build_collector_context
from batchmon.cli.common.exits import die, exit_from_exc, ok_exit
from batchmon.cli.common.options import (
    AccessKeyIdOpt,
    JobQueueOpt,
    ProfileOpt,
    RegionOpt,
    SecretAccessKeyOpt,
)
from batchmon.cli.common.output import out
from batchmon.cli.common.queues import build_queues
from batchmon.core.auth import AwsSettings
from batchmon.core.graphs import describe
from batchmon.core.jobs import BatchQueryError, JobQueue
from batchmon.core.metrics import MetricSnapshot, collect
from batchmon.core.plugin import format_graph_meta, format_metric_lines, wants_meta

app = typer.Typer(
    help="batchmon - AWS Batch job queue metrics for monitoring agents",
    no_args_is_help=False,
    invoke_without_command=True,
)


@dataclass(frozen=True)
class PluginOptions:
    """Options shared by all commands of one invocation."""

    settings: AwsSettings
    queues: list[JobQueue]


def _collect(ctx: typer.Context) -> MetricSnapshot:
    """Run one collection pass or exit with an error."""
    opts: PluginOptions = ctx.obj
    if not opts.queues:
        out.warn("No job queues configured (use --job-queue)")
        return {}

    appctx = build_collector_context(opts.settings, opts.queues)
    try:
        return collect(appctx.adapter, appctx.queues)
    except BatchQueryError as exc:
        exit_from_exc(exc, message=str(exc), code=1)


def _print_graphs() -> None:
    out.lines([format_graph_meta(describe())])


def _print_metrics(ctx: typer.Context) -> None:
    out.lines(format_metric_lines(_collect(ctx)))


@app.callback()
def _init(
    ctx: typer.Context,
    job_queue: list[str] = JobQueueOpt,
    access_key_id: str | None = AccessKeyIdOpt,
    secret_access_key: str | None = SecretAccessKeyOpt,
    region: str | None = RegionOpt,
    profile: str | None = ProfileOpt,
):
    """
    Collect AWS Batch metrics (agent entrypoint when no command is given).
    """
    try:
        queues = build_queues(job_queue)
    except ValueError as e:
        die(str(e), code=1)

    settings = AwsSettings(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        region=region,
        profile=profile,
    )
    ctx.obj = PluginOptions(settings=settings, queues=queues)

    if ctx.invoked_subcommand is None:
        # The agent asks for graph definitions through the environment
        if wants_meta():
            _print_graphs()
        else:
            _print_metrics(ctx)
        raise typer.Exit(0)


@app.command()
def fetch(ctx: typer.Context):
    """
    Collect metrics and print them in the agent plugin format.
    """
    _print_metrics(ctx)


@app.command()
def graphs():
    """
    Print the graph definitions (no AWS access needed).
    """
    _print_graphs()


@app.command()
def show(ctx: typer.Context):
    """
    Collect metrics and render them as a table.
    """
    opts: PluginOptions = ctx.obj
    with out.status("Collecting AWS Batch metrics..."):
        snapshot = _collect(ctx)

    if not snapshot:
        ok_exit("No metrics collected")

    out.header("AWS Batch queues")
    out.kv({"Queues": ", ".join(opts.queues)})
    out.metrics_table(snapshot, title="AWS Batch metrics")
