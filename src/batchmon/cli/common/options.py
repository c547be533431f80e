"""Common CLI options for the CLI."""

import typer

JobQueueOpt = typer.Option(
    [],
    "--job-queue",
    "-q",
    help="AWS Batch job queue name. This is reusable.",
    show_default=False,
)

AccessKeyIdOpt = typer.Option(
    None,
    "--access-key-id",
    help="AWS access key id",
    show_default=False,
)

SecretAccessKeyOpt = typer.Option(
    None,
    "--secret-access-key",
    help="AWS secret access key",
    show_default=False,
)

RegionOpt = typer.Option(
    None,
    "--region",
    "-r",
    envvar="AWS_DEFAULT_REGION",
    help="AWS region of the Batch job queues",
)

ProfileOpt = typer.Option(
    None,
    "--profile",
    "-p",
    help="AWS profile (from ~/.aws/config)",
)
