"""CLI application for AWS Batch queue metrics."""

from batchmon.cli.commands.metrics import app


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
