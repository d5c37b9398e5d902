"""CLI package for WineRunner command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from WineRunner.cli.runner import CommandRunner
from WineRunner.cli.ui import cli


def main() -> None:
    """Run WineRunner CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
