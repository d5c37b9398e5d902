"""Command runner for coordinating CLI execution.

Manages logging configuration, prefix construction, and error handling for
command execution.
"""

from __future__ import annotations

from typing import Iterable

import click

from WineRunner.cli.commands import KillCommand, RunCommand
from WineRunner.config import AppConfig
from WineRunner.core.debug import DebugRule, channel_from_name
from WineRunner.core.errors import WineRunnerError
from WineRunner.core.prefix import Prefix
from WineRunner.services.process import ProcessRunner
from WineRunner.utils.log import configure_logging, log


def parse_cli_rule(value: str) -> DebugRule:
    """Turn a ``--debug`` value such as ``+seh`` or ``-all`` into a rule.

    Only the sign and channel name are accepted; process and class scoping is
    available through the ``debug`` config section.

    Raises:
        ValueError: If the sign is missing or the channel name is empty.
    """
    text = value.strip()
    if not text or text[0] not in "+-":
        raise ValueError(f"--debug value must start with '+' or '-': {value!r}")
    name = text[1:].strip().lower()
    if not name:
        raise ValueError(f"--debug value has an empty channel name: {value!r}")
    return DebugRule(channel=channel_from_name(name), enabled=text[0] == "+")


def create_prefix(config: AppConfig, path_override: str | None = None) -> Prefix:
    """Build the prefix described by config.

    Args:
        config: Application configuration.
        path_override: Prefix root from the command line, preferred over
            ``prefix.path``.

    Raises:
        ValueError: If no prefix root is configured.
        InvalidPrefixError: If the root is not a Wine prefix.
    """
    path = path_override or config.prefix.path
    if not path:
        raise ValueError("No prefix given: pass --prefix or set prefix.path")
    prefix = Prefix.at(path, config.prefix.library_paths, config.prefix.prefix_config())
    log.debug("Using prefix %s (library path %r)", prefix.path, prefix.library_path)
    return prefix


class CommandRunner:
    """Orchestrates command execution with logging and error handling."""

    def __init__(
        self,
        config: AppConfig,
        prefix_path: str | None = None,
        process_runner: ProcessRunner | None = None,
    ) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
            prefix_path: Prefix root given on the command line.
            process_runner: Runner used to start processes.
        """
        self.config = config
        self.prefix_path = prefix_path
        self.process_runner = process_runner or ProcessRunner()

    def _configure_logging(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )

    def run_program(
        self,
        action: str,
        program: str,
        *,
        use_start: bool = False,
        debug: Iterable[str] = (),
        dry_run: bool = False,
    ) -> None:
        """Launch `program` in the prefix.

        ``--debug`` rules keep their command-line order and are appended
        after the configured ones so they take precedence.

        Raises:
            click.Abort: When the launch fails.
        """
        self._configure_logging(action)
        try:
            rules = self.config.debug.extend(parse_cli_rule(value) for value in debug)
            command = RunCommand(
                prefix=create_prefix(self.config, self.prefix_path),
                program=program,
                debug_rules=rules,
                use_start=use_start,
                process_runner=self.process_runner,
                echo=click.echo,
                dry_run=dry_run,
            )
            command.execute()
        except (WineRunnerError, ValueError) as e:
            log.error("Run failed: %s", e)
            raise click.Abort from e

    def kill_all(self, action: str) -> int:
        """Terminate every process in the prefix.

        Returns:
            wineserver exit code.

        Raises:
            click.Abort: When wineserver cannot be started.
        """
        self._configure_logging(action)
        try:
            command = KillCommand(
                prefix=create_prefix(self.config, self.prefix_path),
                process_runner=self.process_runner,
                echo=click.echo,
            )
            return command.execute()
        except (WineRunnerError, ValueError) as e:
            log.error("Kill failed: %s", e)
            raise click.Abort from e
