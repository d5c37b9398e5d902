"""Command implementations for the WineRunner CLI.

Encapsulates what each command does with a `Prefix`, separated from CLI
parameter handling and logging setup.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import Callable

from WineRunner.core.debug import DebugRules
from WineRunner.core.prefix import LaunchCommand, Prefix
from WineRunner.services.process import ProcessRunner
from WineRunner.utils.log import log


def format_command(command: LaunchCommand) -> str:
    """Render a command as a copy-pasteable shell line."""
    env = " ".join(f"{key}={shlex.quote(value)}" for key, value in command.env.items())
    return f"cd {shlex.quote(str(command.cwd))} && {env} {shlex.join(command.argv)}"


@dataclass(slots=True)
class RunCommand:
    """Launch one program inside a prefix.

    With `dry_run` the assembled command is echoed instead of spawned.
    """

    prefix: Prefix
    program: str
    debug_rules: DebugRules
    use_start: bool
    process_runner: ProcessRunner
    echo: Callable[[str], None]
    dry_run: bool = False

    def execute(self) -> int | None:
        """Assemble and start the command.

        Returns:
            PID of the spawned process, or None for a dry run.
        """
        command = self.prefix.command(self.program, self.debug_rules, use_start=self.use_start)
        if self.debug_rules:
            log.info("WINEDEBUG=%s", command.env.get("WINEDEBUG"))
        if self.dry_run:
            self.echo(format_command(command))
            return None
        process = self.process_runner.spawn(command)
        log.info("Started %s (pid %d)", self.program, process.pid)
        return process.pid


@dataclass(slots=True)
class KillCommand:
    """Terminate every process running in a prefix."""

    prefix: Prefix
    process_runner: ProcessRunner
    echo: Callable[[str], None]

    def execute(self) -> int:
        """Run ``wineserver -k`` and report its output.

        Returns:
            wineserver exit code.
        """
        log.info("Killing all processes in %s", self.prefix.path)
        result = self.prefix.kill_all(self.process_runner)
        for stream in (result.stdout, result.stderr):
            text = (stream or b"").decode("utf-8", errors="replace").rstrip()
            if text:
                self.echo(text)
        if result.returncode != 0:
            log.warning("wineserver exited with %d", result.returncode)
        return result.returncode
