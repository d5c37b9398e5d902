"""Spawn `LaunchCommand` descriptors with `subprocess`."""

from __future__ import annotations

import os
import subprocess
from typing import Mapping, Optional

from WineRunner.core.errors import SpawnError
from WineRunner.core.prefix import LaunchCommand
from WineRunner.utils.log import log


class ProcessRunner:
    """Start processes described by `LaunchCommand`.

    The command's environment overlay is applied on top of `base_env`, which
    defaults to the current process environment.
    """

    def __init__(self, base_env: Optional[Mapping[str, str]] = None) -> None:
        """Initialize the runner.

        Args:
            base_env: Environment the overlay is merged onto. Defaults to
                ``os.environ`` read at spawn time.
        """
        self.base_env = base_env

    def environment(self, command: LaunchCommand) -> dict[str, str]:
        """Return the complete environment for `command`."""
        env = dict(os.environ if self.base_env is None else self.base_env)
        env.update(command.env)
        return env

    def spawn(self, command: LaunchCommand) -> subprocess.Popen:
        """Start `command` without waiting for it.

        Raises:
            SpawnError: If the process cannot be created.
        """
        log.debug("Spawning %s in %s env=%s", command.argv, command.cwd, dict(command.env))
        try:
            return subprocess.Popen(
                command.argv,
                cwd=command.cwd,
                env=self.environment(command),
            )
        except OSError as e:
            raise SpawnError(str(command.executable), e) from e

    def run(self, command: LaunchCommand) -> subprocess.CompletedProcess[bytes]:
        """Run `command` to completion, capturing stdout and stderr.

        The exit code is returned to the caller, never raised.

        Raises:
            SpawnError: If the process cannot be created.
        """
        log.debug("Running %s in %s", command.argv, command.cwd)
        try:
            result = subprocess.run(
                command.argv,
                cwd=command.cwd,
                env=self.environment(command),
                capture_output=True,
                check=False,
            )
        except OSError as e:
            raise SpawnError(str(command.executable), e) from e
        log.debug("%s exited with %d", command.executable.name, result.returncode)
        return result
