"""Wine prefix model and launch-command assembly.

A `Prefix` is bound to an installation root and computes everything needed to
run a program inside it. Command assembly is pure: it returns a `LaunchCommand`
describing the executable, working directory, arguments, and environment
overlay, and leaves spawning to `WineRunner.services.process`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Mapping, Optional, Union

from WineRunner.core.debug import DebugRule, encode_debug_rules
from WineRunner.core.errors import InvalidPrefixError

if TYPE_CHECKING:
    import subprocess

    from WineRunner.services.process import ProcessRunner

PathLike = Union[str, "os.PathLike[str]"]

WINE_BIN = "bin/wine"
WINESERVER_BIN = "bin/wineserver"
REGEDIT_BIN = "bin/regedit"

ENV_PREFIX = "WINEPREFIX"
ENV_LIBRARY_PATH = "DYLD_FALLBACK_LIBRARY_PATH"
ENV_ESYNC = "ESYNC"
ENV_MSYNC = "MSYNC"
ENV_DEBUG = "WINEDEBUG"

START_TOKEN = "start"
KILL_FLAG = "-k"


@dataclass(frozen=True, slots=True)
class PrefixConfig:
    """Feature toggles for a prefix.

    Attributes:
        esync: Use eventfd-based synchronization.
        msync: Use Mach-port-based synchronization.

    Both may be enabled; choosing between them is left to Wine.
    """

    esync: bool = False
    msync: bool = False


@dataclass(frozen=True, slots=True)
class LaunchCommand:
    """A fully specified, not yet started process.

    Attributes:
        executable: Program to execute.
        cwd: Working directory.
        args: Arguments after the executable.
        env: Variables to set on top of the inherited environment.
    """

    executable: Path
    cwd: Path
    args: tuple[str, ...] = ()
    env: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))
        object.__setattr__(self, "env", MappingProxyType(dict(self.env)))

    def __hash__(self) -> int:
        return hash((self.executable, self.cwd, self.args, tuple(sorted(self.env.items()))))

    @property
    def argv(self) -> list[str]:
        """Return the full argument vector including the executable."""
        return [str(self.executable), *self.args]


def join_library_paths(paths: Iterable[PathLike]) -> str:
    """Join library directories with ``:`` preserving order."""
    return ":".join(os.fspath(p) for p in paths)


@dataclass(frozen=True, slots=True)
class Prefix:
    """An isolated Wine installation root.

    Use `Prefix.at` to construct; it validates that ``bin/wine`` exists. All
    fields are computed once and never change.
    """

    path: Path
    library_path: str
    wine: Path
    wineserver: Path
    regedit: Path
    config: PrefixConfig

    @classmethod
    def at(
        cls,
        path: PathLike,
        library_paths: Iterable[PathLike] = (),
        config: Optional[PrefixConfig] = None,
    ) -> Prefix:
        """Create a prefix rooted at `path`.

        Args:
            path: Prefix root directory.
            library_paths: Dynamic library directories, searched in order.
            config: Feature toggles. Defaults to all disabled.

        Returns:
            Validated prefix.

        Raises:
            InvalidPrefixError: If ``<path>/bin/wine`` is not a regular file.
        """
        root = Path(path).absolute()
        wine = root / WINE_BIN
        if not wine.is_file():
            raise InvalidPrefixError(str(root), WINE_BIN)
        return cls(
            path=root,
            library_path=join_library_paths(library_paths),
            wine=wine,
            wineserver=root / WINESERVER_BIN,
            regedit=root / REGEDIT_BIN,
            config=config if config is not None else PrefixConfig(),
        )

    def base_env(self) -> dict[str, str]:
        """Return variables set for every command launched through wine."""
        env = {
            ENV_PREFIX: str(self.path),
            ENV_LIBRARY_PATH: self.library_path,
        }
        if self.config.esync:
            env[ENV_ESYNC] = "1"
        if self.config.msync:
            env[ENV_MSYNC] = "1"
        return env

    def command(
        self,
        program: PathLike,
        debug_rules: Optional[Iterable[DebugRule]] = None,
        *,
        use_start: bool = False,
    ) -> LaunchCommand:
        """Assemble the command that runs `program` inside this prefix.

        Args:
            program: Windows program name or path passed to wine.
            debug_rules: WINEDEBUG rules; WINEDEBUG is left unset when empty.
            use_start: Launch through ``wine start`` instead of directly.

        Returns:
            Command descriptor; nothing is spawned.
        """
        env = self.base_env()
        debug_value = encode_debug_rules(debug_rules or ())
        if debug_value is not None:
            env[ENV_DEBUG] = debug_value

        args: list[str] = []
        if use_start:
            args.append(START_TOKEN)
        args.append(os.fspath(program))

        return LaunchCommand(executable=self.wine, cwd=self.path, args=tuple(args), env=env)

    def kill_all_command(self) -> LaunchCommand:
        """Assemble the wineserver command that terminates the prefix."""
        return LaunchCommand(
            executable=self.wineserver,
            cwd=self.path,
            args=(KILL_FLAG,),
            env={ENV_PREFIX: str(self.path)},
        )

    def kill_all(self, runner: Optional[ProcessRunner] = None) -> subprocess.CompletedProcess[bytes]:
        """Ask wineserver to kill every process in this prefix and wait.

        Args:
            runner: Process runner; a default `ProcessRunner` is used if omitted.

        Returns:
            Completed wineserver process. A non-zero exit code is not an error.

        Raises:
            SpawnError: If wineserver cannot be started.
        """
        if runner is None:
            from WineRunner.services.process import ProcessRunner

            runner = ProcessRunner()
        return runner.run(self.kill_all_command())
