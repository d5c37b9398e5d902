"""Prefix domain configuration: install root, library paths, sync backends."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from WineRunner.config.common import (
    expect_bool,
    expect_optional_str,
    expect_str_list,
    get_section,
)
from WineRunner.core.prefix import PrefixConfig


@dataclass(frozen=True, slots=True)
class PrefixSection:
    """Store validated prefix settings.

    Attributes:
        path: Prefix root, or None when it must come from the command line.
        library_paths: Dynamic library directories in search order.
        esync: Enable esync.
        msync: Enable msync.
    """

    path: str | None
    library_paths: tuple[str, ...]
    esync: bool
    msync: bool

    def prefix_config(self) -> PrefixConfig:
        return PrefixConfig(esync=self.esync, msync=self.msync)


def load_prefix(raw: Mapping[str, Any]) -> PrefixSection:
    """Load the ``prefix`` section from raw mapping.

    ``~`` is expanded in the root and in every library path.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "prefix", required=True)
    path = expect_optional_str(section.get("path"), "prefix.path")
    library_paths = expect_str_list(section.get("library_paths", []), "prefix.library_paths")
    return PrefixSection(
        path=os.path.expanduser(path) if path else None,
        library_paths=tuple(os.path.expanduser(p) for p in library_paths),
        esync=expect_bool(section.get("esync", False), "prefix.esync"),
        msync=expect_bool(section.get("msync", False), "prefix.msync"),
    )


def check_prefix(config: PrefixSection) -> None:
    """Validate prefix domain constraints.

    Raises:
        ValueError: If values violate prefix constraints.
    """
    if config.path is not None and not config.path.strip():
        raise ValueError("prefix.path must not be empty")
    for idx, item in enumerate(config.library_paths):
        if not item.strip():
            raise ValueError(f"prefix.library_paths[{idx}] must not be empty")
