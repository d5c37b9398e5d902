"""WineRunner: run programs inside a Wine prefix.

Typical use::

    rules = DebugRulesBuilder().disable(DebugChannel.ALL).enable(DebugChannel.SEH).build()
    prefix = Prefix.at("/opt/wine", ["/usr/local/lib"], PrefixConfig(msync=True))
    ProcessRunner().spawn(prefix.command("notepad.exe", rules, use_start=True))
"""

from __future__ import annotations

from WineRunner.core.debug import (
    Channel,
    DebugChannel,
    DebugClass,
    DebugRule,
    DebugRules,
    DebugRulesBuilder,
    OtherChannel,
    channel_from_name,
    encode_debug_rules,
)
from WineRunner.core.errors import InvalidPrefixError, SpawnError, WineRunnerError
from WineRunner.core.prefix import LaunchCommand, Prefix, PrefixConfig
from WineRunner.services.process import ProcessRunner

__all__ = [
    "Channel",
    "DebugChannel",
    "DebugClass",
    "DebugRule",
    "DebugRules",
    "DebugRulesBuilder",
    "OtherChannel",
    "channel_from_name",
    "encode_debug_rules",
    "InvalidPrefixError",
    "SpawnError",
    "WineRunnerError",
    "LaunchCommand",
    "Prefix",
    "PrefixConfig",
    "ProcessRunner",
]
