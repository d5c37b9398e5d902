"""WINEDEBUG rule configuration.

The ``debug`` section is an ordered list of rule objects::

    debug:
      - channel: heap
        enabled: false
        class: err
        process: foo.exe

Only ``channel`` is required; ``enabled`` defaults to true. Channel and class
names are matched case-insensitively.
"""

from __future__ import annotations

from typing import Any, Mapping

from WineRunner.config.common import (
    expect_bool,
    expect_optional_str,
    expect_str,
    get_required_value,
)
from WineRunner.core.debug import DebugRule, DebugRules, channel_from_name, class_from_name

_ALLOWED_KEYS = {"channel", "enabled", "class", "process"}


def load_debug(raw: Mapping[str, Any]) -> DebugRules:
    """Load the ``debug`` rule list from raw mapping.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If a rule is missing ``channel`` or has unknown keys.
    """
    items = raw.get("debug")
    if items is None:
        return DebugRules()
    if not isinstance(items, list):
        raise TypeError("debug must be a list")
    return DebugRules(tuple(parse_debug_rule(item, f"debug[{idx}]") for idx, item in enumerate(items)))


def parse_debug_rule(value: Any, config_key: str) -> DebugRule:
    """Parse one rule object into `DebugRule`."""
    if not isinstance(value, Mapping):
        raise TypeError(f"{config_key} must be an object")
    unknown = {str(k) for k in value.keys()} - _ALLOWED_KEYS
    if unknown:
        raise ValueError(f"{config_key} has unknown key(s): {sorted(unknown)}")

    channel = expect_str(get_required_value(value, "channel", f"{config_key}.channel"), f"{config_key}.channel")
    class_name = expect_optional_str(value.get("class"), f"{config_key}.class")
    try:
        class_ = class_from_name(class_name.lower()) if class_name is not None else None
    except ValueError as e:
        raise ValueError(f"{config_key}.class: {e}") from None
    return DebugRule(
        channel=channel_from_name(channel.strip().lower()),
        enabled=expect_bool(value.get("enabled", True), f"{config_key}.enabled"),
        process=expect_optional_str(value.get("process"), f"{config_key}.process"),
        class_=class_,
    )


def check_debug(rules: DebugRules) -> None:
    """Validate rule constraints.

    Raises:
        ValueError: If a channel name is empty.
    """
    for idx, rule in enumerate(rules):
        if not rule.channel.token:
            raise ValueError(f"debug[{idx}].channel must not be empty")
