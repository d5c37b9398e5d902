"""WINEDEBUG rule model and encoding.

A rule set is encoded into the single comma-separated value read by Wine's
debug subsystem. Each rule is written as::

    [process:][class:](+|-)channel

Rules keep their insertion order: when Wine interprets the value, later rules
for the same channel override earlier ones.

Channel and process names are emitted verbatim. Names containing ``:`` or
``,`` will corrupt the encoded value; callers must avoid them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional, Union


class DebugClass(Enum):
    """Debug message class (severity) a rule can be scoped to."""

    TRACE = "trace"
    WARN = "warn"
    ERROR = "err"
    FIXME = "fixme"

    @property
    def token(self) -> str:
        return self.value


class DebugChannel(Enum):
    """Well-known Wine debug channels."""

    ALL = "all"
    HEAP = "heap"
    LOAD_DLL = "loaddll"
    MODULE = "module"
    PID = "pid"
    RELAY = "relay"
    SEH = "seh"
    SERVER = "server"
    SNOOP = "snoop"
    SYNCHRONOUS = "synchronous"
    TIMESTAMP = "timestamp"
    FPS = "fps"
    DEBUG_STRING = "debugstr"
    THREAD_NAME = "threadname"

    @property
    def token(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class OtherChannel:
    """A channel not listed in `DebugChannel`, emitted as given."""

    name: str

    @property
    def token(self) -> str:
        return self.name


Channel = Union[DebugChannel, OtherChannel]

_KNOWN_CHANNELS = {c.value: c for c in DebugChannel}
_KNOWN_CLASSES = {c.value: c for c in DebugClass}


def channel_from_name(name: str) -> Channel:
    """Map a channel name onto a well-known channel or `OtherChannel`.

    Args:
        name: Channel name as written in WINEDEBUG.

    Returns:
        The matching `DebugChannel`, otherwise `OtherChannel(name)`.
    """
    return _KNOWN_CHANNELS.get(name, OtherChannel(name))


def class_from_name(name: str) -> DebugClass:
    """Map a class name (trace/warn/err/fixme) onto `DebugClass`.

    Raises:
        ValueError: If the name is not a known class.
    """
    try:
        return _KNOWN_CLASSES[name]
    except KeyError:
        raise ValueError(f"Unknown debug class: {name}") from None


@dataclass(frozen=True, slots=True)
class DebugRule:
    """One WINEDEBUG directive.

    Attributes:
        channel: Channel the rule toggles.
        enabled: True emits ``+channel``, False emits ``-channel``.
        process: Optional process name the rule is restricted to.
        class_: Optional debug class the rule is restricted to.
    """

    channel: Channel
    enabled: bool = True
    process: Optional[str] = None
    class_: Optional[DebugClass] = None

    def encode(self) -> str:
        """Return this rule in WINEDEBUG syntax."""
        parts: list[str] = []
        if self.process is not None:
            parts.append(self.process)
        if self.class_ is not None:
            parts.append(self.class_.token)
        sign = "+" if self.enabled else "-"
        parts.append(f"{sign}{self.channel.token}")
        return ":".join(parts)


@dataclass(frozen=True, slots=True)
class DebugRules:
    """Immutable ordered collection of `DebugRule`.

    An empty rule set means "do not touch WINEDEBUG at all", which is not the
    same as setting it to an empty string.
    """

    rules: tuple[DebugRule, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))

    def __iter__(self) -> Iterator[DebugRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __bool__(self) -> bool:
        return bool(self.rules)

    def add(self, rule: DebugRule) -> DebugRules:
        """Return a new rule set with `rule` appended."""
        return DebugRules(self.rules + (rule,))

    def enable(self, channel: Channel) -> DebugRules:
        """Return a new rule set with an unfiltered ``+channel`` appended."""
        return self.add(DebugRule(channel=channel, enabled=True))

    def disable(self, channel: Channel) -> DebugRules:
        """Return a new rule set with an unfiltered ``-channel`` appended."""
        return self.add(DebugRule(channel=channel, enabled=False))

    def extend(self, rules: Iterable[DebugRule]) -> DebugRules:
        return DebugRules(self.rules + tuple(rules))

    def encode(self) -> Optional[str]:
        return encode_debug_rules(self.rules)


@dataclass(slots=True)
class DebugRulesBuilder:
    """Accumulate rules in order and produce a `DebugRules`.

    Every method returns the builder so calls can be chained. The builder is
    consumed by `build`; using it afterwards raises `RuntimeError`.
    """

    _rules: list[DebugRule] = field(default_factory=list)
    _built: bool = False

    def add(self, rule: DebugRule) -> DebugRulesBuilder:
        self._check_open()
        self._rules.append(rule)
        return self

    def enable(self, channel: Channel) -> DebugRulesBuilder:
        return self.add(DebugRule(channel=channel, enabled=True))

    def disable(self, channel: Channel) -> DebugRulesBuilder:
        return self.add(DebugRule(channel=channel, enabled=False))

    def build(self) -> DebugRules:
        self._check_open()
        self._built = True
        rules = DebugRules(tuple(self._rules))
        self._rules.clear()
        return rules

    def _check_open(self) -> None:
        if self._built:
            raise RuntimeError("DebugRulesBuilder has already been built")


def encode_debug_rules(rules: Iterable[DebugRule]) -> Optional[str]:
    """Encode rules into a WINEDEBUG value.

    Args:
        rules: Rules in precedence order.

    Returns:
        Comma-joined rule text, or None when there are no rules. None means the
        variable must be left unset.
    """
    encoded = [rule.encode() for rule in rules]
    if not encoded:
        return None
    return ",".join(encoded)
