from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from .errors import unknown_command, unknown_service

AGENT = ""
METRICS_MONITOR = "mm"
QUERY_ANALYTICS = "qan"


def _freeze(commands: Mapping[str, Iterable[str]]) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType({str(k): tuple(str(c) for c in v) for k, v in commands.items()})


@dataclass(frozen=True)
class CommandRegistry:
    """Read-only table of the commands each service accepts.

    The agent itself is the service with the empty id. A service that maps to
    an empty tuple is known but rejects every command.
    """

    commands: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "commands", _freeze(self.commands))

    def lookup(self, service: str) -> tuple[tuple[str, ...], bool]:
        cmds = self.commands.get(service)
        if cmds is None:
            return (), False
        return cmds, True

    def services(self) -> list[str]:
        return list(self.commands)

    def check(self, service: str, command: str) -> None:
        cmds, found = self.lookup(service)
        if not found:
            raise unknown_service(service)
        if command not in cmds:
            raise unknown_command(service, command)

    def as_dict(self) -> dict[str, list[str]]:
        return {service: list(cmds) for service, cmds in self.commands.items()}


DEFAULT_REGISTRY = CommandRegistry(
    {
        AGENT: (
            "SetLogFile",
            "SetLogLevel",
            "SetDataDir",
            "StartService",
            "StopService",
            "Status",
            "Update",
            "Stop",
            "Abort",
        ),
        QUERY_ANALYTICS: (),
        METRICS_MONITOR: (
            "StartMonitor",
            "StopMonitor",
        ),
    }
)
