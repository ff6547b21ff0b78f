from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Callable, Protocol

from agentproto.proto.codec import decode_data
from agentproto.proto.errors import unknown_command, unknown_service
from agentproto.proto.model import Cmd
from agentproto.proto.payloads import LogFile, LogLevel, ServiceData, StatusData
from agentproto.proto.registry import AGENT, DEFAULT_REGISTRY, CommandRegistry

from .logsetup import set_log_file, set_log_level


class CommandHandler(Protocol):
    def handle_command(self, *, cmd: Cmd) -> Any: ...


class AgentHandler:
    """Handles the agent's own commands (the service with the empty id).

    Services are only tracked by name and status string; starting one does not
    run anything.
    """

    def __init__(
        self,
        *,
        registry: CommandRegistry = DEFAULT_REGISTRY,
        cmd_queue: Callable[[], list[str]] = list,
        data_dir: Path | None = None,
    ):
        self._registry = registry
        self._cmd_queue = cmd_queue
        self._lock = threading.Lock()
        self.state = "Ready"
        self.data_dir = data_dir
        self.services: dict[str, str] = {s: "Stopped" for s in registry.services() if s != AGENT}
        self._table: dict[str, Callable[[Cmd], Any]] = {
            "SetLogFile": self._set_log_file,
            "SetLogLevel": self._set_log_level,
            "SetDataDir": self._set_data_dir,
            "StartService": self._start_service,
            "StopService": self._stop_service,
            "Status": self._status,
            "Update": self._update,
            "Stop": self._stop,
            "Abort": self._abort,
        }

    def handle_command(self, *, cmd: Cmd) -> Any:
        fn = self._table.get(cmd.cmd)
        if fn is None:
            raise unknown_command(cmd.service, cmd.cmd)
        return fn(cmd)

    def _status(self, cmd: Cmd) -> StatusData:
        with self._lock:
            return StatusData(agent=self.state, cmd_queue=list(self._cmd_queue()), service=dict(self.services))

    def _set_log_level(self, cmd: Cmd) -> None:
        payload = _require(cmd, LogLevel)
        set_log_level(payload.level)

    def _set_log_file(self, cmd: Cmd) -> None:
        payload = _require(cmd, LogFile)
        set_log_file(payload.file or None)

    def _set_data_dir(self, cmd: Cmd) -> None:
        value = decode_data(cmd.data)
        if not isinstance(value, str) or not value:
            raise ValueError("SetDataDir requires a directory path")
        with self._lock:
            self.data_dir = Path(value)

    def _service_name(self, cmd: Cmd) -> str:
        payload = _require(cmd, ServiceData)
        if payload.name == AGENT or payload.name not in self.services:
            raise unknown_service(payload.name)
        return payload.name

    def _start_service(self, cmd: Cmd) -> None:
        name = self._service_name(cmd)
        with self._lock:
            self.services[name] = "Running"

    def _stop_service(self, cmd: Cmd) -> None:
        name = self._service_name(cmd)
        with self._lock:
            self.services[name] = "Stopped"

    def _update(self, cmd: Cmd) -> None:
        raise NotImplementedError("Update is not supported by this agent")

    def _stop(self, cmd: Cmd) -> None:
        with self._lock:
            self.state = "Stopping"

    def _abort(self, cmd: Cmd) -> None:
        with self._lock:
            self.state = "Aborting"


def _require(cmd: Cmd, payload_type: type) -> Any:
    payload = cmd.decode_data(payload_type)
    if payload is None:
        raise ValueError(f"{cmd.cmd} requires {payload_type.__name__} data")
    return payload
