from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Protocol, TypeVar

from .codec import decode_data, encode_data
from .payloads import b64decode, b64encode, str_field
from .registry import DEFAULT_REGISTRY, CommandRegistry
from .timeutil import iso_z, parse_ts

# Timestamp of a Cmd that arrived without one.
ZERO_TS = datetime(1, 1, 1, tzinfo=timezone.utc)


class _Payload(Protocol):
    @classmethod
    def from_dict(cls, obj: dict) -> Any: ...


P = TypeVar("P", bound=_Payload)


def _decode_payload(data: bytes | None, payload_type: type[P]) -> P | None:
    obj = decode_data(data)
    if obj is None:
        return None
    return payload_type.from_dict(obj)


@dataclass(frozen=True)
class Reply:
    """Sent by the agent in response to every Cmd. Success is ``error == ""``."""

    cmd: str
    error: str = ""
    data: bytes | None = None
    relay_id: str = ""

    @property
    def ok(self) -> bool:
        return self.error == ""

    def decode_data(self, payload_type: type[P]) -> P | None:
        return _decode_payload(self.data, payload_type)

    def to_dict(self) -> dict:
        out: dict[str, Any] = {"Cmd": self.cmd, "Error": self.error}
        if self.data:
            out["Data"] = b64encode(self.data)
        out["RelayId"] = self.relay_id
        return out

    @classmethod
    def from_dict(cls, obj: dict) -> Reply:
        return cls(
            cmd=str_field(obj, "Cmd"),
            error=str_field(obj, "Error"),
            data=b64decode(obj.get("Data")),
            relay_id=str_field(obj, "RelayId"),
        )


@dataclass(frozen=True)
class Cmd:
    """Sent by a user to an agent, usually through a relay that sets relay_id.

    ``service`` is empty for the agent itself. ``data`` carries the command's
    payload record, JSON encoded.
    """

    user: str
    ts: datetime
    agent_uuid: str
    cmd: str
    service: str = ""
    data: bytes | None = None
    relay_id: str = ""

    def validate(self, registry: CommandRegistry = DEFAULT_REGISTRY) -> None:
        registry.check(self.service, self.cmd)

    def reply(self, err: BaseException | str | None = None, data: Any = None) -> Reply:
        error = ""
        if err is not None:
            error = str(err)
        coded = None
        if data is not None:
            coded = encode_data(data)
        return Reply(cmd=self.cmd, error=error, data=coded, relay_id=self.relay_id)

    def decode_data(self, payload_type: type[P]) -> P | None:
        return _decode_payload(self.data, payload_type)

    def with_data(self, payload: Any) -> Cmd:
        return Cmd(
            user=self.user,
            ts=self.ts,
            agent_uuid=self.agent_uuid,
            cmd=self.cmd,
            service=self.service,
            data=None if payload is None else encode_data(payload),
            relay_id=self.relay_id,
        )

    def __str__(self) -> str:
        return f"Cmd:{self.cmd} Service:{self.service} User:{self.user} Ts:{iso_z(self.ts)}"

    def to_dict(self) -> dict:
        out: dict[str, Any] = {
            "User": self.user,
            "Ts": iso_z(self.ts),
            "AgentUuid": self.agent_uuid,
            "Cmd": self.cmd,
        }
        if self.service:
            out["Service"] = self.service
        if self.data:
            out["Data"] = b64encode(self.data)
        if self.relay_id:
            out["RelayId"] = self.relay_id
        return out

    @classmethod
    def from_dict(cls, obj: dict) -> Cmd:
        ts = obj.get("Ts")
        if ts is not None and not isinstance(ts, str):
            raise TypeError(f"Ts: expected a timestamp string, got {type(ts).__name__}")
        return cls(
            user=str_field(obj, "User"),
            ts=ZERO_TS if ts is None else parse_ts(ts),
            agent_uuid=str_field(obj, "AgentUuid"),
            cmd=str_field(obj, "Cmd"),
            service=str_field(obj, "Service"),
            data=b64decode(obj.get("Data")),
            relay_id=str_field(obj, "RelayId"),
        )
