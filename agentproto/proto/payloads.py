from __future__ import annotations

import base64
from dataclasses import dataclass, field


def b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def b64decode(value: str | None) -> bytes | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise TypeError(f"expected a base64 string, got {type(value).__name__}")
    return base64.b64decode(value, validate=True)


def str_field(obj: dict, key: str) -> str:
    """Return a string field, "" when absent or null; any other type is a TypeError."""
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"{key}: expected a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class ServiceData:
    """Parameters for StartService and StopService."""

    name: str
    config: bytes | None = None

    def to_dict(self) -> dict:
        out: dict = {"Name": self.name}
        if self.config:
            out["Config"] = b64encode(self.config)
        return out

    @classmethod
    def from_dict(cls, obj: dict) -> ServiceData:
        return cls(name=str_field(obj, "Name"), config=b64decode(obj.get("Config")))


@dataclass(frozen=True)
class StatusData:
    agent: str
    cmd_queue: list[str] = field(default_factory=list)
    service: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"Agent": self.agent, "CmdQueue": list(self.cmd_queue), "Service": dict(self.service)}

    @classmethod
    def from_dict(cls, obj: dict) -> StatusData:
        return cls(
            agent=str(obj.get("Agent") or ""),
            cmd_queue=[str(c) for c in obj.get("CmdQueue") or []],
            service={str(k): str(v) for k, v in (obj.get("Service") or {}).items()},
        )


@dataclass(frozen=True)
class LogFile:
    file: str

    def to_dict(self) -> dict:
        return {"File": self.file}

    @classmethod
    def from_dict(cls, obj: dict) -> LogFile:
        return cls(file=str_field(obj, "File"))


@dataclass(frozen=True)
class LogLevel:
    level: int

    def to_dict(self) -> dict:
        return {"Level": self.level}

    @classmethod
    def from_dict(cls, obj: dict) -> LogLevel:
        level = obj.get("Level")
        if level is None:
            return cls(level=0)
        if isinstance(level, bool) or not isinstance(level, int):
            raise TypeError(f"Level: expected an integer, got {type(level).__name__}")
        return cls(level=level)
