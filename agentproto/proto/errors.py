from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProtoError(Exception):
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


@dataclass(frozen=True)
class UnknownService(ProtoError):
    service: str = ""


@dataclass(frozen=True)
class UnknownCommand(ProtoError):
    service: str = ""
    command: str = ""


class SchemaInvalid(ProtoError):
    pass


class EnvelopeParseError(ProtoError):
    pass


class NoHandler(ProtoError):
    pass


def unknown_service(service: str) -> UnknownService:
    return UnknownService(code="UNKNOWN_SERVICE", message=f"Invalid service: {service}", service=service)


def unknown_command(service: str, command: str) -> UnknownCommand:
    return UnknownCommand(
        code="UNKNOWN_COMMAND",
        message=f"Invalid command for {service}: {command}",
        service=service,
        command=command,
    )


class EncodingFailure(SystemExit):
    """Reply data could not be encoded.

    This is a caller bug, not a runtime condition. It derives from SystemExit so
    that ``except Exception`` in dispatch code lets it through and an uncaught
    instance terminates the process with status 1.
    """

    code_name = "ENCODING_FAILURE"

    def __init__(self, message: str):
        super().__init__(f"{self.code_name}: {message}")
        self.message = message
