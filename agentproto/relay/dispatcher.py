from __future__ import annotations

import logging
import threading
from typing import Mapping

from agentproto.proto.errors import NoHandler, ProtoError, unknown_service
from agentproto.proto.model import Cmd, Reply
from agentproto.proto.registry import DEFAULT_REGISTRY, CommandRegistry
from agentproto.proto.schema import SchemaRegistry
from agentproto.proto.wire import decode_cmd, encode_reply

from .handlers import CommandHandler

log = logging.getLogger(__name__)


class Dispatcher:
    """Validates each Cmd, runs the handler for its service and builds the Reply."""

    def __init__(
        self,
        *,
        registry: CommandRegistry = DEFAULT_REGISTRY,
        handlers: Mapping[str, CommandHandler] | None = None,
        schemas: SchemaRegistry | None = None,
    ):
        self.registry = registry
        self.schemas = schemas
        self._handlers: dict[str, CommandHandler] = {}
        self._lock = threading.Lock()
        self._queue: list[str] = []
        for service, handler in (handlers or {}).items():
            self.register(service, handler)

    def register(self, service: str, handler: CommandHandler) -> None:
        _, found = self.registry.lookup(service)
        if not found:
            raise unknown_service(service)
        self._handlers[service] = handler

    def cmd_queue(self) -> list[str]:
        with self._lock:
            return list(self._queue)

    def dispatch(self, cmd: Cmd) -> Reply:
        try:
            cmd.validate(self.registry)
        except ProtoError as e:
            log.warning("rejected %s: %s", cmd, e)
            return cmd.reply(e)

        handler = self._handlers.get(cmd.service)
        if handler is None:
            err = NoHandler(code="NO_HANDLER", message=f"no handler for service: {cmd.service}")
            log.warning("rejected %s: %s", cmd, err)
            return cmd.reply(err)

        with self._lock:
            self._queue.append(cmd.cmd)
        log.info("running %s", cmd)
        try:
            result = handler.handle_command(cmd=cmd)
        except Exception as e:
            log.warning("failed %s: %s", cmd, e)
            return cmd.reply(e)
        finally:
            with self._lock:
                self._queue.remove(cmd.cmd)
        log.info("done %s", cmd)
        return cmd.reply(None, result)

    def handle_raw(self, raw: bytes | str) -> bytes:
        try:
            cmd = decode_cmd(raw, schemas=self.schemas)
        except ProtoError as e:
            log.warning("undecodable command: %s", e)
            return encode_reply(Reply(cmd="", error=str(e)))
        return encode_reply(self.dispatch(cmd))
