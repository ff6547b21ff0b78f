from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import uvicorn
from fastapi import Body, FastAPI, HTTPException
from fastapi.responses import Response

from agentproto.proto.errors import ProtoError
from agentproto.proto.registry import AGENT
from agentproto.proto.schema import SchemaRegistry
from agentproto.proto.wire import cmd_from_document, encode_reply

from .config import RelayConfig, load_config
from .dispatcher import Dispatcher
from .handlers import AgentHandler
from .logsetup import configure_logging

log = logging.getLogger(__name__)


def create_app(*, dispatcher: Dispatcher) -> FastAPI:
    app = FastAPI(title="agentproto relay API", version="0.1.0")

    @app.post("/api/cmd")
    def post_cmd(body: dict[str, Any] = Body(...)) -> Response:
        try:
            cmd = cmd_from_document(body, schemas=dispatcher.schemas)
        except ProtoError as e:
            raise HTTPException(status_code=400, detail=str(e))
        reply = dispatcher.dispatch(cmd)
        return Response(content=encode_reply(reply), media_type="application/json")

    @app.get("/api/commands")
    def list_commands() -> dict[str, list[str]]:
        return dispatcher.registry.as_dict()

    return app


def build_dispatcher(config: RelayConfig) -> Dispatcher:
    schemas = SchemaRegistry() if config.schema_validation_enabled else None
    dispatcher = Dispatcher(schemas=schemas)
    agent = AgentHandler(registry=dispatcher.registry, cmd_queue=dispatcher.cmd_queue, data_dir=config.data_dir)
    dispatcher.register(AGENT, agent)
    return dispatcher


def serve(*, config_path: Path | None, agent_uuid: str | None, host: str, port: int) -> None:
    if config_path is not None:
        config = load_config(config_path)
    else:
        config = RelayConfig(schema_version="1.0", agent_uuid=agent_uuid or "")
    configure_logging(config.log_level, config.log_file)
    log.info("relay for agent %s listening on %s:%d", config.agent_uuid or "-", host, port)
    uvicorn.run(create_app(dispatcher=build_dispatcher(config)), host=host, port=port)
