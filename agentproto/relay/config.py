from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from agentproto.proto.schema import DEFAULT_SCHEMAS_DIR, SchemaRegistry


@dataclass(frozen=True)
class RelayConfig:
    schema_version: str
    agent_uuid: str
    log_level: str = "INFO"
    log_file: Path | None = None
    data_dir: Path | None = None
    schema_validation_enabled: bool = True


def _resolve(base: Path, value: object) -> Path | None:
    if isinstance(value, str) and value.strip():
        return (base / value).resolve()
    return None


def load_config(config_path: Path, schemas_base_dir: Path = DEFAULT_SCHEMAS_DIR) -> RelayConfig:
    raw = json.loads(config_path.read_text(encoding="utf-8"))
    SchemaRegistry(schemas_base_dir=schemas_base_dir).validate(raw, "relay_config.schema.json")

    schema_validation = raw.get("schema_validation") or {}
    return RelayConfig(
        schema_version=str(raw["schema_version"]),
        agent_uuid=str(raw["agent_uuid"]),
        log_level=str(raw.get("log_level") or "INFO"),
        log_file=_resolve(config_path.parent, raw.get("log_file")),
        data_dir=_resolve(config_path.parent, raw.get("data_dir")),
        schema_validation_enabled=bool(schema_validation.get("enabled", True)),
    )
