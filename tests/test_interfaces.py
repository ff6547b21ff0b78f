from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

import agentproto_relay
from agentproto.proto.errors import SchemaInvalid
from agentproto.relay.config import RelayConfig, load_config
from agentproto.relay.logsetup import LOGGER_NAME, configure_logging


def write_json(path: Path, obj: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, ensure_ascii=False, indent=2), encoding="utf-8")


def test_cli_parses_args_and_invokes_runner(tmp_path: Path):
    called = {}

    def runner(**kwargs):
        called.update(kwargs)

    cfg = tmp_path / "relay_config.json"
    agentproto_relay.main(["--config", str(cfg), "--port", "9001"], runner=runner)
    assert called == {"config_path": cfg, "agent_uuid": None, "host": "127.0.0.1", "port": 9001}


def test_load_config_resolves_paths(tmp_path: Path):
    cfg_path = tmp_path / "etc" / "relay_config.json"
    write_json(
        cfg_path,
        {
            "schema_version": "1.0",
            "agent_uuid": "agent-1",
            "log_level": "DEBUG",
            "log_file": "../log/agent.log",
            "schema_validation": {"enabled": False},
        },
    )
    cfg = load_config(cfg_path)
    assert cfg.agent_uuid == "agent-1"
    assert cfg.log_level == "DEBUG"
    assert cfg.log_file == (tmp_path / "log" / "agent.log").resolve()
    assert cfg.data_dir is None
    assert cfg.schema_validation_enabled is False


def test_load_config_defaults(tmp_path: Path):
    cfg_path = tmp_path / "relay_config.json"
    write_json(cfg_path, {"schema_version": "1.0", "agent_uuid": "agent-1"})
    assert load_config(cfg_path) == RelayConfig(schema_version="1.0", agent_uuid="agent-1")


@pytest.mark.parametrize(
    "raw",
    [
        {"schema_version": "1.0"},
        {"schema_version": "2.0", "agent_uuid": "a"},
        {"schema_version": "1.0", "agent_uuid": "a", "log_level": "LOUD"},
        {"schema_version": "1.0", "agent_uuid": "a", "port": 1},
    ],
)
def test_load_config_rejects_invalid(tmp_path: Path, raw: dict):
    cfg_path = tmp_path / "relay_config.json"
    write_json(cfg_path, raw)
    with pytest.raises(SchemaInvalid):
        load_config(cfg_path)


def test_configure_logging_replaces_its_own_handler(tmp_path: Path):
    logger = logging.getLogger(LOGGER_NAME)
    before = list(logger.handlers)
    level = logger.level
    try:
        configure_logging("WARNING", tmp_path / "a.log")
        configure_logging("INFO", tmp_path / "b.log")
        owned = [h for h in logger.handlers if h not in before]
        assert len(owned) == 1
        assert isinstance(owned[0], logging.FileHandler)
        assert Path(owned[0].baseFilename) == tmp_path / "b.log"
        assert logger.level == logging.INFO
    finally:
        for h in list(logger.handlers):
            if h not in before:
                logger.removeHandler(h)
                h.close()
        logger.setLevel(level)
