from __future__ import annotations

import pytest

from agentproto.proto.payloads import LogFile, LogLevel, ServiceData, StatusData


def test_payload_field_names():
    assert ServiceData(name="mm").to_dict() == {"Name": "mm"}
    assert ServiceData(name="mm", config=b"hello").to_dict() == {"Name": "mm", "Config": "aGVsbG8="}
    assert StatusData(agent="Ready").to_dict() == {"Agent": "Ready", "CmdQueue": [], "Service": {}}
    assert LogFile(file="/var/log/agent.log").to_dict() == {"File": "/var/log/agent.log"}
    assert LogLevel(level=20).to_dict() == {"Level": 20}


def test_payloads_read_null_fields_as_empty():
    assert StatusData.from_dict({"Agent": "Ready", "CmdQueue": None, "Service": None}) == StatusData(agent="Ready")
    assert ServiceData.from_dict({"Name": "qan", "Config": ""}) == ServiceData(name="qan")
    assert LogLevel.from_dict({}) == LogLevel(level=0)


@pytest.mark.parametrize("level", [True, 5.7, "10", [10]])
def test_log_level_must_be_an_integer(level):
    with pytest.raises(TypeError):
        LogLevel.from_dict({"Level": level})


def test_payload_string_fields_are_not_coerced():
    with pytest.raises(TypeError):
        ServiceData.from_dict({"Name": 0})
    with pytest.raises(TypeError):
        LogFile.from_dict({"File": {"path": "x"}})
