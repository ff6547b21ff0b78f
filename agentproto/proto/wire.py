from __future__ import annotations

import binascii

from .codec import dump_document, load_document
from .errors import EnvelopeParseError
from .model import Cmd, Reply
from .schema import SchemaRegistry


def cmd_from_document(obj: dict, *, schemas: SchemaRegistry | None = None) -> Cmd:
    if schemas is not None:
        schemas.validate(obj, "cmd.schema.json")
    try:
        return Cmd.from_dict(obj)
    except (TypeError, ValueError, OverflowError, binascii.Error) as e:
        raise EnvelopeParseError(code="ENVELOPE_PARSE_ERROR", message=str(e)) from e


def reply_from_document(obj: dict, *, schemas: SchemaRegistry | None = None) -> Reply:
    if schemas is not None:
        schemas.validate(obj, "reply.schema.json")
    try:
        return Reply.from_dict(obj)
    except (TypeError, ValueError, OverflowError, binascii.Error) as e:
        raise EnvelopeParseError(code="ENVELOPE_PARSE_ERROR", message=str(e)) from e


def encode_cmd(cmd: Cmd) -> bytes:
    return dump_document(cmd.to_dict())


def decode_cmd(raw: bytes | str, *, schemas: SchemaRegistry | None = None) -> Cmd:
    return cmd_from_document(load_document(raw), schemas=schemas)


def encode_reply(reply: Reply) -> bytes:
    return dump_document(reply.to_dict())


def decode_reply(raw: bytes | str, *, schemas: SchemaRegistry | None = None) -> Reply:
    return reply_from_document(load_document(raw), schemas=schemas)
