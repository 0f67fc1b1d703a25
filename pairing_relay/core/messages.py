"""
Wire codec for the relay protocol.

Inbound frames are decoded once into one of the variants below; everything
the router needs to act on is validated here. Outbound frames are plain dicts
built by the helpers at the bottom and serialized with `encode`.
"""
import json
from dataclasses import dataclass
from typing import Any, Optional, Union

from pairing_relay.utils.error_codes import ErrorCodes, ProtocolError
from pairing_relay.utils.validators import validate_connection_id, validate_message_text

SIGNAL_TYPES = ("offer", "answer", "iceCandidate")
INBOUND_TYPES = ("waiting",) + SIGNAL_TYPES + ("message", "endChat", "pong")


@dataclass(frozen=True)
class Waiting:
    pass


@dataclass(frozen=True)
class Signal:
    kind: str
    to: str
    payload: Any


@dataclass(frozen=True)
class ChatMessage:
    to: str
    payload: dict


@dataclass(frozen=True)
class EndChat:
    to: Optional[str] = None


@dataclass(frozen=True)
class Pong:
    pass


InboundMessage = Union[Waiting, Signal, ChatMessage, EndChat, Pong]


def _require_destination(data: dict, kind: str) -> str:
    to = data.get("to")
    if to is None:
        raise ProtocolError(f"'{kind}' requires a 'to' field", ErrorCodes.ERR_MISSING_FIELD)
    if not validate_connection_id(to):
        raise ProtocolError(f"'{kind}' has an invalid 'to' field")
    return to


def decode(raw) -> InboundMessage:
    """Parse one inbound frame. Raises ProtocolError on anything malformed."""
    if not isinstance(raw, str):
        raise ProtocolError("Invalid message format")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        raise ProtocolError("Invalid message format")

    if not isinstance(data, dict):
        raise ProtocolError("Message must be a JSON object")

    kind = data.get("type")
    if kind is None:
        raise ProtocolError("Missing 'type' field", ErrorCodes.ERR_MISSING_FIELD)
    if not isinstance(kind, str) or kind not in INBOUND_TYPES:
        raise ProtocolError(f"Unknown message type: {kind!r}", ErrorCodes.ERR_UNKNOWN_TYPE)

    if kind == "waiting":
        return Waiting()
    if kind == "pong":
        return Pong()

    if kind == "endChat":
        # no destination: the sender is only cancelling its own search
        if data.get("to") is None:
            return EndChat()
        return EndChat(to=_require_destination(data, kind))

    to = _require_destination(data, kind)

    payload = data.get("payload")
    if payload is None:
        raise ProtocolError(f"'{kind}' requires a 'payload' field", ErrorCodes.ERR_MISSING_FIELD)

    if kind == "message":
        if not validate_message_text(payload):
            raise ProtocolError("'message' payload requires non-empty 'text'", ErrorCodes.ERR_MISSING_FIELD)
        return ChatMessage(to=to, payload=payload)

    return Signal(kind=kind, to=to, payload=payload)


def encode(message: dict) -> str:
    return json.dumps(message, separators=(",", ":"))


# Outbound frames

def welcome(conn_id: str) -> dict:
    return {"type": "welcome", "id": conn_id}


def paired(partner_id: str) -> dict:
    return {"type": "paired", "partnerId": partner_id}


def relayed(kind: str, sender_id: str, payload) -> dict:
    return {"type": kind, "from": sender_id, "payload": payload}


def chat_ended(sender_id: str) -> dict:
    return {"type": "chatEnded", "from": sender_id}


def disconnected(closed_id: str) -> dict:
    return {"type": "disconnected", "from": closed_id}


def ping() -> dict:
    return {"type": "ping"}


def error(message: str) -> dict:
    return {"type": "error", "message": message}
