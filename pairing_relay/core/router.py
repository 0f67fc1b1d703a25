import logging

from pairing_relay.core import messages
from pairing_relay.core.messages import ChatMessage, EndChat, Pong, Signal, Waiting
from pairing_relay.core.pairing import PairingEngine
from pairing_relay.utils.error_codes import ProtocolError


class MessageRouter:
    """Decodes inbound frames and routes them by addressee."""

    def __init__(self, context, pairing=None):
        self.context = context
        self.pairing = pairing if pairing is not None else PairingEngine(context)

    def handle(self, sender_id: str, raw):
        try:
            message = messages.decode(raw)
        except ProtocolError as e:
            logging.info(f"Rejected message from {sender_id}: {e.message}")
            self.context.send(sender_id, messages.error(e.message))
            return

        if isinstance(message, Waiting):
            self.pairing.request(sender_id)
        elif isinstance(message, Signal):
            self._relay(sender_id, message.to, messages.relayed(message.kind, sender_id, message.payload))
        elif isinstance(message, ChatMessage):
            self._relay(sender_id, message.to, messages.relayed("message", sender_id, message.payload))
        elif isinstance(message, EndChat):
            self._end_chat(sender_id, message.to)
        elif isinstance(message, Pong):
            logging.debug(f"Received pong from {sender_id}")
        else:
            raise TypeError(f"Unhandled message variant: {type(message).__name__}")

    def _relay(self, sender_id: str, target_id: str, frame: dict):
        if self.context.send(target_id, frame):
            logging.info(f"Relayed {frame['type']} from {sender_id} to {target_id}")
        else:
            logging.debug(f"Dropped {frame['type']} from {sender_id}: {target_id} unreachable")

    def _end_chat(self, sender_id: str, target_id):
        # Partner links are left as they are; see DESIGN.md.
        if self.context.queue.remove(sender_id):
            logging.info(f"Client {sender_id} left the waiting list")
        if target_id is None:
            return
        if self.context.send(target_id, messages.chat_ended(sender_id)):
            logging.info(f"Client {sender_id} ended chat with {target_id}")
