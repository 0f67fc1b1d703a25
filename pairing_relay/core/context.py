import logging

from pairing_relay.core import messages
from pairing_relay.core.registry import ConnectionRegistry
from pairing_relay.core.waiting_queue import WaitingQueue


class RelayContext:
    """State shared by every component of one relay: the registry and the queue."""

    def __init__(self, registry=None, queue=None):
        self.registry = registry if registry is not None else ConnectionRegistry()
        self.queue = queue if queue is not None else WaitingQueue()

    def send(self, conn_id: str, message: dict) -> bool:
        record = self.registry.lookup(conn_id)
        if record is None or not record.handle.is_open():
            logging.debug(f"Dropping {message.get('type')} for unreachable {conn_id}")
            return False
        record.handle.send(messages.encode(message))
        return True
