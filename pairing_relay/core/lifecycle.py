import asyncio
import logging
import uuid

from pairing_relay.core import messages


def generate_id() -> str:
    return str(uuid.uuid4())


class LifecycleManager:
    def __init__(self, context, id_factory=generate_id):
        self.context = context
        self.id_factory = id_factory

    def open(self, handle) -> str:
        conn_id = self.id_factory()
        self.context.registry.register(conn_id, handle)
        self.context.send(conn_id, messages.welcome(conn_id))
        logging.info(f"Client {conn_id} connected")
        return conn_id

    def close(self, conn_id: str):
        """
        Drop conn_id from the registry and the queue, and release its partner.
        Runs without awaiting, so no other event sees a half-closed state.
        """
        registry = self.context.registry
        record = registry.remove(conn_id)
        self.context.queue.remove(conn_id)
        if record is None:
            return
        logging.info(f"Client {conn_id} disconnected")

        partner_id = record.partner_id
        if partner_id is None:
            return
        if registry.partner_of(partner_id) == conn_id:
            registry.set_partner(partner_id, None)
            if self.context.send(partner_id, messages.disconnected(conn_id)):
                logging.info(f"Notified {partner_id} that {conn_id} left")

    async def keepalive(self, conn_id: str, interval: float):
        while True:
            await asyncio.sleep(interval)
            if not self.context.registry.is_open(conn_id):
                return
            self.context.send(conn_id, messages.ping())
