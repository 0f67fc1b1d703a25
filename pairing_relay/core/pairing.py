import logging

from pairing_relay.core import messages


class PairingEngine:
    def __init__(self, context):
        self.context = context

    def request(self, conn_id: str):
        """
        Handle a "waiting" request from conn_id.

        Returns the partner id when a pairing was made, None when conn_id
        ended up (or already was) in the queue.
        """
        registry = self.context.registry
        queue = self.context.queue

        if conn_id in queue:
            logging.info(f"Client {conn_id} already waiting")
            return None

        candidate = queue.dequeue_front()
        if candidate is None:
            queue.enqueue(conn_id)
            logging.info(f"Client {conn_id} added to waiting list")
            return None

        if not registry.is_open(candidate):
            # The stale head is dropped; the next entry is not tried.
            queue.enqueue(conn_id)
            logging.info(f"Waiting client {candidate} is gone, {conn_id} added to waiting list")
            return None

        self._pair(conn_id, candidate)
        return candidate

    def _pair(self, first: str, second: str):
        registry = self.context.registry
        for conn_id in (first, second):
            self._release_old_partner(conn_id)
        registry.set_partner(first, second)
        registry.set_partner(second, first)

        self.context.send(first, messages.paired(second))
        self.context.send(second, messages.paired(first))
        logging.info(f"Paired {first} with {second}")

    def _release_old_partner(self, conn_id: str):
        registry = self.context.registry
        old = registry.partner_of(conn_id)
        if old is not None and registry.partner_of(old) == conn_id:
            registry.set_partner(old, None)
