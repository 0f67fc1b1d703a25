import json

import pytest

from pairing_relay.core.context import RelayContext
from pairing_relay.core.lifecycle import LifecycleManager
from pairing_relay.core.router import MessageRouter


class FakeHandle:
    """In-memory stand-in for a websocket handle. Records decoded frames."""

    def __init__(self, open_=True):
        self.open = open_
        self.sent = []

    def is_open(self):
        return self.open

    def send(self, text):
        self.sent.append(json.loads(text))

    def types(self):
        return [m["type"] for m in self.sent]


@pytest.fixture
def context():
    return RelayContext()


@pytest.fixture
def lifecycle(context):
    counter = iter(range(1, 1000))
    return LifecycleManager(context, id_factory=lambda: f"client-{next(counter)}")


@pytest.fixture
def router(context):
    return MessageRouter(context)


@pytest.fixture
def connect(lifecycle):
    """Open a fake connection; returns (id, handle) with the welcome frame cleared."""
    def _connect():
        handle = FakeHandle()
        conn_id = lifecycle.open(handle)
        handle.sent.clear()
        return conn_id, handle
    return _connect
