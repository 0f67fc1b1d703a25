import pytest

from pairing_relay.core.session_manager import SessionManager
from pairing_relay.core.state_machine import ClientState


class FakeTransport:
    def __init__(self, connect_ok=True):
        self.uri = "ws://test"
        self.connect_ok = connect_ok
        self.sent = []
        self.disconnected = False
        self.on_message_callback = None
        self.on_connection_lost_callback = None

    async def connect(self):
        return self.connect_ok

    async def send(self, message):
        self.sent.append(message)

    async def disconnect(self):
        self.disconnected = True


@pytest.fixture
def events():
    return []


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def manager(transport, events):
    return SessionManager(lambda event, data=None: events.append((event, data)), transport=transport)


async def pair_up(manager, partner="p1"):
    await manager.on_network_message({"type": "welcome", "id": "me"})
    await manager.on_network_message({"type": "paired", "partnerId": partner})


@pytest.mark.asyncio
async def test_welcome_starts_search(manager, transport, events):
    await manager.on_network_message({"type": "welcome", "id": "me"})

    assert manager.client_id == "me"
    assert manager.state == ClientState.SEARCHING
    assert transport.sent == [{"type": "waiting"}]
    assert ("WELCOME", "me") in events


@pytest.mark.asyncio
async def test_paired_then_chat(manager, transport, events):
    await pair_up(manager)
    assert manager.state == ClientState.PAIRED

    assert await manager.send_message("hello")
    assert transport.sent[-1] == {"type": "message", "to": "p1", "payload": {"text": "hello"}}

    await manager.on_network_message({"type": "message", "from": "p1", "payload": {"text": "yo"}})
    assert ("MESSAGE", "yo") in events


@pytest.mark.asyncio
async def test_messages_from_strangers_are_ignored(manager, events):
    await pair_up(manager)
    await manager.on_network_message({"type": "message", "from": "other", "payload": {"text": "spam"}})
    assert not [e for e in events if e[0] == "MESSAGE"]


@pytest.mark.asyncio
async def test_send_requires_partner(manager, transport, events):
    assert not await manager.send_message("hello")
    assert transport.sent == []
    assert events[-1][0] == "ERROR"


@pytest.mark.asyncio
async def test_send_is_rate_limited(manager, transport, events):
    await pair_up(manager)
    results = [await manager.send_message(f"m{i}") for i in range(6)]
    assert results == [True] * 5 + [False]
    assert events[-1][0] == "ERROR"
    assert "try again" in events[-1][1]


@pytest.mark.asyncio
@pytest.mark.parametrize("kind, event", [("chatEnded", "CHAT_ENDED"), ("disconnected", "PARTNER_LEFT")])
async def test_partner_leaving_restarts_search(manager, transport, events, kind, event):
    await pair_up(manager)
    transport.sent.clear()

    await manager.on_network_message({"type": kind, "from": "p1"})

    assert (event, None) in events
    assert manager.partner_id is None
    assert manager.state == ClientState.SEARCHING
    assert transport.sent == [{"type": "waiting"}]


@pytest.mark.asyncio
async def test_ping_answered_with_pong(manager, transport):
    await manager.on_network_message({"type": "ping"})
    assert transport.sent == [{"type": "pong"}]


@pytest.mark.asyncio
async def test_next_partner_ends_chat_and_searches(manager, transport):
    await pair_up(manager)
    transport.sent.clear()
    await manager.next_partner()
    assert transport.sent == [{"type": "endChat", "to": "p1"}, {"type": "waiting"}]


@pytest.mark.asyncio
async def test_destroy_session(manager, transport, events):
    await pair_up(manager)
    await manager.destroy_session()

    assert transport.sent[-1] == {"type": "endChat", "to": "p1"}
    assert transport.disconnected
    assert manager.state == ClientState.SESSION_DESTROYED

    manager.on_connection_lost()
    assert events[-1][0] == "DESTROYED"


@pytest.mark.asyncio
async def test_connection_lost(manager, events):
    await pair_up(manager)
    manager.on_connection_lost()
    assert manager.state == ClientState.DISCONNECTED
    assert events[-1][0] == "DISCONNECTED"


@pytest.mark.asyncio
async def test_start_session_failure_raises(events):
    from pairing_relay.utils.error_codes import ErrorCodes, RelayError

    manager = SessionManager(lambda *a: None, transport=FakeTransport(connect_ok=False))
    with pytest.raises(RelayError) as exc:
        await manager.start_session()
    assert exc.value.code == ErrorCodes.ERR_NETWORK
