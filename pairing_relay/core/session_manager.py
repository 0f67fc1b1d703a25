import logging

from pairing_relay.core.state_machine import ClientState, StateMachine
from pairing_relay.network.transport import TransportLayer
from pairing_relay.security.rate_limiter import RateLimiter
from pairing_relay.utils.config import DEFAULT_RELAY_URL
from pairing_relay.utils.error_codes import ErrorCodes, RelayError
from pairing_relay.utils.validators import validate_message_length


class SessionManager:
    """
    Client-side view of the relay protocol.

    Reacts to frames from the relay, keeps track of our id and current
    partner, and reports what happened through `ui_callback(event, data)`.
    """

    def __init__(self, ui_callback=None, transport=None, uri=DEFAULT_RELAY_URL):
        self.state_machine = StateMachine()
        self.transport = transport or TransportLayer(uri)
        self.ui_callback = ui_callback
        self.rate_limiter = RateLimiter(max_calls=5, period=1.0)  # 5 msgs/sec
        self.client_id = None
        self.partner_id = None

        self.transport.on_message_callback = self.on_network_message
        self.transport.on_connection_lost_callback = self.on_connection_lost

    def _notify(self, event_type, data=None):
        if self.ui_callback:
            self.ui_callback(event_type, data)

    @property
    def state(self):
        return self.state_machine.current_state

    async def start_session(self):
        self.state_machine.transition_to(ClientState.CONNECTING)
        self._notify("CONNECTING", self.transport.uri)

        success = await self.transport.connect()
        if not success:
            self.state_machine.transition_to(ClientState.DISCONNECTED)
            raise RelayError(ErrorCodes.ERR_NETWORK, "Could not connect to relay")

    async def search(self):
        self.partner_id = None
        self.state_machine.transition_to(ClientState.SEARCHING)
        self._notify("SEARCHING")
        await self.transport.send({"type": "waiting"})

    async def on_network_message(self, data: dict):
        kind = data.get("type")

        if kind == "welcome":
            self.client_id = data.get("id")
            self.state_machine.transition_to(ClientState.IDLE)
            self._notify("WELCOME", self.client_id)
            await self.search()

        elif kind == "paired":
            self.partner_id = data.get("partnerId")
            self.state_machine.transition_to(ClientState.PAIRED)
            self._notify("PAIRED", self.partner_id)

        elif kind == "message":
            if data.get("from") != self.partner_id:
                return
            payload = data.get("payload") or {}
            self._notify("MESSAGE", payload.get("text"))

        elif kind in ("chatEnded", "disconnected"):
            if self.partner_id is None or data.get("from") != self.partner_id:
                return
            self._notify("CHAT_ENDED" if kind == "chatEnded" else "PARTNER_LEFT")
            await self.search()

        elif kind == "ping":
            await self.transport.send({"type": "pong"})

        elif kind == "error":
            self._notify("ERROR", data.get("message"))

        else:
            # offer/answer/iceCandidate: this client only does text chat
            logging.debug(f"Ignoring {kind} frame")

    def on_connection_lost(self):
        if self.state_machine.is_in(ClientState.SESSION_DESTROYED):
            return
        self.partner_id = None
        self.state_machine.transition_to(ClientState.DISCONNECTED)
        self._notify("DISCONNECTED")

    async def send_message(self, text: str) -> bool:
        if self.state != ClientState.PAIRED:
            self._notify("ERROR", "Not connected to a partner yet.")
            return False

        if not validate_message_length(text):
            self._notify("ERROR", "Message too long.")
            return False

        if not self.rate_limiter.check():
            self._notify("ERROR", f"Slow down, try again in {self.rate_limiter.retry_after():.1f}s.")
            return False

        await self.transport.send({
            "type": "message",
            "to": self.partner_id,
            "payload": {"text": text},
        })
        return True

    async def next_partner(self):
        if self.state == ClientState.PAIRED:
            await self.transport.send({"type": "endChat", "to": self.partner_id})
            await self.search()

    async def destroy_session(self):
        if self.state == ClientState.PAIRED:
            await self.transport.send({"type": "endChat", "to": self.partner_id})
        self.partner_id = None
        self.state_machine.transition_to(ClientState.SESSION_DESTROYED)
        await self.transport.disconnect()
        self._notify("DESTROYED")
