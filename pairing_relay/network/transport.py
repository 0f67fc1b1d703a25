import asyncio
import json
import logging

import websockets

from pairing_relay.utils.config import DEFAULT_RELAY_URL


class TransportLayer:
    """Client end of the relay connection: one websocket, JSON objects in and out."""

    def __init__(self, uri=DEFAULT_RELAY_URL):
        self.uri = uri
        self.websocket = None
        self.on_message_callback = None
        self.on_connection_lost_callback = None
        self._listener = None

    async def connect(self) -> bool:
        try:
            self.websocket = await websockets.connect(self.uri)
        except (OSError, websockets.exceptions.WebSocketException) as e:
            logging.error(f"Connection to {self.uri} failed: {e}")
            return False
        self._listener = asyncio.create_task(self.listen())
        return True

    async def listen(self):
        try:
            async for message in self.websocket:
                try:
                    data = json.loads(message)
                except json.JSONDecodeError:
                    logging.warning("Ignoring undecodable frame from relay")
                    continue
                if isinstance(data, dict) and self.on_message_callback:
                    await self.on_message_callback(data)
        except websockets.exceptions.ConnectionClosed:
            pass
        if self.on_connection_lost_callback:
            self.on_connection_lost_callback()

    async def send(self, message: dict):
        if self.websocket:
            try:
                await self.websocket.send(json.dumps(message))
            except websockets.exceptions.ConnectionClosed:
                logging.debug(f"Dropped {message.get('type')}: connection closed")

    async def disconnect(self):
        if self.websocket:
            await self.websocket.close()
