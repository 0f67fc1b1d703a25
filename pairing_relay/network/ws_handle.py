import asyncio
import logging

import websockets
from websockets.protocol import State


class WebSocketHandle:
    """
    Server-side send capability for one websocket.

    `send` never blocks: frames go into an outbox that a single writer task
    drains in order. Failures on a closing socket are dropped.
    """

    def __init__(self, websocket):
        self.websocket = websocket
        self.outbox = asyncio.Queue()
        self._writer = None

    def start(self):
        if self._writer is None:
            self._writer = asyncio.create_task(self._drain())

    def is_open(self) -> bool:
        return self.websocket.state is State.OPEN

    def send(self, text: str):
        if not self.is_open():
            return
        self.outbox.put_nowait(text)

    async def _drain(self):
        while True:
            text = await self.outbox.get()
            try:
                await self.websocket.send(text)
            except websockets.exceptions.ConnectionClosed:
                logging.debug("Send on closed connection dropped")
                return

    async def close(self):
        if self._writer is None:
            return
        self._writer.cancel()
        try:
            await self._writer
        except asyncio.CancelledError:
            pass
        self._writer = None
