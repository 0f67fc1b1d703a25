import asyncio
import logging

import websockets

from pairing_relay.core.context import RelayContext
from pairing_relay.core.lifecycle import LifecycleManager
from pairing_relay.core.router import MessageRouter
from pairing_relay.core.sweeper import LivenessSweeper
from pairing_relay.network.ws_handle import WebSocketHandle
from pairing_relay.utils.config import RelayConfig, get_log_level


class RelayServer:
    def __init__(self, config=None, context=None):
        self.config = config or RelayConfig()
        self.context = context or RelayContext()
        self.lifecycle = LifecycleManager(self.context)
        self.router = MessageRouter(self.context)
        self.sweeper = LivenessSweeper(self.context)
        self._sweeper_task = None

    async def handler(self, websocket):
        handle = WebSocketHandle(websocket)
        handle.start()
        conn_id = self.lifecycle.open(handle)
        keepalive = asyncio.create_task(self.lifecycle.keepalive(conn_id, self.config.ping_interval))
        try:
            async for message in websocket:
                self.router.handle(conn_id, message)
        except websockets.exceptions.ConnectionClosed:
            pass
        except Exception:
            logging.exception(f"Error processing messages from {conn_id}")
        finally:
            keepalive.cancel()
            self.lifecycle.close(conn_id)
            await handle.close()

    async def start(self):
        """Bind the listener and start the sweeper. Returns the websocket server."""
        server = await websockets.serve(self.handler, self.config.host, self.config.port)
        self._sweeper_task = asyncio.create_task(self.sweeper.run(self.config.sweep_interval))
        logging.info(f"WebSocket server running on port {self.config.port}")
        return server

    async def stop(self, server=None):
        if self._sweeper_task is not None:
            self._sweeper_task.cancel()
            self._sweeper_task = None
        if server is not None:
            server.close()
            await server.wait_closed()

    async def serve(self):
        server = await self.start()
        try:
            await asyncio.Future()  # run forever
        finally:
            await self.stop(server)


def main():
    logging.basicConfig(level=get_log_level(), format='%(asctime)s - %(message)s')
    config = RelayConfig.from_env()
    try:
        asyncio.run(RelayServer(config).serve())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
