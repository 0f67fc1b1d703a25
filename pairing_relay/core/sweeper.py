import asyncio
import logging


class LivenessSweeper:
    def __init__(self, context):
        self.context = context

    def sweep(self) -> int:
        removed = self.context.queue.sweep_stale(self.context.registry.is_open)
        if removed:
            logging.info(f"Swept {removed} stale entries from the waiting list")
        return removed

    async def run(self, interval: float):
        while True:
            await asyncio.sleep(interval)
            self.sweep()
