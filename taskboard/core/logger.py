import asyncio
import logging
from collections import deque
from typing import List, Callable

class LogStreamManager:
    _instance = None

    def __init__(self, maxlen: int = 2000):
        # Buffer last `maxlen` lines for the system log view
        self.buffer: deque = deque(maxlen=maxlen)
        self.connected_clients: List[Callable] = []

    @classmethod
    def get_instance(cls):
        if cls._instance is None:
            cls._instance = LogStreamManager()
        return cls._instance

    def add_log(self, message: str, level: str = "INFO"):
        """Adds a log message to the buffer and broadcasts it."""
        entry = {
            "message": message,
            "level": level,
        }
        self.buffer.append(entry)

        if self.connected_clients:
            try:
                loop = asyncio.get_running_loop()
                loop.create_task(self.broadcast_entry(entry))
            except RuntimeError:
                # No running loop (e.g. early startup), buffering is enough
                pass

    def subscribe(self, client) -> List[dict]:
        """Register a websocket for live entries; returns the backlog to replay"""
        self.connected_clients.append(client)
        return list(self.buffer)

    def unsubscribe(self, client):
        if client in self.connected_clients:
            self.connected_clients.remove(client)

    def recent(self, limit: int = 200) -> List[dict]:
        if limit <= 0:
            return []
        return list(self.buffer)[-limit:]

    async def broadcast_entry(self, entry: dict):
        """Send one entry to every websocket; drop the ones that fail."""
        to_remove = []
        for ws in self.connected_clients:
            try:
                await ws.send_json(entry)
            except Exception:
                to_remove.append(ws)

        for ws in to_remove:
            self.unsubscribe(ws)

# Global instance
log_manager = LogStreamManager.get_instance()

class ListLogHandler(logging.Handler):
    """Custom logging handler to push logs into LogStreamManager."""
    def __init__(self, manager: LogStreamManager = None, level=logging.NOTSET):
        super().__init__(level)
        self.manager = manager or log_manager

    def emit(self, record):
        try:
            msg = self.format(record)
            self.manager.add_log(msg, record.levelname)
        except Exception:
            self.handleError(record)


def configure_logging(level: str = "INFO", log_file: str = None):
    """Root logging setup: stdout, optional file, and the in-memory buffer."""
    import sys

    fmt = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))

    buffer_handler = ListLogHandler()
    buffer_handler.setFormatter(logging.Formatter(fmt))
    handlers.append(buffer_handler)

    logging.basicConfig(level=level, format=fmt, handlers=handlers, force=True)
