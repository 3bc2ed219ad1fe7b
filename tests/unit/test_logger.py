"""
Unit tests for the in-memory log buffer
"""
import logging

import pytest
from unittest.mock import AsyncMock

from taskboard.core.logger import LogStreamManager, ListLogHandler


class TestLogStreamManager:

    def test_buffer_is_bounded(self):
        manager = LogStreamManager(maxlen=3)
        for i in range(5):
            manager.add_log(f"line {i}")

        assert [e["message"] for e in manager.recent(10)] == ["line 2", "line 3", "line 4"]

    def test_recent_limit(self):
        manager = LogStreamManager()
        manager.add_log("a")
        manager.add_log("b", "ERROR")

        assert manager.recent(1) == [{"message": "b", "level": "ERROR"}]
        assert manager.recent(0) == []

    def test_add_log_without_loop_only_buffers(self):
        manager = LogStreamManager()
        manager.connected_clients.append(AsyncMock())

        manager.add_log("startup")

        assert len(manager.buffer) == 1

    @pytest.mark.asyncio
    async def test_broadcast_drops_failing_clients(self):
        manager = LogStreamManager()
        good = AsyncMock()
        bad = AsyncMock()
        bad.send_json.side_effect = RuntimeError("closed")
        manager.connected_clients.extend([good, bad])

        await manager.broadcast_entry({"message": "x", "level": "INFO"})

        good.send_json.assert_awaited_once()
        assert manager.connected_clients == [good]


def test_handler_pushes_formatted_records():
    manager = LogStreamManager()
    handler = ListLogHandler(manager)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    test_logger = logging.getLogger("taskboard.tests.handler")
    test_logger.addHandler(handler)
    test_logger.setLevel(logging.INFO)
    try:
        test_logger.warning("disk almost full")
    finally:
        test_logger.removeHandler(handler)

    assert manager.recent(1) == [{"message": "WARNING disk almost full", "level": "WARNING"}]


def test_subscribe_returns_backlog_and_unsubscribe_is_idempotent():
    manager = LogStreamManager()
    manager.add_log("before")
    client = AsyncMock()

    backlog = manager.subscribe(client)

    assert backlog == [{"message": "before", "level": "INFO"}]
    assert manager.connected_clients == [client]
    manager.unsubscribe(client)
    manager.unsubscribe(client)
    assert manager.connected_clients == []
