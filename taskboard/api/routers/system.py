"""
System Router

- Health / configuration summary
- Recent log lines (HTTP and websocket)
"""
from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect

from ... import __version__
from ...core.container import container
from ...core.logger import log_manager
from ...core.services.session_service import SessionService
from ..dependencies import get_session_service

import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/health")
async def health(session: SessionService = Depends(get_session_service)):
    """
    Liveness plus what the client is pointed at

    Returns:
        Version, backend base URL and current session state
    """
    return {
        "ok": True,
        "version": __version__,
        "api_base_url": container.config.api.base_url(),
        "session": session.state.value,
    }


@router.get("/logs")
async def get_logs(limit: int = Query(200, ge=1, le=2000)):
    """Last `limit` buffered log entries"""
    return {"ok": True, "logs": log_manager.recent(limit)}


@router.websocket("/ws/logs")
async def stream_logs(websocket: WebSocket):
    """Replay the buffered entries, then push new ones as they are logged"""
    await websocket.accept()
    backlog = log_manager.subscribe(websocket)
    try:
        for entry in backlog:
            await websocket.send_json(entry)
        # Incoming frames are ignored; the loop only waits for the client to leave
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("[LOGS] Log viewer disconnected")
    finally:
        log_manager.unsubscribe(websocket)
