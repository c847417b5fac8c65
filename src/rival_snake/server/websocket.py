"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from rival_snake.server.session_manager import SessionManager, encode_state
from rival_snake.snake import Direction

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def parse_direction(raw: str) -> Direction | None:
    """Decode a ``{"direction": "up"}`` message, ignoring anything else."""
    try:
        msg = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(msg, dict):
        return None
    name = msg.get("direction")
    if not isinstance(name, str):
        return None
    try:
        return Direction.parse(name)
    except ValueError:
        return None


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send directions, receive a snapshot each tick."""
    instance = _get_manager(websocket).get_session(session_id)
    if instance is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    instance.sockets.append(websocket)
    logger.info("Client connected to session %s.", session_id)

    # Send the current snapshot so the client can render before the first tick.
    await websocket.send_text(encode_state(instance.session.state))

    try:
        while True:
            direction = parse_direction(await websocket.receive_text())
            if direction is not None:
                instance.session.submit_direction(direction)
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session_id)
    finally:
        if websocket in instance.sockets:
            instance.sockets.remove(websocket)
