# backend/relay/session.py
import logging
from typing import Optional, Union

from fastapi import WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError
from starlette.websockets import WebSocketState

from .dispatch import Dispatcher
from .models import Message

logger = logging.getLogger(__name__)


async def read_frame(ws: WebSocket) -> Union[str, bytes]:
    """
    Wait for the next data frame and return its payload as received.

    Raises:
        WebSocketDisconnect: when the peer goes away.
    """
    event = await ws.receive()
    if event["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(event.get("code", status.WS_1000_NORMAL_CLOSURE))
    if event.get("text") is not None:
        return event["text"]
    return event.get("bytes") or b""


async def run_session(
    ws: WebSocket,
    user_id: Optional[str],
    room_id: Optional[str],
    dispatcher: Dispatcher,
) -> None:
    """
    Own one client connection from handshake to close.

    The socket is accepted, registered under ``user_id`` (and joined to
    ``room_id`` when given), then read frame by frame. Each frame is routed
    before the next read, so one connection never has two fan-outs in
    flight. Any read failure ends the session and unregisters it; nothing
    raised here reaches the server.
    """
    await ws.accept()

    if not user_id:
        logger.warning("User ID is required, closing connection")
        await ws.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    dispatcher.registry.register(user_id, ws)
    if room_id:
        dispatcher.groups.join(room_id, user_id)

    try:
        while True:
            frame = await read_frame(ws)
            try:
                msg = Message.model_validate_json(frame)
                if isinstance(frame, bytes):
                    frame = frame.decode("utf-8")
            except (ValidationError, UnicodeDecodeError) as e:
                logger.warning("Error parsing message from %s: %s", user_id, e)
                continue
            await dispatcher.route(msg, frame, sender=user_id)
    except WebSocketDisconnect as e:
        logger.info("User %s closed connection (code %s)", user_id, e.code)
    except Exception as e:
        logger.warning("Error reading message from %s: %s", user_id, e)
    finally:
        dispatcher.registry.unregister(user_id, ws)
        if (
            ws.client_state == WebSocketState.CONNECTED
            and ws.application_state == WebSocketState.CONNECTED
        ):
            try:
                await ws.close()
            except Exception:
                logger.debug("Connection for %s already closed", user_id)
