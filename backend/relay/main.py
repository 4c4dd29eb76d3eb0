# backend/relay/main.py
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import (
    Depends,
    FastAPI,
    HTTPException,
    Query,
    Request,
    WebSocket,
)
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from .deps import get_dispatcher, get_ws_dispatcher, setup_cors
from .dispatch import Dispatcher
from .models import Message
from .session import run_session
from .settings import Settings, app_settings
from .storage import GroupStore
from .websocket import ConnectionRegistry

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the relay app with its own registry and room store."""
    settings = settings or app_settings

    app = FastAPI(title="Message Relay", version="1.0.0")
    setup_cors(app, settings.cors_origins)

    app.state.settings = settings
    app.state.dispatcher = Dispatcher(
        ConnectionRegistry(),
        GroupStore(),
        send_timeout=settings.send_timeout,
        echo_to_sender=settings.echo_to_sender,
    )

    @app.get("/health")
    def health():
        return {"status": "ok", "ts": datetime.now(timezone.utc).isoformat()}

    # -------------------- One-shot: POST /send --------------------
    @app.post("/send", response_class=PlainTextResponse)
    async def send_message(
        request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)
    ):
        raw = await request.body()
        try:
            msg = Message.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Rejected /send body: %s", e)
            raise HTTPException(status_code=400, detail=str(e))

        # direct addressing only; a room alone is not enough here
        if not msg.is_direct_addressed:
            raise HTTPException(status_code=400, detail="No user_ids provided")

        report = await dispatcher.route(msg, msg.to_frame(), direct_only=True)
        return f"Message sent to {report.attempted} clients"

    # -------------------- WebSocket: /ws?user_id=<id>&room_id=<room> --------------------
    @app.websocket("/ws")
    async def ws_connect(
        ws: WebSocket,
        user_id: str = Query("", description="Addressable user id"),
        room_id: str = Query("", description="Room to join"),
        dispatcher: Dispatcher = Depends(get_ws_dispatcher),
    ):
        await run_session(ws, user_id, room_id, dispatcher)

    return app


app = create_app()
