from typing import List

from fastapi import FastAPI, Request, WebSocket
from fastapi.middleware.cors import CORSMiddleware

from .dispatch import Dispatcher


def setup_cors(app: FastAPI, origins: List[str]):
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # browsers refuse credentials with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def get_dispatcher(request: Request) -> Dispatcher:
    return request.app.state.dispatcher


def get_ws_dispatcher(ws: WebSocket) -> Dispatcher:
    return ws.app.state.dispatcher
