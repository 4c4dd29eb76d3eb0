"""
Shared fixtures for relay tests.

Socket doubles follow the shape of ``fastapi.WebSocket`` closely enough for
the registry, the dispatcher and the session loop.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import WebSocket
from starlette.websockets import WebSocketState

from relay.dispatch import Dispatcher
from relay.storage import GroupStore
from relay.websocket import ConnectionRegistry


def create_mock_websocket(events=None):
    """
    Creates a mock WebSocket connection.

    Args:
        events: ASGI receive events handed out by ``receive()`` in order.

    Returns:
        MagicMock: Mocked WebSocket instance
    """
    ws_mock = MagicMock(spec=WebSocket)

    ws_mock.send_text = AsyncMock()
    ws_mock.receive = AsyncMock(side_effect=list(events or []))
    ws_mock.accept = AsyncMock()
    ws_mock.close = AsyncMock()

    ws_mock.client_state = WebSocketState.CONNECTED
    ws_mock.application_state = WebSocketState.CONNECTED

    return ws_mock


def text_event(text):
    return {"type": "websocket.receive", "text": text}


def bytes_event(data):
    return {"type": "websocket.receive", "bytes": data}


def disconnect_event(code=1000):
    return {"type": "websocket.disconnect", "code": code}


@pytest.fixture
def registry():
    return ConnectionRegistry()


@pytest.fixture
def groups():
    return GroupStore()


@pytest.fixture
def dispatcher(registry, groups):
    return Dispatcher(registry, groups, send_timeout=1.0)
