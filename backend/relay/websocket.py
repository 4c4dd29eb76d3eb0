# backend/relay/websocket.py
import logging
import threading
from typing import Dict, Iterable, List, Optional, Tuple

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    """
    Live connections keyed by user id, at most one per user.

    A second registration for the same user replaces the first (last write
    wins). The replaced socket is neither notified nor closed here.
    """

    def __init__(self) -> None:
        self._by_user: Dict[str, WebSocket] = {}
        self._lock = threading.RLock()

    def register(self, user_id: str, ws: WebSocket) -> None:
        # DO NOT call ws.accept() here; the session does it
        with self._lock:
            replaced = self._by_user.get(user_id)
            self._by_user[user_id] = ws
        if replaced is not None and replaced is not ws:
            logger.info("User %s reconnected, previous connection dropped", user_id)
        logger.info("User %s connected", user_id)

    def unregister(self, user_id: str, ws: Optional[WebSocket] = None) -> bool:
        """
        Remove the entry for ``user_id``.

        With ``ws`` given, the entry is removed only if it still holds that
        exact socket, so a session that was replaced cannot evict the newer
        connection on its way out.

        Returns:
            True if an entry was removed.
        """
        with self._lock:
            current = self._by_user.get(user_id)
            if current is None:
                return False
            if ws is not None and current is not ws:
                return False
            del self._by_user[user_id]
        logger.info("User %s disconnected", user_id)
        return True

    def lookup(self, user_id: str) -> Optional[WebSocket]:
        with self._lock:
            return self._by_user.get(user_id)

    def resolve(
        self, user_ids: Iterable[str]
    ) -> List[Tuple[str, Optional[WebSocket]]]:
        """Look up every id under one lock hold, preserving order."""
        with self._lock:
            return [(uid, self._by_user.get(uid)) for uid in user_ids]

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_user)

    def __contains__(self, user_id: object) -> bool:
        with self._lock:
            return user_id in self._by_user
