import logging
import threading
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


class GroupStore:
    """
    Room membership: room id -> user ids in join order.

    Membership is append-only for the life of the process. Joining twice
    records the user twice, and the user then receives room traffic twice.
    Entries may name users with no live connection.
    """

    def __init__(self):
        self._rooms: Dict[str, List[str]] = {}
        self._lock = threading.RLock()

    def join(self, room_id: str, user_id: str) -> None:
        with self._lock:
            self._rooms.setdefault(room_id, []).append(user_id)
        logger.info("User %s joined room %s", user_id, room_id)

    def members_of(self, room_id: str) -> Optional[Tuple[str, ...]]:
        # copy out so callers never iterate the live list
        with self._lock:
            members = self._rooms.get(room_id)
            return tuple(members) if members is not None else None
