# backend/relay/dispatch.py
import asyncio
import logging
from typing import List, Optional, Sequence, Tuple

from fastapi import WebSocket

from .models import DeliveryReport, Message
from .storage import GroupStore
from .websocket import ConnectionRegistry

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Routes one message to the live connections it addresses.

    Recipients and their sockets are snapshotted under the stores' locks,
    then written to one by one in resolution order with no lock held. A
    failing or slow recipient only costs its own delivery: every write is
    bounded by ``send_timeout`` and errors are counted, not raised.

    A timed-out write is cancelled mid-flight, which can leave a partial
    frame on that socket. The socket stays registered; a peer that cannot
    parse the stream drops the connection and its own session cleans up.
    """

    def __init__(
        self,
        registry: ConnectionRegistry,
        groups: GroupStore,
        send_timeout: Optional[float] = 5.0,
        echo_to_sender: bool = True,
    ) -> None:
        self.registry = registry
        self.groups = groups
        self.send_timeout = send_timeout
        self.echo_to_sender = echo_to_sender

    def resolve_recipients(
        self,
        message: Message,
        sender: Optional[str] = None,
        direct_only: bool = False,
    ) -> Optional[Sequence[str]]:
        """
        Returns the ordered recipient ids, or None for an unknown room.
        """
        if message.is_room_addressed and not direct_only:
            members = self.groups.members_of(message.room)
            if members is None:
                logger.warning("Room %s does not exist", message.room)
                return None
            if not self.echo_to_sender and sender is not None:
                members = tuple(uid for uid in members if uid != sender)
            return members
        return list(message.user_ids or [])

    async def route(
        self,
        message: Message,
        serialized: str,
        *,
        sender: Optional[str] = None,
        direct_only: bool = False,
    ) -> DeliveryReport:
        report = DeliveryReport()
        recipients = self.resolve_recipients(message, sender, direct_only)
        if not recipients:
            return report

        report.resolved = len(recipients)
        targets: List[Tuple[str, WebSocket]] = []
        for uid, ws in self.registry.resolve(recipients):
            if ws is None:
                logger.info("Client %s not connected", uid)
                report.not_connected.append(uid)
                continue
            targets.append((uid, ws))

        report.attempted = len(targets)
        for uid, ws in targets:
            if await self._send(uid, ws, serialized):
                report.delivered += 1
            else:
                report.failed.append(uid)

        return report

    async def _send(self, user_id: str, ws: WebSocket, serialized: str) -> bool:
        try:
            await asyncio.wait_for(ws.send_text(serialized), self.send_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Timed out sending message to client %s after %ss",
                user_id,
                self.send_timeout,
            )
            return False
        except Exception as e:
            # the recipient's own session cleans up once its read fails
            logger.warning("Error sending message to client %s: %s", user_id, e)
            return False
        return True
