from pydantic import BaseModel, Field
from typing import List, Optional


# ---------- Frames ----------
class Message(BaseModel):
    """
    A routed message, the payload of every frame in both directions.

    A non-empty ``room`` routes to the room's members. Otherwise a non-empty
    ``user_ids`` routes to those users. With neither, nothing is delivered.
    """

    type: str = ""
    message: str = ""
    body: Optional[str] = None
    room: Optional[str] = None
    user_ids: Optional[List[str]] = None

    @property
    def is_room_addressed(self) -> bool:
        return bool(self.room)

    @property
    def is_direct_addressed(self) -> bool:
        return bool(self.user_ids)

    def to_frame(self) -> str:
        # only the fields the sender supplied
        return self.model_dump_json(exclude_unset=True, exclude_none=True)


# ---------- Delivery ----------
class DeliveryReport(BaseModel):
    resolved: int = 0       # recipients named by the room or the list
    attempted: int = 0      # recipients with a live connection
    delivered: int = 0      # writes that completed
    not_connected: List[str] = Field(default_factory=list)
    failed: List[str] = Field(default_factory=list)
