from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from sqlmodel import Field, Relationship, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid4())


class Event(SQLModel, table=True):
    id: str = Field(default_factory=_new_id, primary_key=True)
    event_name: str = Field(index=True)
    event_category: str = Field(index=True)  # music/comedy/sports/etc
    description: Optional[str] = None
    start_time: Optional[datetime] = None

    # location
    country: str
    state: Optional[str] = None
    street: Optional[str] = None
    local_government: Optional[str] = None

    is_archived: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = None  # soft-delete marker

    tickets: List["Ticket"] = Relationship(
        back_populates="event",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
    special_guests: List["SpecialGuest"] = Relationship(
        back_populates="event",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class Ticket(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    event_id: str = Field(foreign_key="event.id", index=True)
    ticket_type: str  # regular/vip/early-bird
    price: float = 0.0
    currency: Optional[str] = None
    quantity: Optional[int] = None

    event: Optional[Event] = Relationship(back_populates="tickets")


class SpecialGuest(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    event_id: str = Field(foreign_key="event.id", index=True)
    name: str
    role: Optional[str] = None  # headliner, host, speaker

    event: Optional[Event] = Relationship(back_populates="special_guests")
