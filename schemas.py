from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TicketIn(BaseModel):
    ticket_type: str
    price: float = Field(0.0, ge=0)
    currency: Optional[str] = None
    quantity: Optional[int] = Field(default=None, ge=0)


class TicketOut(TicketIn):
    model_config = ConfigDict(from_attributes=True)

    id: int


class GuestIn(BaseModel):
    name: str
    role: Optional[str] = None


class GuestOut(GuestIn):
    model_config = ConfigDict(from_attributes=True)

    id: int


class EventCreate(BaseModel):
    event_name: str = Field(..., min_length=1)
    event_category: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    description: Optional[str] = None
    start_time: Optional[datetime] = Field(
        default=None, description="ISO8601 e.g. 2025-11-05T19:00:00Z"
    )
    state: Optional[str] = None
    street: Optional[str] = None
    local_government: Optional[str] = None
    tickets: List[TicketIn] = []
    special_guests: List[GuestIn] = []


class EventUpdate(BaseModel):
    """
    Updatable event fields. Only the fields present in the request body are
    applied; relations are not editable through this model.
    """

    event_name: Optional[str] = Field(default=None, min_length=1)
    event_category: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    country: Optional[str] = Field(default=None, min_length=1)
    state: Optional[str] = None
    street: Optional[str] = None
    local_government: Optional[str] = None

    @field_validator("event_name", "event_category", "country")
    @classmethod
    def _not_null(cls, v: Optional[str]) -> str:
        # may be omitted, but never cleared
        if v is None:
            raise ValueError("field cannot be null")
        return v


class EventOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    event_name: str
    event_category: str
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    country: str
    state: Optional[str] = None
    street: Optional[str] = None
    local_government: Optional[str] = None
    is_archived: bool = False
    created_at: datetime
    updated_at: datetime
    tickets: List[TicketOut] = []
    special_guests: List[GuestOut] = []


class EventPage(BaseModel):
    data: List[EventOut]
    total: int
    page: int
    limit: int
    total_pages: int


class SearchPage(BaseModel):
    data: List[EventOut]
    total: int = Field(..., description="Matches above the relevance threshold")
    page: int
    limit: int
