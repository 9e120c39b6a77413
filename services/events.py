from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from sqlalchemy import func, or_
from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, select

from config import settings
from models import Event, SpecialGuest, Ticket, utcnow
from schemas import EventCreate, EventOut, EventPage, EventUpdate, SearchPage
from services.ranker import SearchRanker

_log = logging.getLogger(__name__)

LOCATION_COLUMNS = ("country", "state", "street", "local_government")


# ---------- Results ----------


@dataclass(frozen=True)
class Found:
    event: Event


@dataclass(frozen=True)
class NotFound:
    id: str


@dataclass(frozen=True)
class Deleted:
    id: str


Lookup = Union[Found, NotFound]


@dataclass
class EventFilters:
    name: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None


# ---------- Store ----------


class EventStore:
    """Persistence for events. Soft-deleted rows are invisible to reads."""

    def __init__(self, session: Session):
        self.session = session

    def _live(self):
        return select(Event).where(col(Event.deleted_at).is_(None))

    def add(self, event: Event) -> Event:
        self.session.add(event)
        self.session.commit()
        self.session.refresh(event)
        return event

    def get(self, event_id: str, with_relations: bool = False) -> Optional[Event]:
        stmt = self._live().where(Event.id == event_id)
        if with_relations:
            stmt = stmt.options(
                selectinload(Event.tickets),  # type: ignore[arg-type]
                selectinload(Event.special_guests),  # type: ignore[arg-type]
            )
        return self.session.exec(stmt).first()

    def list(
        self, filters: EventFilters, offset: int, limit: int
    ) -> Tuple[List[Event], int]:
        stmt = self._live()

        if filters.name:
            stmt = stmt.where(_ilike(Event.event_name, filters.name))
        if filters.category:
            stmt = stmt.where(_ilike(Event.event_category, filters.category))
        if filters.location:
            stmt = stmt.where(
                or_(*(_ilike(getattr(Event, c), filters.location) for c in LOCATION_COLUMNS))
            )

        total = self.session.exec(
            select(func.count()).select_from(stmt.subquery())
        ).one()
        rows = self.session.exec(
            stmt.order_by(col(Event.created_at), col(Event.id))
            .offset(offset)
            .limit(limit)
        ).all()
        return list(rows), int(total)

    def find_candidates(
        self, category: Optional[str] = None, location: Optional[str] = None
    ) -> List[Event]:
        """Exact-match structural filters only; fuzzy matching happens later."""
        stmt = self._live()
        if category:
            stmt = stmt.where(Event.event_category == category)
        if location:
            stmt = stmt.where(
                or_(*(getattr(Event, c) == location for c in LOCATION_COLUMNS))
            )
        stmt = stmt.order_by(col(Event.created_at), col(Event.id))
        return list(self.session.exec(stmt).all())

    def update(self, event_id: str, fields: Dict[str, Any]) -> Optional[Event]:
        event = self.get(event_id)
        if event is None:
            return None
        for name, value in fields.items():
            setattr(event, name, value)
        event.updated_at = utcnow()
        self.session.add(event)
        self.session.commit()
        return event

    def soft_delete(self, event_id: str) -> Optional[Event]:
        event = self.get(event_id)
        if event is None:
            return None
        now = utcnow()
        event.is_archived = True
        event.deleted_at = now
        event.updated_at = now
        self.session.add(event)
        self.session.commit()
        self.session.refresh(event)
        return event

    def delete(self, event_id: str) -> bool:
        # hard delete also removes archived rows
        event = self.session.get(Event, event_id)
        if event is None:
            return False
        self.session.delete(event)
        self.session.commit()
        return True


def _ilike(column, needle: str):
    return func.lower(column).like(f"%{needle.lower()}%")


# ---------- Service ----------


class EventService:
    def __init__(self, store: EventStore, ranker: Optional[SearchRanker] = None):
        self.store = store
        self.ranker = ranker or SearchRanker(
            threshold=settings.search_threshold,
            key=lambda e: e.event_name,
        )

    def create_event(self, dto: EventCreate) -> Event:
        data = dto.model_dump(exclude={"tickets", "special_guests"})
        event = Event(**data)
        event.tickets = [Ticket(**t.model_dump()) for t in dto.tickets]
        event.special_guests = [SpecialGuest(**g.model_dump()) for g in dto.special_guests]
        event = self.store.add(event)
        _log.info("event created id=%s name=%r", event.id, event.event_name)
        return event

    def get_all_events(
        self,
        page: int = 1,
        limit: Optional[int] = None,
        filters: Optional[EventFilters] = None,
    ) -> EventPage:
        page = max(1, page)
        if not limit or limit < 1:
            limit = settings.default_page_size
        rows, total = self.store.list(
            filters or EventFilters(), offset=(page - 1) * limit, limit=limit
        )
        return EventPage(
            data=_to_out(rows),
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit),
        )

    def get_event_by_id(self, event_id: str) -> Lookup:
        event = self.store.get(event_id, with_relations=True)
        if event is None:
            return NotFound(event_id)
        return Found(event)

    def update_event(self, event_id: str, dto: EventUpdate) -> Lookup:
        fields = dto.model_dump(exclude_unset=True)
        if self.store.update(event_id, fields) is None:
            return NotFound(event_id)
        _log.info("event updated id=%s fields=%s", event_id, sorted(fields))
        return self.get_event_by_id(event_id)

    def archive_event(self, event_id: str) -> Lookup:
        event = self.store.soft_delete(event_id)
        if event is None:
            return NotFound(event_id)
        _log.info("event archived id=%s", event_id)
        return Found(event)

    def delete_event(self, event_id: str) -> Union[Deleted, NotFound]:
        if not self.store.delete(event_id):
            return NotFound(event_id)
        _log.info("event deleted id=%s", event_id)
        return Deleted(event_id)

    def search_events(
        self,
        query: str,
        category: Optional[str] = None,
        location: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> SearchPage:
        candidates = self.store.find_candidates(category=category, location=location)
        result = self.ranker.rank(query, candidates, page=page, page_size=limit)
        _log.debug(
            "search query=%r candidates=%d matches=%d",
            query,
            len(candidates),
            result.total,
        )
        return SearchPage(
            data=_to_out(result.data),
            total=result.total,
            page=result.page,
            limit=result.limit,
        )


def _to_out(rows: Sequence[Event]) -> List[EventOut]:
    return [EventOut.model_validate(e) for e in rows]
