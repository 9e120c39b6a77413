from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlmodel import Session

from config import settings
from db import get_session
from schemas import EventCreate, EventOut, EventPage, EventUpdate, SearchPage
from services.events import EventFilters, EventService, EventStore, NotFound

router = APIRouter(prefix="/events", tags=["events"])


def get_service(session: Session = Depends(get_session)) -> EventService:
    return EventService(EventStore(session))


def _found_or_404(result) -> EventOut:
    if isinstance(result, NotFound):
        raise HTTPException(status_code=404, detail="Event not found")
    return EventOut.model_validate(result.event)


# ---------- Routes ----------


@router.post("", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(
    dto: EventCreate, service: EventService = Depends(get_service)
) -> EventOut:
    return EventOut.model_validate(service.create_event(dto))


@router.get("", response_model=EventPage)
def list_events(
    *,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    name: Optional[str] = Query(None, description="Substring of the event name"),
    category: Optional[str] = Query(None),
    location: Optional[str] = Query(
        None, description="Matches country, state, street or local government"
    ),
    service: EventService = Depends(get_service),
) -> EventPage:
    filters = EventFilters(name=name, category=category, location=location)
    return service.get_all_events(page=page, limit=limit, filters=filters)


@router.get("/search", response_model=SearchPage)
def search_events(
    *,
    query: str = Query(..., min_length=1, description="Fuzzy match on event name"),
    category: Optional[str] = Query(None, description="Exact category"),
    location: Optional[str] = Query(None, description="Exact location value"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    service: EventService = Depends(get_service),
) -> SearchPage:
    """
    Fuzzy search over event names.

    - Category and location narrow the candidates with exact matches.
    - Names scoring above the relevance threshold are returned best first.
    - `total` counts the matches, not the candidates.
    """
    return service.search_events(
        query.strip(), category=category, location=location, page=page, limit=limit
    )


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, service: EventService = Depends(get_service)) -> EventOut:
    return _found_or_404(service.get_event_by_id(event_id))


@router.patch("/{event_id}", response_model=EventOut)
def update_event(
    event_id: str, dto: EventUpdate, service: EventService = Depends(get_service)
) -> EventOut:
    return _found_or_404(service.update_event(event_id, dto))


@router.post("/{event_id}/archive", response_model=EventOut)
def archive_event(event_id: str, service: EventService = Depends(get_service)) -> EventOut:
    return _found_or_404(service.archive_event(event_id))


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(event_id: str, service: EventService = Depends(get_service)) -> Response:
    if isinstance(service.delete_event(event_id), NotFound):
        raise HTTPException(status_code=404, detail="Event not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
