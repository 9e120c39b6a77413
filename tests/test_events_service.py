from schemas import EventCreate, EventUpdate, GuestIn, TicketIn
from services.events import Deleted, EventFilters, Found, NotFound


def _create(service, name, category="music", country="Nigeria", **kw):
    return service.create_event(
        EventCreate(event_name=name, event_category=category, country=country, **kw)
    )


def test_create_with_tickets_and_guests(service):
    event = _create(
        service,
        "Jazz Night",
        state="Lagos",
        tickets=[TicketIn(ticket_type="vip", price=50, currency="NGN")],
        special_guests=[GuestIn(name="Asa", role="headliner")],
    )
    assert event.id
    assert not event.is_archived

    found = service.get_event_by_id(event.id)
    assert isinstance(found, Found)
    assert [t.ticket_type for t in found.event.tickets] == ["vip"]
    assert [g.name for g in found.event.special_guests] == ["Asa"]


def test_get_unknown_is_not_found(service):
    assert service.get_event_by_id("missing") == NotFound("missing")


def test_list_filters_are_case_insensitive(service):
    _create(service, "Jazz Night", state="Lagos")
    _create(service, "Rock Show", category="Music", local_government="Ikeja")
    _create(service, "Stand-up Hour", category="comedy", country="Ghana")

    by_name = service.get_all_events(filters=EventFilters(name="JAZZ"))
    assert [e.event_name for e in by_name.data] == ["Jazz Night"]

    by_category = service.get_all_events(filters=EventFilters(category="music"))
    assert {e.event_name for e in by_category.data} == {"Jazz Night", "Rock Show"}

    by_location = service.get_all_events(filters=EventFilters(location="ikeja"))
    assert [e.event_name for e in by_location.data] == ["Rock Show"]

    by_country = service.get_all_events(filters=EventFilters(location="gha"))
    assert [e.event_name for e in by_country.data] == ["Stand-up Hour"]


def test_list_pagination(service):
    for i in range(5):
        _create(service, f"Event {i}")

    first = service.get_all_events(page=1, limit=2)
    last = service.get_all_events(page=3, limit=2)
    assert first.total == 5
    assert first.total_pages == 3
    assert len(first.data) == 2
    assert len(last.data) == 1

    seen = set()
    for p in (1, 2, 3):
        seen |= {e.id for e in service.get_all_events(page=p, limit=2).data}
    assert len(seen) == 5


def test_update_applies_only_given_fields(service):
    event = _create(service, "Jazz Night", state="Lagos", description="Live band")
    result = service.update_event(event.id, EventUpdate(event_name="Jazz Nights"))

    assert isinstance(result, Found)
    assert result.event.event_name == "Jazz Nights"
    assert result.event.state == "Lagos"
    assert result.event.description == "Live band"


def test_update_unknown(service):
    assert isinstance(service.update_event("nope", EventUpdate(state="x")), NotFound)


def test_archive_hides_event(service):
    event = _create(service, "Jazz Night")
    archived = service.archive_event(event.id)

    assert isinstance(archived, Found)
    assert archived.event.is_archived
    assert archived.event.deleted_at is not None
    assert isinstance(service.get_event_by_id(event.id), NotFound)
    assert service.get_all_events().total == 0
    assert service.search_events("jazz night").total == 0
    assert isinstance(service.archive_event(event.id), NotFound)


def test_delete(service):
    event = _create(service, "Jazz Night", tickets=[TicketIn(ticket_type="regular")])
    assert service.delete_event(event.id) == Deleted(event.id)
    assert isinstance(service.delete_event(event.id), NotFound)
    assert service.get_all_events().total == 0


def test_delete_archived_event(service):
    event = _create(service, "Jazz Night")
    service.archive_event(event.id)
    assert isinstance(service.delete_event(event.id), Deleted)


def test_search_ranks_by_similarity(service):
    _create(service, "Jazz Nights", state="Lagos")
    _create(service, "Rock Show", state="Lagos")
    _create(service, "Jazz Night", state="Abuja")

    page = service.search_events("Jazz Night")
    assert [e.event_name for e in page.data] == ["Jazz Night", "Jazz Nights"]
    assert page.total == 2
    assert (page.page, page.limit) == (1, 10)


def test_search_prefilters_exactly(service):
    _create(service, "Jazz Night", state="Lagos")
    _create(service, "Jazz Nights", category="festival", state="Lagos")
    _create(service, "Jazz Night Live", state="Abuja")

    by_category = service.search_events("jazz night", category="festival")
    assert [e.event_name for e in by_category.data] == ["Jazz Nights"]

    by_location = service.search_events("jazz night", location="Lagos")
    assert {e.event_name for e in by_location.data} == {"Jazz Night", "Jazz Nights"}

    # substring is not enough for the structural filter
    assert service.search_events("jazz night", location="Lag").total == 0


def test_search_total_counts_matches_not_page(service):
    for name in ["Jazz Night", "Jazz Nights", "The Jazz Night", "Jazz Nite"]:
        _create(service, name)
    _create(service, "Rock Show")

    page = service.search_events("jazz night", page=2, limit=3)
    assert page.total == 4
    assert len(page.data) == 1


def test_list_with_bad_limit_uses_default_page_size(service):
    for i in range(3):
        _create(service, f"Event {i}")

    page = service.get_all_events(page=1, limit=-1)
    assert page.limit == 10
    assert page.total == 3
    assert page.total_pages == 1
    assert len(page.data) == 3


def test_timestamps_are_set(service):
    event = _create(service, "Jazz Night")
    assert event.created_at is not None
    assert event.updated_at is not None

    archived = service.archive_event(event.id)
    assert archived.event.deleted_at is not None
