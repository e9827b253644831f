import threading
from contextlib import nullcontext
from datetime import datetime

import pytest

from calendlyx.schemas.activity import ActivityCreate
from calendlyx.schemas.schedule_request import ScheduleRequestCreate
from calendlyx.services import activity_service, reference_service, request_service
from calendlyx.services.changes import ACTIVITIES, DISTRICTS, SCHEDULE_REQUESTS, ChangeFeed, change_feed


def _activity(title: str, *, is_public: bool = True) -> ActivityCreate:
    return ActivityCreate(
        title=title,
        start_at=datetime(2025, 9, 1, 9),
        end_at=datetime(2025, 9, 1, 10),
        is_public=is_public,
    )


@pytest.fixture
def subscribe():
    unsubscribers = []

    def _subscribe(collection, **kwargs):
        received: list[list[dict]] = []
        unsubscribers.append(change_feed.subscribe(collection, received.append, **kwargs))
        return received

    yield _subscribe
    for unsubscribe in unsubscribers:
        unsubscribe()


def test_subscribe_delivers_current_list_immediately(db, subscribe):
    activity_service.add_activity(db, _activity("Existing"))

    received = subscribe(ACTIVITIES)

    assert len(received) == 1
    assert [item["title"] for item in received[0]] == ["Existing"]


def test_every_write_delivers_the_full_list(db, subscribe):
    received = subscribe(ACTIVITIES)

    first = activity_service.add_activity(db, _activity("One"))
    activity_service.add_activity(db, _activity("Two"))
    activity_service.delete_activity(db, first.id)

    assert [[item["title"] for item in snapshot] for snapshot in received] == [
        [],
        ["One"],
        ["One", "Two"],
        ["Two"],
    ]


def test_public_subscription_only_sees_public_activities(db, subscribe):
    public = subscribe(ACTIVITIES, public_only=True)
    everything = subscribe(ACTIVITIES)

    activity_service.add_activity(db, _activity("Open"))
    activity_service.add_activity(db, _activity("Hidden", is_public=False))

    assert [item["title"] for item in public[-1]] == ["Open"]
    assert [item["title"] for item in everything[-1]] == ["Open", "Hidden"]


def test_unsubscribe_stops_delivery(db):
    received = []
    unsubscribe = change_feed.subscribe(DISTRICTS, received.append)
    unsubscribe()
    unsubscribe()

    reference_service.add_district(db, "West")

    assert received == [[]]
    assert change_feed.subscriber_count(DISTRICTS) == 0


def test_failing_listener_does_not_block_others(db, subscribe):
    def broken(snapshot):
        raise RuntimeError("listener bug")

    unsubscribe = change_feed.subscribe(DISTRICTS, broken)
    try:
        healthy = subscribe(DISTRICTS)
        reference_service.add_district(db, "East")
    finally:
        unsubscribe()

    assert [item["name"] for item in healthy[-1]] == ["East"]


def test_approval_notifies_requests_and_activities(db, subscribe):
    request = request_service.add_schedule_request(
        db,
        ScheduleRequestCreate(
            title="Film night",
            start_at=datetime(2025, 9, 5, 19),
            end_at=datetime(2025, 9, 5, 22),
            requester_name="Kim",
        ),
    )
    requests = subscribe(SCHEDULE_REQUESTS)
    activities = subscribe(ACTIVITIES)

    request_service.approve_schedule_request(db, request.id)

    assert requests[-1][0]["status"] == "approved"
    assert [item["title"] for item in activities[-1]] == ["Film night"]


def test_public_request_snapshot_omits_contact_details(db, subscribe):
    request_service.add_schedule_request(
        db,
        ScheduleRequestCreate(
            title="Book swap",
            start_at=datetime(2025, 9, 6, 10),
            end_at=datetime(2025, 9, 6, 12),
            requester_name="Lee",
            requester_phone="555-0101",
        ),
    )

    received = subscribe(SCHEDULE_REQUESTS, public_only=True)

    assert received[0][0]["requester_name"] == "Lee"
    assert "requester_phone" not in received[0][0]


def test_unknown_collection_is_rejected():
    with pytest.raises(KeyError):
        change_feed.subscribe("calendars", lambda snapshot: None)


def test_slow_publish_cannot_overwrite_newer_list():
    numbers = [1]
    first_loaded = threading.Event()
    release_first = threading.Event()

    def load(db, public_only):
        snapshot = list(numbers)
        if threading.current_thread().name == "writer-a":
            first_loaded.set()
            release_first.wait(timeout=5)
        return snapshot

    feed = ChangeFeed(session_factory=nullcontext)
    feed.register("numbers", load)
    received = []
    feed.subscribe("numbers", received.append)

    writer_a = threading.Thread(target=feed.publish, args=("numbers",), name="writer-a")
    writer_a.start()
    assert first_loaded.wait(timeout=5)

    numbers.append(2)
    writer_b = threading.Thread(target=feed.publish, args=("numbers",), name="writer-b")
    writer_b.start()
    writer_b.join(timeout=0.5)
    release_first.set()
    writer_a.join(timeout=5)
    writer_b.join(timeout=5)

    assert received[-1] == [1, 2]
