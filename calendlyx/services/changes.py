"""Whole-list change subscriptions per collection.

Subscribers get the full current result set once on subscribe and again
after every committed write to the collection. Nothing is diffed.
"""

import itertools
import threading
from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from calendlyx.core.logging import get_logger
from calendlyx.db.session import SessionLocal

logger = get_logger(__name__)

ACTIVITIES = "activities"
SCHEDULE_REQUESTS = "schedule_requests"
ACTIVITY_TYPES = "activity_types"
PARTICIPANTS = "participants"
DISTRICTS = "districts"

COLLECTIONS = (ACTIVITIES, SCHEDULE_REQUESTS, ACTIVITY_TYPES, PARTICIPANTS, DISTRICTS)

Snapshot = list[dict]
SnapshotLoader = Callable[[Session, bool], Snapshot]
Listener = Callable[[Snapshot], None]


@dataclass(slots=True)
class _Subscription:
    listener: Listener
    public_only: bool


class ChangeFeed:
    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory
        self._loaders: dict[str, SnapshotLoader] = {}
        self._subscriptions: dict[str, dict[int, _Subscription]] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        # One per collection; load and deliver happen under it so listeners
        # never see an older list after a newer one.
        self._delivery_locks: dict[str, threading.RLock] = {}

    def register(self, collection: str, loader: SnapshotLoader) -> None:
        self._loaders[collection] = loader
        self._delivery_locks.setdefault(collection, threading.RLock())

    def subscriber_count(self, collection: str) -> int:
        with self._lock:
            return len(self._subscriptions.get(collection, {}))

    def subscribe(self, collection: str, listener: Listener, *, public_only: bool = False) -> Callable[[], None]:
        """Register ``listener`` and deliver the current snapshot right away.

        Returns a function that removes the subscription; calling it twice is
        harmless.
        """
        if collection not in self._loaders:
            raise KeyError(f"unknown collection: {collection}")

        subscription_id = next(self._ids)
        subscription = _Subscription(listener=listener, public_only=public_only)
        with self._delivery_locks[collection]:
            with self._lock:
                self._subscriptions.setdefault(collection, {})[subscription_id] = subscription
            logger.info("subscribed id=%s collection=%s public_only=%s", subscription_id, collection, public_only)

            snapshot = self._load(collection, public_only)
            if snapshot is not None:
                self._deliver(collection, subscription, snapshot)

        def unsubscribe() -> None:
            with self._lock:
                removed = self._subscriptions.get(collection, {}).pop(subscription_id, None)
            if removed is not None:
                logger.info("unsubscribed id=%s collection=%s", subscription_id, collection)

        return unsubscribe

    def publish(self, collection: str) -> None:
        delivery_lock = self._delivery_locks.get(collection)
        if delivery_lock is None:
            return

        with delivery_lock:
            with self._lock:
                subscriptions = list(self._subscriptions.get(collection, {}).values())
            if not subscriptions:
                return

            snapshots: dict[bool, Snapshot | None] = {}
            for subscription in subscriptions:
                if subscription.public_only not in snapshots:
                    snapshots[subscription.public_only] = self._load(collection, subscription.public_only)
                snapshot = snapshots[subscription.public_only]
                if snapshot is not None:
                    self._deliver(collection, subscription, snapshot)

    def _load(self, collection: str, public_only: bool) -> Snapshot | None:
        loader = self._loaders[collection]
        try:
            with self._session_factory() as db:
                return loader(db, public_only)
        except SQLAlchemyError:
            logger.exception("snapshot load failed collection=%s", collection)
            return None

    def _deliver(self, collection: str, subscription: _Subscription, snapshot: Snapshot) -> None:
        try:
            subscription.listener(snapshot)
        except Exception:
            logger.exception("snapshot delivery failed collection=%s", collection)


change_feed = ChangeFeed()
