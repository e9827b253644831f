"""Activity types, participants and districts.

The three lists behave identically: trimmed names, unique ignoring case,
newest first.
"""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from calendlyx.core.errors import DuplicateNameError, NotFoundError, ValidationFailed
from calendlyx.core.logging import get_logger
from calendlyx.core.timeutils import local_now
from calendlyx.models.reference import ActivityType, District, Participant
from calendlyx.schemas.reference import ReferenceRead
from calendlyx.services.changes import ACTIVITY_TYPES, DISTRICTS, PARTICIPANTS, change_feed
from calendlyx.services.storage import storage_operation

logger = get_logger(__name__)

# collection -> (model, human label)
REFERENCE_KINDS = {
    ACTIVITY_TYPES: (ActivityType, "activity type"),
    PARTICIPANTS: (Participant, "participant"),
    DISTRICTS: (District, "district"),
}


def _kind(collection: str):
    try:
        return REFERENCE_KINDS[collection]
    except KeyError:
        raise NotFoundError(f"Unknown reference list: {collection}") from None


def list_references(db: Session, collection: str) -> list:
    model, label = _kind(collection)
    stmt = select(model).order_by(model.created_at.desc(), model.id.desc())
    with storage_operation(db, f"fetch {label}s"):
        return list(db.scalars(stmt))


def add_reference(db: Session, collection: str, name: str):
    model, label = _kind(collection)
    name = (name or "").strip()
    if not name:
        raise ValidationFailed(f"{label.capitalize()} name is required")

    with storage_operation(db, f"add {label}"):
        existing = db.scalar(select(model.id).where(func.lower(model.name) == name.lower()).limit(1))
        if existing is not None:
            raise DuplicateNameError(f"This {label} already exists")
        item = model(name=name, created_at=local_now())
        db.add(item)
        db.commit()
        db.refresh(item)
    logger.info("%s added id=%s name=%r", label, item.id, item.name)
    change_feed.publish(collection)
    return item


def delete_reference(db: Session, collection: str, item_id: int) -> None:
    model, label = _kind(collection)
    with storage_operation(db, f"delete {label}"):
        item = db.get(model, item_id)
        if item is None:
            raise NotFoundError(f"{label.capitalize()} {item_id} not found")
        db.delete(item)
        db.commit()
    logger.info("%s deleted id=%s", label, item_id)
    change_feed.publish(collection)


def add_activity_type(db: Session, name: str) -> ActivityType:
    return add_reference(db, ACTIVITY_TYPES, name)


def get_activity_types(db: Session) -> list[ActivityType]:
    return list_references(db, ACTIVITY_TYPES)


def delete_activity_type(db: Session, item_id: int) -> None:
    delete_reference(db, ACTIVITY_TYPES, item_id)


def add_participant(db: Session, name: str) -> Participant:
    return add_reference(db, PARTICIPANTS, name)


def get_participants(db: Session) -> list[Participant]:
    return list_references(db, PARTICIPANTS)


def delete_participant(db: Session, item_id: int) -> None:
    delete_reference(db, PARTICIPANTS, item_id)


def add_district(db: Session, name: str) -> District:
    return add_reference(db, DISTRICTS, name)


def get_districts(db: Session) -> list[District]:
    return list_references(db, DISTRICTS)


def delete_district(db: Session, item_id: int) -> None:
    delete_reference(db, DISTRICTS, item_id)


def _snapshot_loader(collection: str):
    model = REFERENCE_KINDS[collection][0]

    def load(db: Session, public_only: bool) -> list[dict]:
        stmt = select(model).order_by(model.created_at.desc(), model.id.desc())
        return [ReferenceRead.model_validate(item).model_dump(mode="json") for item in db.scalars(stmt)]

    return load


for _collection in REFERENCE_KINDS:
    change_feed.register(_collection, _snapshot_loader(_collection))
