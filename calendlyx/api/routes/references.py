from typing import Literal

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from calendlyx.api.deps import require_admin
from calendlyx.db.session import get_db
from calendlyx.schemas.reference import ReferenceCreate, ReferenceOptions, ReferenceRead
from calendlyx.services import reference_service
from calendlyx.services.changes import ACTIVITY_TYPES, DISTRICTS, PARTICIPANTS

router = APIRouter(prefix="/admin/settings", tags=["admin-settings"], dependencies=[Depends(require_admin)])

ReferenceKind = Literal["activity_types", "participants", "districts"]


@router.get("", response_model=ReferenceOptions)
def get_reference_options(db: Session = Depends(get_db)) -> ReferenceOptions:
    return ReferenceOptions(
        activity_types=[ReferenceRead.model_validate(i) for i in reference_service.list_references(db, ACTIVITY_TYPES)],
        participants=[ReferenceRead.model_validate(i) for i in reference_service.list_references(db, PARTICIPANTS)],
        districts=[ReferenceRead.model_validate(i) for i in reference_service.list_references(db, DISTRICTS)],
    )


@router.get("/{kind}", response_model=list[ReferenceRead])
def get_references(kind: ReferenceKind, db: Session = Depends(get_db)) -> list[ReferenceRead]:
    return [ReferenceRead.model_validate(item) for item in reference_service.list_references(db, kind)]


@router.post("/{kind}", response_model=ReferenceRead, status_code=201)
def create_reference(kind: ReferenceKind, payload: ReferenceCreate, db: Session = Depends(get_db)) -> ReferenceRead:
    return ReferenceRead.model_validate(reference_service.add_reference(db, kind, payload.name))


@router.delete("/{kind}/{item_id}", status_code=204)
def delete_reference(kind: ReferenceKind, item_id: int, db: Session = Depends(get_db)) -> Response:
    reference_service.delete_reference(db, kind, item_id)
    return Response(status_code=204)
