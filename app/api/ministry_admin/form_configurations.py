from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import responsible_from_claims, tenant_scope
from app.db.session import get_db
from app.schemas.form_config import FormConfigUpsert
from app.services.form_config_resolver import resolve_form_config
from app.services.form_config_store import (
    form_type_or_404,
    get_form_configuration,
    list_form_configurations,
    reset_form_configuration,
    serialize_form_configuration,
    upsert_form_configuration,
)

router = APIRouter()

read_scope = tenant_scope("ADMIN", "LEADER")
write_scope = tenant_scope("ADMIN")


@router.get("")
def list_configurations(db: Session = Depends(get_db), scope: tuple[UUID, dict] = Depends(read_scope)):
    church_id, _ = scope
    rows = list_form_configurations(db, church_id)
    return [serialize_form_configuration(row).to_wire() for row in rows]


@router.get("/{form_type}")
def get_effective_configuration(
    form_type: str,
    db: Session = Depends(get_db),
    scope: tuple[UUID, dict] = Depends(read_scope),
):
    church_id, _ = scope
    normalized = form_type_or_404(form_type)
    row = get_form_configuration(db, church_id, normalized)
    persisted = serialize_form_configuration(row) if row is not None else None
    return resolve_form_config(normalized, persisted).to_out().to_wire()


@router.put("/{form_type}")
def save_configuration(
    form_type: str,
    payload: FormConfigUpsert,
    db: Session = Depends(get_db),
    scope: tuple[UUID, dict] = Depends(write_scope),
):
    church_id, admin = scope
    normalized = form_type_or_404(form_type)
    row = upsert_form_configuration(
        db,
        church_id=church_id,
        form_type=normalized,
        payload=payload,
        responsible=responsible_from_claims(admin),
    )
    return serialize_form_configuration(row).to_wire()


@router.delete("/{form_type}")
def reset_configuration(
    form_type: str,
    db: Session = Depends(get_db),
    scope: tuple[UUID, dict] = Depends(write_scope),
):
    church_id, admin = scope
    normalized = form_type_or_404(form_type)
    removed = reset_form_configuration(
        db,
        church_id=church_id,
        form_type=normalized,
        responsible=responsible_from_claims(admin),
    )
    return {"status": "reset", "removed": removed}
