from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.church import Church
from app.schemas.form_config import FormType, PublicSubmissionCheck
from app.services.form_config_resolver import EffectiveFormConfig, resolve_form_config
from app.services.form_config_store import form_type_or_404, get_form_configuration, serialize_form_configuration
from app.services.public_forms import build_public_form, validate_public_submission_or_400

router = APIRouter()


def _church_or_404(db: Session, public_token: str) -> Church:
    token = str(public_token or "").strip()
    row = db.query(Church).filter(Church.public_token == token).first() if token else None
    if row is None:
        raise HTTPException(status_code=404, detail="Ministry not found")
    return row


def _effective(db: Session, church: Church, form_type: FormType) -> EffectiveFormConfig:
    row = get_form_configuration(db, church.id, form_type)
    persisted = serialize_form_configuration(row) if row is not None else None
    return resolve_form_config(form_type, persisted)


@router.get("/{public_token}/{form_type}")
def get_public_form(public_token: str, form_type: str, db: Session = Depends(get_db)):
    normalized = form_type_or_404(form_type)
    church = _church_or_404(db, public_token)
    return build_public_form(church, _effective(db, church, normalized)).to_wire()


@router.post("/{public_token}/{form_type}/check")
def check_public_submission(
    public_token: str,
    form_type: str,
    payload: PublicSubmissionCheck,
    db: Session = Depends(get_db),
):
    normalized = form_type_or_404(form_type)
    church = _church_or_404(db, public_token)
    validate_public_submission_or_400(_effective(db, church, normalized), payload)
    return {"status": "ok"}
