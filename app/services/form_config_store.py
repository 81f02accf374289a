from __future__ import annotations

import logging
import uuid

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.common import utcnow
from app.models.form_configuration import FormConfiguration
from app.schemas.form_config import (
    CustomField,
    CustomFieldType,
    FormConfigOut,
    FormConfigUpsert,
    FormFieldConfig,
    FormType,
)
from app.services.form_fields import known_keys_for, locked_keys_for, parse_form_type

logger = logging.getLogger("app.form_config")


def form_type_or_404(raw: str) -> FormType:
    form_type = parse_form_type(raw)
    if form_type is None:
        raise HTTPException(status_code=404, detail="Form type not found")
    return form_type


def serialize_form_configuration(row: FormConfiguration) -> FormConfigOut:
    return FormConfigOut(
        id=str(row.id),
        church_id=str(row.church_id),
        form_type=row.form_type,
        title=row.title,
        hero_title=row.hero_title,
        description=row.description,
        field_config=list(row.field_config or []),
        custom_fields=list(row.custom_fields or []),
        updated_at=row.updated_at,
        responsible=row.responsible,
    )


def _optional_text(value: str | None, *, limit: int, name: str) -> str | None:
    text = str(value or "").strip()
    if not text:
        return None
    if len(text) > limit:
        raise HTTPException(status_code=400, detail=f"{name} must be at most {limit} characters")
    return text


def _validate_standard_fields(form_type: FormType, fields: list[FormFieldConfig]) -> list[FormFieldConfig]:
    known = set(known_keys_for(form_type))
    locked = locked_keys_for(form_type)
    label_limit = int(settings.FORM_LABEL_MAX_LENGTH)

    seen: set[str] = set()
    normalized: list[FormFieldConfig] = []
    for item in fields:
        key = str(item.key or "").strip()
        if key not in known:
            raise HTTPException(status_code=400, detail=f"Unknown field for this form: {key or '(empty)'}")
        if key in seen:
            raise HTTPException(status_code=400, detail=f"Field is listed more than once: {key}")
        seen.add(key)
        label = str(item.label or "").strip()
        if not label:
            raise HTTPException(status_code=400, detail=f"Field label is required: {key}")
        if len(label) > label_limit:
            raise HTTPException(status_code=400, detail=f"Field label must be at most {label_limit} characters: {key}")
        if key in locked:
            normalized.append(FormFieldConfig(key=key, label=label, visible=True, required=True, locked=True))
        else:
            normalized.append(
                FormFieldConfig(key=key, label=label, visible=item.visible, required=item.required, locked=False)
            )

    missing_locked = sorted(locked - seen) if normalized else []
    if missing_locked:
        raise HTTPException(status_code=400, detail="Required fields cannot be removed: " + ", ".join(missing_locked))
    return normalized


def _validate_custom_fields(fields: list[CustomField]) -> list[CustomField]:
    max_fields = int(settings.FORM_CUSTOM_FIELDS_MAX)
    label_limit = int(settings.FORM_LABEL_MAX_LENGTH)
    if len(fields) > max_fields:
        raise HTTPException(status_code=400, detail=f"At most {max_fields} custom fields are allowed")

    seen: set[str] = set()
    normalized: list[CustomField] = []
    for position, item in enumerate(fields, start=1):
        field_id = str(item.id or "").strip()
        if not field_id:
            raise HTTPException(status_code=400, detail=f"Custom field #{position} has no id")
        if field_id in seen:
            raise HTTPException(status_code=400, detail=f"Custom field id is duplicated: {field_id}")
        seen.add(field_id)
        label = str(item.label or "").strip()
        if not label:
            raise HTTPException(status_code=400, detail=f"Custom field #{position} needs a label")
        if len(label) > label_limit:
            raise HTTPException(
                status_code=400,
                detail=f"Custom field label must be at most {label_limit} characters",
            )
        options = list(item.options or [])
        if item.type == CustomFieldType.DROPDOWN:
            options = [str(option).strip() for option in options if str(option or "").strip()]
            if not options:
                raise HTTPException(status_code=400, detail=f"Dropdown field needs at least one option: {label}")
        normalized.append(
            CustomField(id=field_id, label=label, type=item.type, required=item.required, options=options)
        )
    return normalized


def validate_form_config_payload(form_type: FormType, payload: FormConfigUpsert) -> FormConfigUpsert:
    """Check a PUT body and return the normalized copy that gets stored.

    Saving is not byte-for-byte: titles, description, field labels and
    custom field labels are stripped of surrounding whitespace, blank text
    becomes null, dropdown options are stripped with blank ones dropped, and
    locked fields are stored visible and required. A client that wants to
    show what was stored reloads the row returned by the PUT.
    """
    text_limit = int(settings.FORM_TEXT_MAX_LENGTH)
    label_limit = int(settings.FORM_LABEL_MAX_LENGTH)
    return FormConfigUpsert(
        title=_optional_text(payload.title, limit=label_limit, name="Title"),
        hero_title=_optional_text(payload.hero_title, limit=label_limit, name="Hero title"),
        description=_optional_text(payload.description, limit=text_limit, name="Description"),
        field_config=_validate_standard_fields(form_type, payload.field_config),
        custom_fields=_validate_custom_fields(payload.custom_fields),
    )


def list_form_configurations(db: Session, church_id: uuid.UUID) -> list[FormConfiguration]:
    return (
        db.query(FormConfiguration)
        .filter(FormConfiguration.church_id == church_id)
        .order_by(FormConfiguration.form_type.asc())
        .all()
    )


def get_form_configuration(db: Session, church_id: uuid.UUID, form_type: FormType) -> FormConfiguration | None:
    return (
        db.query(FormConfiguration)
        .filter(
            FormConfiguration.church_id == church_id,
            FormConfiguration.form_type == form_type.value,
        )
        .first()
    )


def _apply(row: FormConfiguration, data: FormConfigUpsert, responsible: str) -> None:
    row.title = data.title
    row.hero_title = data.hero_title
    row.description = data.description
    row.field_config = [item.to_wire() for item in data.field_config]
    row.custom_fields = [item.to_wire() for item in data.custom_fields]
    row.responsible = responsible
    row.updated_at = utcnow()


def upsert_form_configuration(
    db: Session,
    *,
    church_id: uuid.UUID,
    form_type: FormType,
    payload: FormConfigUpsert,
    responsible: str,
) -> FormConfiguration:
    data = validate_form_config_payload(form_type, payload)
    row = get_form_configuration(db, church_id, form_type)
    if row is not None:
        # Last write wins; there is no version check between concurrent editors.
        logger.info(
            "form_config_overwrite church=%s form_type=%s previous_by=%s previous_at=%s",
            church_id,
            form_type.value,
            row.responsible,
            row.updated_at,
        )
    else:
        row = FormConfiguration(church_id=church_id, form_type=form_type.value)
    _apply(row, data, responsible)
    try:
        db.add(row)
        db.commit()
    except IntegrityError:
        # Another session created the row first; update that one instead.
        db.rollback()
        row = get_form_configuration(db, church_id, form_type)
        if row is None:
            raise HTTPException(status_code=409, detail="Form configuration could not be saved, try again")
        _apply(row, data, responsible)
        db.add(row)
        db.commit()
    db.refresh(row)
    logger.info(
        "form_config_saved church=%s form_type=%s fields=%s custom_fields=%s by=%s",
        church_id,
        form_type.value,
        len(data.field_config),
        len(data.custom_fields),
        responsible,
    )
    return row


def reset_form_configuration(db: Session, *, church_id: uuid.UUID, form_type: FormType, responsible: str) -> bool:
    row = get_form_configuration(db, church_id, form_type)
    if row is None:
        return False
    db.delete(row)
    db.commit()
    logger.info("form_config_reset church=%s form_type=%s by=%s", church_id, form_type.value, responsible)
    return True
