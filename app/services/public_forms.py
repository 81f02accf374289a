from __future__ import annotations

from fastapi import HTTPException

from app.models.church import Church
from app.schemas.form_config import CustomField, CustomFieldType, PublicFormOut, PublicSubmissionCheck
from app.services.form_config_resolver import EffectiveFormConfig

YES_NO_VALUES = {"yes", "no"}


def _is_missing_value(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _render_custom_field(item: CustomField) -> CustomField:
    if item.type == CustomFieldType.DROPDOWN:
        return item.model_copy(update={"options": list(item.options)})
    return item.model_copy(update={"options": []})


def build_public_form(church: Church, effective: EffectiveFormConfig) -> PublicFormOut:
    """Renderer view of a form: hidden fields dropped, placeholders filled in."""
    placeholders = effective.placeholders
    return PublicFormOut(
        church_name=church.name,
        church_logo_url=church.logo_url,
        form_type=effective.form_type,
        title=effective.title or placeholders.title,
        hero_title=effective.hero_title or placeholders.hero_title,
        description=effective.description or placeholders.description,
        fields=[item.model_copy() for item in effective.field_config if item.visible],
        custom_fields=[_render_custom_field(item) for item in effective.custom_fields],
    )


def validate_public_submission_or_400(effective: EffectiveFormConfig, submission: PublicSubmissionCheck) -> None:
    missing: list[str] = []
    invalid: list[str] = []

    for item in effective.field_config:
        if not item.visible:
            continue
        if (item.required or item.locked) and _is_missing_value(submission.fields.get(item.key)):
            missing.append(item.label or item.key)

    for item in effective.custom_fields:
        value = submission.custom_fields.get(item.id)
        if _is_missing_value(value):
            if item.required:
                missing.append(item.label or item.id)
            continue
        answer = str(value).strip()
        if item.type == CustomFieldType.DROPDOWN and answer not in item.options:
            invalid.append(item.label or item.id)
        elif item.type == CustomFieldType.YES_NO and answer.lower() not in YES_NO_VALUES:
            invalid.append(item.label or item.id)

    problems: list[str] = []
    if missing:
        problems.append("Required fields are missing: " + ", ".join(missing))
    if invalid:
        problems.append("Invalid answers for: " + ", ".join(invalid))
    if problems:
        raise HTTPException(status_code=400, detail="; ".join(problems))
