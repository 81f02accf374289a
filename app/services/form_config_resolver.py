from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from app.schemas.form_config import (
    CustomField,
    EffectiveFormConfigOut,
    FormConfigOut,
    FormCopy,
    FormFieldConfig,
    FormType,
)
from app.services.form_fields import default_copy_for, default_fields_for, parse_form_type


@dataclass
class EffectiveFormConfig:
    form_type: FormType
    title: str
    hero_title: str
    description: str
    placeholders: FormCopy
    field_config: list[FormFieldConfig] = field(default_factory=list)
    custom_fields: list[CustomField] = field(default_factory=list)
    is_default: bool = True

    def to_out(self) -> EffectiveFormConfigOut:
        return EffectiveFormConfigOut(
            form_type=self.form_type,
            title=self.title,
            hero_title=self.hero_title,
            description=self.description,
            placeholders=self.placeholders,
            field_config=self.field_config,
            custom_fields=self.custom_fields,
            is_default=self.is_default,
        )


def _as_persisted(raw: FormConfigOut | dict[str, Any] | None) -> FormConfigOut | None:
    if raw is None:
        return None
    if isinstance(raw, FormConfigOut):
        return raw
    return FormConfigOut.model_validate(raw)


def _text(value: str | None) -> str:
    return str(value or "").strip()


def find_persisted(
    configs: Iterable[FormConfigOut | dict[str, Any]] | None,
    form_type: FormType | str,
) -> FormConfigOut | None:
    wanted = parse_form_type(form_type)
    for raw in configs or []:
        row = _as_persisted(raw)
        if row is not None and row.form_type == wanted:
            return row
    return None


def resolve_form_config(
    form_type: FormType | str,
    persisted: FormConfigOut | dict[str, Any] | None,
) -> EffectiveFormConfig:
    """Derive the editable state for one form from its stored override.

    Empty lists in the override fall back independently: standard fields to
    the built-in defaults, custom fields to an empty list. Persisted lists are
    used verbatim, never merged with defaults. Placeholders are returned
    alongside, not substituted into the text values.
    """
    normalized = parse_form_type(form_type)
    if normalized is None:
        raise ValueError(f"Unknown form type: {form_type!r}")
    row = _as_persisted(persisted)

    if row is not None and row.field_config:
        fields = [item.model_copy() for item in row.field_config]
        fields_from_override = True
    else:
        fields = default_fields_for(normalized)
        fields_from_override = False

    if row is not None and row.custom_fields:
        custom = [item.model_copy(update={"options": list(item.options)}) for item in row.custom_fields]
    else:
        custom = []

    title = _text(row.title) if row is not None else ""
    hero_title = _text(row.hero_title) if row is not None else ""
    description = _text(row.description) if row is not None else ""

    return EffectiveFormConfig(
        form_type=normalized,
        title=title,
        hero_title=hero_title,
        description=description,
        placeholders=default_copy_for(normalized),
        field_config=fields,
        custom_fields=custom,
        is_default=not (fields_from_override or custom or title or hero_title or description),
    )
