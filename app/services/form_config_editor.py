"""In-memory editing of one church's form settings.

``FormConfigEditor`` holds the draft for a single form type and talks to the
form-configurations API only when ``save()`` is called. ``FormSettingsSession``
keeps one editor per form type so switching between forms never mixes drafts.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from threading import Lock
from typing import Any, Callable, Protocol

from app.schemas.form_config import (
    CustomField,
    CustomFieldType,
    FormConfigOut,
    FormConfigUpsert,
    FormCopy,
    FormFieldConfig,
    FormType,
)
from app.services.form_config_client import GENERIC_SAVE_ERROR, FormConfigSaveError
from app.services.form_config_resolver import find_persisted, resolve_form_config
from app.services.form_fields import default_copy_for, default_fields_for, parse_form_type

_LOG = logging.getLogger("app.form_editor")

Notifier = Callable[[str, str], None]


class FormConfigBackend(Protocol):
    def list_configurations(self) -> list[FormConfigOut]:
        ...

    def save_configuration(self, form_type: FormType | str, payload: dict[str, Any]) -> FormConfigOut:
        ...


class EditorState(str, Enum):
    CLEAN = "clean"
    DIRTY = "dirty"


def reorder_fields(fields: list[FormFieldConfig], from_key: str, to_key: str) -> list[FormFieldConfig]:
    """Move ``from_key`` to the slot ``to_key`` occupies, shifting the rest."""
    if from_key == to_key:
        return list(fields)
    keys = [item.key for item in fields]
    if from_key not in keys or to_key not in keys:
        return list(fields)
    old_index = keys.index(from_key)
    new_index = keys.index(to_key)
    result = list(fields)
    moved = result.pop(old_index)
    result.insert(new_index, moved)
    return result


def _check_index(items: list, index: int) -> None:
    if not 0 <= index < len(items):
        raise IndexError(index)


def _log_notifier(level: str, message: str) -> None:
    if level == "error":
        _LOG.warning("form_editor_notice level=%s message=%s", level, message)
    else:
        _LOG.info("form_editor_notice level=%s message=%s", level, message)


class FormConfigEditor:
    def __init__(
        self,
        form_type: FormType | str,
        backend: FormConfigBackend,
        persisted: FormConfigOut | dict | None = None,
        *,
        notify: Notifier | None = None,
    ):
        normalized = parse_form_type(form_type)
        if normalized is None:
            raise ValueError(f"Unknown form type: {form_type!r}")
        self.form_type = normalized
        self.backend = backend
        self.notify = notify or _log_notifier
        self.last_error: str | None = None
        self._save_lock = Lock()
        self.load(persisted)

    # -- state -----------------------------------------------------------

    def load(self, persisted: FormConfigOut | dict | None) -> None:
        """Re-derive the draft from stored settings, dropping pending edits."""
        if isinstance(persisted, dict):
            persisted = FormConfigOut.model_validate(persisted)
        self.loaded_row: FormConfigOut | None = persisted
        effective = resolve_form_config(self.form_type, persisted)
        self.title = effective.title
        self.hero_title = effective.hero_title
        self.description = effective.description
        self.placeholders: FormCopy = effective.placeholders
        self.field_config: list[FormFieldConfig] = effective.field_config
        self.custom_fields: list[CustomField] = effective.custom_fields
        self.state = EditorState.CLEAN

    @property
    def is_dirty(self) -> bool:
        return self.state == EditorState.DIRTY

    @property
    def is_saving(self) -> bool:
        return self._save_lock.locked()

    def _touch(self) -> None:
        self.state = EditorState.DIRTY

    # -- standard fields -------------------------------------------------

    def reorder(self, from_key: str, to_key: str) -> None:
        reordered = reorder_fields(self.field_config, from_key, to_key)
        if [item.key for item in reordered] != [item.key for item in self.field_config]:
            self.field_config = reordered
            self._touch()

    def _toggle(self, index: int, flag: str) -> None:
        _check_index(self.field_config, index)
        current = self.field_config[index]
        if current.locked:
            return
        updated = list(self.field_config)
        updated[index] = current.model_copy(update={flag: not getattr(current, flag)})
        self.field_config = updated
        self._touch()

    def toggle_visible(self, index: int) -> None:
        self._toggle(index, "visible")

    def toggle_required(self, index: int) -> None:
        self._toggle(index, "required")

    def relabel(self, index: int, label: str) -> None:
        _check_index(self.field_config, index)
        updated = list(self.field_config)
        updated[index] = updated[index].model_copy(update={"label": label})
        self.field_config = updated
        self._touch()

    def set_title(self, value: str) -> None:
        self.title = value
        self._touch()

    def set_hero_title(self, value: str) -> None:
        self.hero_title = value
        self._touch()

    def set_description(self, value: str) -> None:
        self.description = value
        self._touch()

    # -- custom fields ---------------------------------------------------

    def _new_custom_id(self) -> str:
        base = f"custom_{int(time.time() * 1000)}"
        taken = {item.id for item in self.custom_fields}
        candidate = base
        suffix = 1
        while candidate in taken:
            candidate = f"{base}_{suffix}"
            suffix += 1
        return candidate

    def add_custom_field(self) -> CustomField:
        field = CustomField(id=self._new_custom_id(), label="", type=CustomFieldType.TEXT, required=False, options=[])
        self.custom_fields = [*self.custom_fields, field]
        self._touch()
        return field

    def update_custom_field(self, index: int, **changes: Any) -> CustomField:
        _check_index(self.custom_fields, index)
        current = self.custom_fields[index]
        merged = CustomField.model_validate({**current.model_dump(), **changes})
        updated = list(self.custom_fields)
        updated[index] = merged
        self.custom_fields = updated
        self._touch()
        return merged

    def remove_custom_field(self, index: int) -> None:
        _check_index(self.custom_fields, index)
        self.custom_fields = [item for i, item in enumerate(self.custom_fields) if i != index]
        self._touch()

    def _replace_options(self, field_index: int, options: list[str]) -> None:
        updated = list(self.custom_fields)
        updated[field_index] = updated[field_index].model_copy(update={"options": options})
        self.custom_fields = updated
        self._touch()

    def add_option(self, field_index: int) -> None:
        _check_index(self.custom_fields, field_index)
        self._replace_options(field_index, [*self.custom_fields[field_index].options, ""])

    def update_option(self, field_index: int, option_index: int, value: str) -> None:
        _check_index(self.custom_fields, field_index)
        options = list(self.custom_fields[field_index].options)
        _check_index(options, option_index)
        options[option_index] = value
        self._replace_options(field_index, options)

    def remove_option(self, field_index: int, option_index: int) -> None:
        _check_index(self.custom_fields, field_index)
        options = list(self.custom_fields[field_index].options)
        _check_index(options, option_index)
        del options[option_index]
        self._replace_options(field_index, options)

    # -- reset / save ----------------------------------------------------

    def reset_to_default(self) -> None:
        """Replace the draft with built-in defaults; stored settings stay until save()."""
        self.title = ""
        self.hero_title = ""
        self.description = ""
        self.placeholders = default_copy_for(self.form_type)
        self.field_config = default_fields_for(self.form_type)
        self.custom_fields = []
        self._touch()

    def payload(self) -> dict[str, Any]:
        body = FormConfigUpsert(
            title=self.title or None,
            hero_title=self.hero_title or None,
            description=self.description or None,
            field_config=self.field_config,
            custom_fields=self.custom_fields,
        )
        return body.model_dump(mode="json", by_alias=True, exclude_none=True)

    def _refetch(self, saved: FormConfigOut) -> FormConfigOut | None:
        try:
            return find_persisted(self.backend.list_configurations(), self.form_type)
        except FormConfigSaveError as exc:
            _LOG.warning("form_editor_refetch_failed form_type=%s error=%s", self.form_type.value, exc.message)
            return saved

    def save(self) -> bool:
        if not self._save_lock.acquire(blocking=False):
            _LOG.info("form_editor_save_skipped form_type=%s reason=pending", self.form_type.value)
            return False
        try:
            try:
                saved = self.backend.save_configuration(self.form_type, self.payload())
            except FormConfigSaveError as exc:
                self.last_error = exc.message or GENERIC_SAVE_ERROR
                _LOG.warning("form_editor_save_failed form_type=%s error=%s", self.form_type.value, self.last_error)
                self.notify("error", self.last_error)
                return False
            self.last_error = None
            self.load(self._refetch(saved))
            self.notify("success", "Form settings saved")
            return True
        finally:
            self._save_lock.release()


class FormSettingsSession:
    """Independent editors for every form type of one church."""

    def __init__(self, backend: FormConfigBackend, *, notify: Notifier | None = None):
        self.backend = backend
        self.notify = notify
        self.editors: dict[FormType, FormConfigEditor] = {
            form_type: FormConfigEditor(form_type, backend, None, notify=notify) for form_type in FormType
        }

    def editor(self, form_type: FormType | str) -> FormConfigEditor:
        normalized = parse_form_type(form_type)
        if normalized is None:
            raise KeyError(form_type)
        return self.editors[normalized]

    def refresh(self, *, discard_edits: bool = False) -> None:
        """Reload editors from the server.

        A dirty draft survives only while its stored row is the one it was
        loaded from. When the row changed on the server the draft is dropped
        and the editor shows the stored settings.
        """
        configs = self.backend.list_configurations()
        for form_type, editor in self.editors.items():
            current = find_persisted(configs, form_type)
            if editor.is_dirty and not discard_edits:
                if current == editor.loaded_row:
                    continue
                _LOG.info("form_editor_draft_discarded form_type=%s reason=changed_on_server", form_type.value)
            editor.load(current)
