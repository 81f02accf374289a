from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FormType(str, Enum):
    CONVERT = "convert"
    NEW_MEMBER = "new_member"
    MEMBER = "member"


class CustomFieldType(str, Enum):
    TEXT = "text"
    DROPDOWN = "dropdown"
    YES_NO = "yes_no"


class WireModel(BaseModel):
    """Base for payloads exchanged with the browser: camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class FormFieldConfig(WireModel):
    key: str
    label: str
    visible: bool = True
    required: bool = False
    locked: bool = False


class CustomField(WireModel):
    id: str
    label: str = ""
    type: CustomFieldType = CustomFieldType.TEXT
    required: bool = False
    options: list[str] = Field(default_factory=list)


class FormConfigUpsert(WireModel):
    title: Optional[str] = None
    hero_title: Optional[str] = None
    description: Optional[str] = None
    field_config: list[FormFieldConfig] = Field(default_factory=list)
    custom_fields: list[CustomField] = Field(default_factory=list)


class FormConfigOut(WireModel):
    id: str
    church_id: str
    form_type: FormType
    title: Optional[str] = None
    hero_title: Optional[str] = None
    description: Optional[str] = None
    field_config: list[FormFieldConfig] = Field(default_factory=list)
    custom_fields: list[CustomField] = Field(default_factory=list)
    updated_at: Optional[datetime] = None
    responsible: Optional[str] = None


class FormCopy(WireModel):
    title: str
    hero_title: str
    description: str


class EffectiveFormConfigOut(WireModel):
    form_type: FormType
    title: str = ""
    hero_title: str = ""
    description: str = ""
    placeholders: FormCopy
    field_config: list[FormFieldConfig]
    custom_fields: list[CustomField]
    is_default: bool


class PublicFormOut(WireModel):
    church_name: str
    church_logo_url: Optional[str] = None
    form_type: FormType
    title: str
    hero_title: str
    description: str
    fields: list[FormFieldConfig]
    custom_fields: list[CustomField]


class PublicSubmissionCheck(WireModel):
    fields: dict[str, Optional[str]] = Field(default_factory=dict)
    custom_fields: dict[str, Optional[str]] = Field(default_factory=dict)
