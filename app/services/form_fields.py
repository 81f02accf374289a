"""Built-in field sets for the three public intake forms.

The tuples below are the canonical definitions; callers always receive fresh
model instances so edits in one editor never leak into another's defaults.
"""

from __future__ import annotations

from app.schemas.form_config import FormCopy, FormFieldConfig, FormType

# (key, label, locked)
_CONVERT_FIELDS = (
    ("firstName", "First Name", True),
    ("lastName", "Last Name", True),
    ("salvationDecision", "Salvation Decision", False),
    ("phone", "Phone Number", False),
    ("email", "Email Address", False),
    ("dateOfBirth", "Date of Birth", False),
    ("country", "Country", False),
    ("wantsContact", "Would you like someone to contact you?", False),
    ("gender", "Gender", False),
    ("ageGroup", "Age Group", False),
    ("isChurchMember", "Are you a member of a church?", False),
    ("prayerRequest", "Prayer Request", False),
)

_NEW_MEMBER_FIELDS = (
    ("firstName", "First Name", True),
    ("lastName", "Last Name", True),
    ("phone", "Phone Number", False),
    ("email", "Email Address", False),
    ("gender", "Gender", False),
    ("ageGroup", "Age Group", False),
    ("dateOfBirth", "Date of Birth", False),
    ("country", "Country", False),
    ("address", "Address", False),
    ("notes", "Additional Notes", False),
)

_MEMBER_FIELDS = (
    ("firstName", "First Name", True),
    ("lastName", "Last Name", True),
    ("phone", "Phone Number", False),
    ("email", "Email Address", False),
    ("gender", "Gender", False),
    ("ageGroup", "Age Group", False),
    ("dateOfBirth", "Date of Birth", False),
    ("memberSince", "Member Since", False),
    ("country", "Country", False),
    ("address", "Address", False),
    ("notes", "Additional Notes", False),
)

_DEFAULTS = {
    FormType.CONVERT: _CONVERT_FIELDS,
    FormType.NEW_MEMBER: _NEW_MEMBER_FIELDS,
    FormType.MEMBER: _MEMBER_FIELDS,
}

_COPY = {
    FormType.CONVERT: (
        "Share Your Decision",
        "We're so glad you made a decision",
        "Let us know about your decision so we can walk with you in your next steps.",
    ),
    FormType.NEW_MEMBER: (
        "Join Our Church Family",
        "Welcome to the family",
        "Tell us a little about yourself so we can welcome you properly.",
    ),
    FormType.MEMBER: (
        "Member Registration",
        "Keep your details up to date",
        "Share your details so our leaders can stay connected with you.",
    ),
}


def parse_form_type(raw) -> FormType | None:
    if isinstance(raw, FormType):
        return raw
    try:
        return FormType(str(raw or "").strip())
    except ValueError:
        return None


def default_fields_for(form_type) -> list[FormFieldConfig]:
    normalized = parse_form_type(form_type)
    if normalized is None:
        return []
    return [
        FormFieldConfig(key=key, label=label, visible=True, required=locked, locked=locked)
        for key, label, locked in _DEFAULTS[normalized]
    ]


def known_keys_for(form_type) -> list[str]:
    normalized = parse_form_type(form_type)
    if normalized is None:
        return []
    return [key for key, _, _ in _DEFAULTS[normalized]]


def locked_keys_for(form_type) -> set[str]:
    normalized = parse_form_type(form_type)
    if normalized is None:
        return set()
    return {key for key, _, locked in _DEFAULTS[normalized] if locked}


def default_label_for(form_type, key: str) -> str | None:
    normalized = parse_form_type(form_type)
    if normalized is None:
        return None
    for field_key, label, _ in _DEFAULTS[normalized]:
        if field_key == key:
            return label
    return None


def default_copy_for(form_type) -> FormCopy:
    normalized = parse_form_type(form_type)
    if normalized is None:
        return FormCopy(title="", hero_title="", description="")
    title, hero_title, description = _COPY[normalized]
    return FormCopy(title=title, hero_title=hero_title, description=description)
