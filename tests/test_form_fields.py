import os
import unittest

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from app.schemas.form_config import FormType
from app.services.form_fields import (
    default_copy_for,
    default_fields_for,
    default_label_for,
    known_keys_for,
    locked_keys_for,
)


class FormFieldDefaultsTests(unittest.TestCase):
    def test_keys_are_unique_and_locked_fields_are_mandatory(self):
        for form_type in FormType:
            fields = default_fields_for(form_type)
            keys = [item.key for item in fields]
            self.assertEqual(len(keys), len(set(keys)), form_type)
            for item in fields:
                if item.locked:
                    self.assertTrue(item.visible, item.key)
                    self.assertTrue(item.required, item.key)

    def test_convert_defaults_in_order(self):
        keys = [item.key for item in default_fields_for("convert")]
        self.assertEqual(
            keys,
            [
                "firstName",
                "lastName",
                "salvationDecision",
                "phone",
                "email",
                "dateOfBirth",
                "country",
                "wantsContact",
                "gender",
                "ageGroup",
                "isChurchMember",
                "prayerRequest",
            ],
        )
        self.assertEqual(locked_keys_for("convert"), {"firstName", "lastName"})

    def test_member_form_has_member_since(self):
        self.assertIn("memberSince", known_keys_for(FormType.MEMBER))
        self.assertNotIn("memberSince", known_keys_for(FormType.NEW_MEMBER))
        self.assertEqual(default_label_for("member", "memberSince"), "Member Since")
        self.assertIsNone(default_label_for("member", "prayerRequest"))

    def test_unknown_form_type_yields_nothing(self):
        self.assertEqual(default_fields_for("visitor"), [])
        self.assertEqual(known_keys_for(None), [])
        self.assertEqual(locked_keys_for("visitor"), set())
        self.assertEqual(default_copy_for("visitor").title, "")

    def test_every_call_returns_fresh_copies(self):
        first = default_fields_for("new_member")
        first[2] = first[2].model_copy(update={"visible": False})
        first[3].label = "Changed in place"
        second = default_fields_for("new_member")
        self.assertTrue(second[2].visible)
        self.assertEqual(second[3].label, "Email Address")

    def test_placeholder_copy(self):
        self.assertEqual(default_copy_for(FormType.CONVERT).title, "Share Your Decision")
        self.assertEqual(default_copy_for("new_member").title, "Join Our Church Family")
        self.assertTrue(default_copy_for("member").description)
