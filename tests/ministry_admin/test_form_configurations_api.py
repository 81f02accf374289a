from tests.ministry_admin.base import *  # noqa: F401,F403

from app.services.form_fields import default_fields_for

BASE = "/api/ministry-admin/form-configurations"


def _wire_defaults(form_type: str) -> list[dict]:
    return [item.to_wire() for item in default_fields_for(form_type)]


class FormConfigurationsApiTests(FormSettingsApiBase):
    def test_requires_bearer_token(self):
        response = self.client.get(BASE)
        self.assertEqual(response.status_code, 401)

    def test_token_without_church_is_forbidden(self):
        response = self.client.get(BASE, headers=self._auth_headers("ADMIN", church_id=None))
        self.assertEqual(response.status_code, 403)

    def test_leader_can_read_but_not_save(self):
        church = self._create_church()
        headers = self._auth_headers("LEADER", church_id=church.id)

        self.assertEqual(self.client.get(BASE, headers=headers).status_code, 200)
        response = self.client.put(f"{BASE}/convert", headers=headers, json={"fieldConfig": [], "customFields": []})
        self.assertEqual(response.status_code, 403)

    def test_effective_config_falls_back_to_defaults(self):
        church = self._create_church()
        headers = self._auth_headers("ADMIN", church_id=church.id)

        response = self.client.get(f"{BASE}/convert", headers=headers)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["isDefault"])
        self.assertEqual(body["title"], "")
        self.assertEqual(body["placeholders"]["title"], "Share Your Decision")
        self.assertEqual(body["fieldConfig"], _wire_defaults("convert"))
        self.assertEqual(body["customFields"], [])

    def test_unknown_form_type_is_404(self):
        church = self._create_church()
        headers = self._auth_headers("ADMIN", church_id=church.id)
        self.assertEqual(self.client.get(f"{BASE}/visitor", headers=headers).status_code, 404)
        self.assertEqual(
            self.client.put(f"{BASE}/visitor", headers=headers, json={"fieldConfig": []}).status_code,
            404,
        )

    def test_put_upserts_and_lists_row(self):
        church = self._create_church()
        headers = self._auth_headers("ADMIN", church_id=church.id, email="pastor@example.com")
        fields = _wire_defaults("new_member")
        fields[2]["visible"] = False
        payload = {
            "title": "  Welcome Home  ",
            "heroTitle": "",
            "fieldConfig": fields,
            "customFields": [
                {"id": "custom_1", "label": "Ministry interest", "type": "dropdown", "required": True,
                 "options": ["Choir", " ", "Ushering"]},
            ],
        }

        response = self.client.put(f"{BASE}/new_member", headers=headers, json=payload)
        self.assertEqual(response.status_code, 200)
        saved = response.json()
        self.assertEqual(saved["formType"], "new_member")
        self.assertEqual(saved["title"], "Welcome Home")
        self.assertIsNone(saved["heroTitle"])
        self.assertEqual(saved["responsible"], "pastor@example.com")
        self.assertFalse(saved["fieldConfig"][2]["visible"])
        self.assertEqual(saved["customFields"][0]["options"], ["Choir", "Ushering"])

        second = self.client.put(f"{BASE}/new_member", headers=headers, json={**payload, "title": "Again"})
        self.assertEqual(second.status_code, 200)
        self.assertEqual(second.json()["id"], saved["id"])

        listing = self.client.get(BASE, headers=headers).json()
        self.assertEqual(len(listing), 1)
        self.assertEqual(listing[0]["title"], "Again")

    def test_locked_fields_are_normalized(self):
        church = self._create_church()
        headers = self._auth_headers("ADMIN", church_id=church.id)
        fields = _wire_defaults("member")
        fields[0].update({"visible": False, "required": False, "locked": False})
        fields[3]["locked"] = True

        response = self.client.put(f"{BASE}/member", headers=headers, json={"fieldConfig": fields})
        self.assertEqual(response.status_code, 200)
        stored = {item["key"]: item for item in response.json()["fieldConfig"]}
        self.assertEqual(stored["firstName"], {"key": "firstName", "label": "First Name", "visible": True,
                                               "required": True, "locked": True})
        self.assertFalse(stored["email"]["locked"])

    def test_labels_and_options_are_trimmed_on_save(self):
        church = self._create_church()
        headers = self._auth_headers("ADMIN", church_id=church.id)
        fields = _wire_defaults("convert")
        fields[4]["label"] = " Email "
        payload = {
            "fieldConfig": fields,
            "customFields": [
                {"id": "custom_1", "label": " Service ", "type": "dropdown", "options": ["B", " "]},
            ],
        }

        response = self.client.put(f"{BASE}/convert", headers=headers, json=payload)
        self.assertEqual(response.status_code, 200)
        saved = response.json()
        self.assertEqual(saved["fieldConfig"][4]["label"], "Email")
        self.assertEqual(saved["customFields"][0]["label"], "Service")
        self.assertEqual(saved["customFields"][0]["options"], ["B"])

        listing = self.client.get(BASE, headers=headers).json()
        self.assertEqual(listing[0]["fieldConfig"], saved["fieldConfig"])
        self.assertEqual(listing[0]["customFields"], saved["customFields"])

    def test_dropping_locked_field_is_rejected(self):
        church = self._create_church()
        headers = self._auth_headers("ADMIN", church_id=church.id)
        fields = [item for item in _wire_defaults("convert") if item["key"] != "lastName"]

        response = self.client.put(f"{BASE}/convert", headers=headers, json={"fieldConfig": fields})
        self.assertEqual(response.status_code, 400)
        self.assertIn("lastName", response.json()["detail"])

    def test_dropping_unlocked_field_is_allowed(self):
        church = self._create_church()
        headers = self._auth_headers("ADMIN", church_id=church.id)
        fields = [item for item in _wire_defaults("convert") if item["key"] != "prayerRequest"]

        response = self.client.put(f"{BASE}/convert", headers=headers, json={"fieldConfig": fields})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()["fieldConfig"]), len(fields))

    def test_duplicate_and_unknown_keys_are_rejected(self):
        church = self._create_church()
        headers = self._auth_headers("ADMIN", church_id=church.id)
        fields = _wire_defaults("convert")

        duplicated = fields + [fields[3]]
        response = self.client.put(f"{BASE}/convert", headers=headers, json={"fieldConfig": duplicated})
        self.assertEqual(response.status_code, 400)
        self.assertIn("more than once", response.json()["detail"])

        unknown = fields + [{"key": "memberSince", "label": "Member Since"}]
        response = self.client.put(f"{BASE}/convert", headers=headers, json={"fieldConfig": unknown})
        self.assertEqual(response.status_code, 400)
        self.assertIn("memberSince", response.json()["detail"])

    def test_empty_labels_are_rejected_at_save(self):
        church = self._create_church()
        headers = self._auth_headers("ADMIN", church_id=church.id)
        fields = _wire_defaults("convert")
        fields[4]["label"] = "   "
        response = self.client.put(f"{BASE}/convert", headers=headers, json={"fieldConfig": fields})
        self.assertEqual(response.status_code, 400)
        self.assertIn("email", response.json()["detail"])

        response = self.client.put(
            f"{BASE}/convert",
            headers=headers,
            json={"fieldConfig": [], "customFields": [{"id": "custom_1", "label": "", "type": "text"}]},
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("needs a label", response.json()["detail"])

    def test_dropdown_without_options_is_rejected(self):
        church = self._create_church()
        headers = self._auth_headers("ADMIN", church_id=church.id)
        response = self.client.put(
            f"{BASE}/convert",
            headers=headers,
            json={"customFields": [{"id": "custom_1", "label": "Service", "type": "dropdown", "options": ["", " "]}]},
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("at least one option", response.json()["detail"])

    def test_unknown_custom_field_type_is_rejected(self):
        church = self._create_church()
        headers = self._auth_headers("ADMIN", church_id=church.id)
        response = self.client.put(
            f"{BASE}/convert",
            headers=headers,
            json={"customFields": [{"id": "custom_1", "label": "Photo", "type": "file"}]},
        )
        self.assertEqual(response.status_code, 422)

    def test_reset_removes_override(self):
        church = self._create_church()
        headers = self._auth_headers("ADMIN", church_id=church.id)
        self.client.put(f"{BASE}/convert", headers=headers, json={"title": "Custom", "fieldConfig": []})

        response = self.client.delete(f"{BASE}/convert", headers=headers)
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["removed"])
        self.assertEqual(self.client.get(BASE, headers=headers).json(), [])

        again = self.client.delete(f"{BASE}/convert", headers=headers)
        self.assertEqual(again.status_code, 200)
        self.assertFalse(again.json()["removed"])

    def test_configurations_are_scoped_per_church(self):
        first = self._create_church("First Church")
        second = self._create_church("Second Church")
        first_headers = self._auth_headers("ADMIN", church_id=first.id)
        second_headers = self._auth_headers("ADMIN", church_id=second.id)

        self.client.put(f"{BASE}/convert", headers=first_headers, json={"title": "First only"})

        self.assertEqual(self.client.get(BASE, headers=second_headers).json(), [])
        effective = self.client.get(f"{BASE}/convert", headers=second_headers).json()
        self.assertEqual(effective["title"], "")

        self.client.delete(f"{BASE}/convert", headers=second_headers)
        self.assertEqual(len(self.client.get(BASE, headers=first_headers).json()), 1)
