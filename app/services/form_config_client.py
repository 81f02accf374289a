from __future__ import annotations

import logging
from typing import Any

import httpx

from app.core.config import settings
from app.schemas.form_config import FormConfigOut, FormType

logger = logging.getLogger("app.form_config")

GENERIC_SAVE_ERROR = "Failed to save form configuration"


class FormConfigSaveError(Exception):
    def __init__(self, message: str | None = None, *, status_code: int | None = None):
        self.message = str(message or "").strip() or GENERIC_SAVE_ERROR
        self.status_code = status_code
        super().__init__(self.message)


def _error_detail(response: httpx.Response) -> str:
    payload: Any = {}
    try:
        payload = response.json() if response.content else {}
    except ValueError:
        payload = {}
    if isinstance(payload, dict):
        detail = payload.get("detail") or payload.get("message") or payload.get("error")
        if isinstance(detail, str) and detail.strip():
            return detail.strip()
    return ""


class FormConfigClient:
    """Consumer side of the form-configurations endpoints.

    When ``http`` is given (an ``httpx.Client``, or a FastAPI ``TestClient``)
    it is reused for every call; otherwise a short-lived client is opened per
    request.
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        *,
        http: httpx.Client | None = None,
        timeout: float | None = None,
    ):
        self.base_url = str(base_url if base_url is not None else settings.FORM_CONFIG_API_URL).rstrip("/")
        self.token = str(token or "").strip()
        self.timeout = float(timeout if timeout is not None else settings.FORM_CONFIG_CLIENT_TIMEOUT_SECONDS)
        self._http = http

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, path: str, *, json: dict | None = None) -> httpx.Response:
        url = f"{self.base_url}/form-configurations{path}"
        try:
            if self._http is not None:
                return self._http.request(method, url, headers=self._headers(), json=json)
            with httpx.Client(timeout=self.timeout) as client:
                return client.request(method, url, headers=self._headers(), json=json)
        except httpx.HTTPError as exc:
            logger.warning("form_config_request_failed method=%s url=%s error=%s", method, url, exc)
            raise FormConfigSaveError(f"Could not reach the server: {exc}") from exc

    def _checked(self, response: httpx.Response) -> Any:
        if response.status_code >= 400:
            raise FormConfigSaveError(_error_detail(response), status_code=response.status_code)
        try:
            return response.json() if response.content else None
        except ValueError as exc:
            raise FormConfigSaveError("Unexpected response from the server", status_code=response.status_code) from exc

    def list_configurations(self) -> list[FormConfigOut]:
        payload = self._checked(self._request("GET", ""))
        return [FormConfigOut.model_validate(item) for item in payload or []]

    def save_configuration(self, form_type: FormType | str, payload: dict[str, Any]) -> FormConfigOut:
        form_type_value = form_type.value if isinstance(form_type, FormType) else str(form_type)
        body = self._checked(self._request("PUT", f"/{form_type_value}", json=payload))
        return FormConfigOut.model_validate(body)

    def reset_configuration(self, form_type: FormType | str) -> bool:
        form_type_value = form_type.value if isinstance(form_type, FormType) else str(form_type)
        body = self._checked(self._request("DELETE", f"/{form_type_value}"))
        return bool((body or {}).get("removed"))
