import logging
from typing import Any, Optional

import httpx

from ..shared import config
from ..shared.enums import RequestStatus

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response from the portal; message is the server's text, verbatim."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _error_message(r: httpx.Response) -> str:
    try:
        data: Any = r.json()
    except ValueError:
        data = r.text

    detail = "API request failed"
    if isinstance(data, dict):
        detail = data.get("detail") or data.get("error") or detail
        # validation errors come back as a list of dicts
        if isinstance(detail, list):
            detail = "; ".join(str(d.get("msg", d)) for d in detail)
    elif isinstance(data, str) and data.strip():
        detail = data
    return str(detail)


class PortalClient:
    """
    Thin client over the portal REST API.

    Pass an existing httpx.Client (for example a FastAPI TestClient) to reuse
    its transport; otherwise one is opened against PORTAL_API_URL.
    """

    def __init__(self, base_url: Optional[str] = None, http: Optional[httpx.Client] = None, timeout: float = 10.0):
        # only a client opened here is closed here
        self._owns_http = http is None
        if http is None:
            http = httpx.Client(base_url=base_url or config.api_url(), timeout=timeout)
        self._http = http

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "PortalClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _call(self, method: str, path: str, **kwargs) -> Any:
        try:
            r = self._http.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error("Error calling %s %s (%s)", method, path, e)
            raise ApiError(503, "Portal unavailable") from e

        if r.is_error:
            raise ApiError(r.status_code, _error_message(r))
        return r.json()

    def _get_optional(self, path: str) -> Optional[dict]:
        try:
            return self._call("GET", path)
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise

    # Users

    def register(self, name: str, contact_info: str, location: str, role: str) -> dict:
        body = {"name": name, "contact_info": contact_info, "location": location, "role": role}
        return self._call("POST", "/users/register", json=body)

    def login(self, contact_info: str) -> dict:
        return self._call("POST", "/users/login", json={"contact_info": contact_info})

    def get_user(self, user_id: str) -> Optional[dict]:
        return self._get_optional(f"/users/{user_id}")

    # Requests

    def create_request(
        self,
        resident_id: str,
        title: str,
        description: str,
        category: str,
        resident_name: str = "",
        urgency: str = "Medium",
        location: str = "",
        attachments: Optional[str] = None,
    ) -> dict:
        body = {
            "resident_id": resident_id,
            "resident_name": resident_name,
            "title": title,
            "description": description,
            "category": category,
            "urgency": urgency,
            "location": location,
            "attachments": attachments,
        }
        return self._call("POST", "/requests", json=body)

    def list_requests(
        self,
        status: Optional[str] = None,
        requester_id: Optional[str] = None,
        volunteer_id: Optional[str] = None,
    ) -> list[dict]:
        params = {k: v for k, v in
                  {"status": status, "requester_id": requester_id, "volunteer_id": volunteer_id}.items() if v}
        return self._call("GET", "/requests", params=params)

    def requests_for_resident(self, resident_id: str) -> list[dict]:
        return self.list_requests(requester_id=resident_id)

    def requests_for_helper(self, helper_id: str) -> list[dict]:
        return self.list_requests(volunteer_id=helper_id)

    def open_requests(self) -> list[dict]:
        return self.list_requests(status=RequestStatus.PENDING.value)

    def get_request(self, request_id: str) -> Optional[dict]:
        return self._get_optional(f"/requests/{request_id}")

    def update_request_status(self, request_id: str, status: str, actor_id: str) -> dict:
        return self._call("PUT", f"/requests/{request_id}", json={"status": status, "actor_id": actor_id})

    def accept(self, request_id: str, helper_id: str) -> dict:
        return self.update_request_status(request_id, RequestStatus.ACCEPTED.value, helper_id)

    def start(self, request_id: str, helper_id: str) -> dict:
        return self.update_request_status(request_id, RequestStatus.IN_PROGRESS.value, helper_id)

    def complete(self, request_id: str, helper_id: str) -> dict:
        return self.update_request_status(request_id, RequestStatus.COMPLETED.value, helper_id)

    def delete_request(self, request_id: str) -> dict:
        return self._call("DELETE", f"/requests/{request_id}")

    # Chat

    def get_messages(self, request_id: str) -> list[dict]:
        return self._call("GET", f"/chat/{request_id}")

    def send_message(self, request_id: str, sender_id: str, sender_name: str, text: str) -> dict:
        body = {"request_id": request_id, "sender_id": sender_id, "sender_name": sender_name, "text": text}
        return self._call("POST", "/chat", json=body)
