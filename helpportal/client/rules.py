"""
Display rules the UI applies on top of the API.

These decide which list a dashboard asks for and which buttons it shows.
They are not access control: the server still accepts any chat message and
enforces only the status transitions itself.
"""

from ..shared.enums import RequestStatus, UserRole
from .api import PortalClient


def is_helper(user: dict) -> bool:
    return user.get("role") == UserRole.HELPER.value


def is_assigned_helper(user: dict, request: dict) -> bool:
    return bool(request.get("helper_id")) and request.get("helper_id") == user.get("id")


def can_accept(user: dict, request: dict) -> bool:
    return is_helper(user) and request.get("status") == RequestStatus.PENDING.value


def can_start(user: dict, request: dict) -> bool:
    return (
        is_helper(user)
        and is_assigned_helper(user, request)
        and request.get("status") == RequestStatus.ACCEPTED.value
    )


def can_complete(user: dict, request: dict) -> bool:
    return (
        is_helper(user)
        and is_assigned_helper(user, request)
        and request.get("status") == RequestStatus.IN_PROGRESS.value
    )


def is_chat_available(user: dict, request: dict) -> bool:
    if request.get("status") == RequestStatus.PENDING.value:
        return False
    return request.get("resident_id") == user.get("id") or is_assigned_helper(user, request)


def dashboard_requests(client: PortalClient, user: dict, only_mine: bool = False) -> list[dict]:
    if not is_helper(user):
        return client.requests_for_resident(user["id"])
    if only_mine:
        return client.requests_for_helper(user["id"])
    return client.list_requests()
