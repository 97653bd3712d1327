from .api import ApiError, PortalClient
from .polling import CHAT_POLL_SECONDS, REQUEST_POLL_SECONDS, poll
from .session import SessionStore

__all__ = [
    "ApiError",
    "PortalClient",
    "SessionStore",
    "poll",
    "REQUEST_POLL_SECONDS",
    "CHAT_POLL_SECONDS",
]
