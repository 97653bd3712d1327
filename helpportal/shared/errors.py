from fastapi import HTTPException


class PortalError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DuplicateContact(PortalError):
    status_code = 400


class NotFound(PortalError):
    status_code = 404


class Unauthorized(PortalError):
    status_code = 403


class InvalidTransition(PortalError):
    status_code = 409


class StoreFailure(PortalError):
    status_code = 500


def to_http(e: PortalError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)
