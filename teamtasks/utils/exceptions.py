# teamtasks/utils/exceptions.py
# Domain errors. They are HTTPExceptions so FastAPI renders them as {"detail": ...}
# with the right status, while services stay usable without a request.
from fastapi import HTTPException, status


class TrackerError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"

    def __init__(self, detail: str = None, headers: dict = None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail, headers=headers)


class InvalidInput(TrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"


class Conflict(TrackerError):
    # duplicates are reported as plain bad requests to the client
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Resource already exists"


class Unauthorized(TrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Authentication required"

    def __init__(self, detail: str = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class SessionExpired(Unauthorized):
    default_detail = "Session expired, please log in again"


class Forbidden(TrackerError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Access denied"


class NotFound(TrackerError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"
