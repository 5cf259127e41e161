# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Client-facing error taxonomy.

Every failure that reaches a caller is one of these.  ``main.py`` renders
them all with the same body shape::

    {"message": "<stable string>", "code": <http status>}
"""

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class BadRequest(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "bad request"


class InvalidId(BadRequest):
    message = "invalid id"


class InvalidCredential(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "invalid credential"


class InvalidRole(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "invalid role"


class ForbiddenAccess(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "forbidden access"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "not found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    message = "conflict"


class DuplicateUser(Conflict):
    message = "duplicate entry"


class InternalError(AppError):
    pass
