"""Error taxonomy shared by the services and the HTTP layer.

Services raise these; ``todo_api.main`` turns them into JSON responses
carrying ``status_code`` and ``detail``.
"""
from typing import Any, Dict, Optional

from fastapi import status


class TodoApiError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Internal server error"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, detail: Optional[Any] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ValidationError(TodoApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Validation failed"


class UnauthorizedError(TodoApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Unauthorized"
    headers = {"WWW-Authenticate": "Bearer"}


class NotFoundError(TodoApiError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class ConflictError(TodoApiError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Conflict"
