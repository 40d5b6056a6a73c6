"""HTTP failures raised by the reseller endpoints.

Each class fixes the status code and the default message so routers and
services raise the same body for the same failure."""
from typing import Optional

from fastapi import HTTPException, status


class UnauthorizedError(HTTPException):
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class StoreNotFoundError(HTTPException):
    def __init__(self, detail: str = "Store not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class SettingsValidationError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InternalServerError(HTTPException):
    def __init__(self, detail: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail or "Internal server error",
        )
