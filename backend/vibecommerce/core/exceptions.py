"""
Domain errors shared by services and routes.

Every error carries a stable machine-checkable ``kind`` and an HTTP status.
Handlers in main.py turn them into ``{"detail": ..., "kind": ..., **extra}``.
"""

from typing import Any, Dict


class AppError(Exception):
    kind = "internal"
    status_code = 500

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra: Dict[str, Any] = extra

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message, "kind": self.kind, **self.extra}


class ValidationFailed(AppError):
    kind = "validation_failed"
    status_code = 400


class Unauthenticated(AppError):
    kind = "unauthenticated"
    status_code = 401


class InvalidToken(Unauthenticated):
    """Signature, structure or claim problem with a bearer token."""


class TokenExpired(InvalidToken):
    """Token was well formed and signed but is past its ``exp`` claim."""


class Forbidden(AppError):
    kind = "forbidden"
    status_code = 403


class NotFound(AppError):
    kind = "not_found"
    status_code = 404


class InsufficientStock(AppError):
    kind = "insufficient_stock"
    status_code = 400

    def __init__(self, available: int, message: str | None = None):
        super().__init__(
            message or f"Insufficient stock. Only {available} available",
            available=available,
        )
        self.available = available


class Conflict(AppError):
    kind = "conflict"
    status_code = 400


class Internal(AppError):
    kind = "internal"
    status_code = 500
