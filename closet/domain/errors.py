"""Error hierarchy shared by services, stores and the HTTP layer."""

from __future__ import annotations

from typing import Any, Sequence


class ClosetError(Exception):
    """Base class for every error raised by the closet core."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)


class ValidationError(ClosetError):
    """Malformed input or a candidate outfit that breaks a composition rule."""


class OwnershipError(ClosetError):
    """The acting user does not own the referenced item or outfit."""

    def __init__(
        self,
        message: str,
        invalid_ids: Sequence[str] = (),
        context: dict[str, Any] | None = None,
    ) -> None:
        self.invalid_ids = list(invalid_ids)
        super().__init__(message, context)


class NotFoundError(ClosetError):
    """The referenced entity does not exist."""


class StoreError(ClosetError):
    """A persistence call failed; retries belong to the store, not the core."""
