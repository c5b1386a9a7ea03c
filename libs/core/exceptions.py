"""Custom exceptions for the gather board."""

from typing import Any, Optional


class TrackerError(Exception):
    """Base exception for the gather board.

    Every subclass carries a stable ``code`` and the HTTP status the
    transport layer answers with.
    """

    code = "tracker_error"
    status_code = 500

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Structured failure body."""
        return {"error": self.message, "code": self.code}


class StorageUnavailable(TrackerError):
    """Backing document unreadable or unwritable. Retryable."""

    code = "storage_unavailable"
    status_code = 500

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.path = path


class ItemNotFound(TrackerError):
    """No item matches the requested name."""

    code = "item_not_found"
    status_code = 404

    def __init__(self, name: str, context: Optional[dict[str, Any]] = None):
        super().__init__("Item not found", context)
        self.name = name


class InvalidClaimer(TrackerError):
    """Claimer label is empty after trimming."""

    code = "invalid_claimer"
    status_code = 400

    def __init__(self, context: Optional[dict[str, Any]] = None):
        super().__init__("Claimer required", context)


class Unauthorized(TrackerError):
    """Caller does not hold a valid shared secret."""

    code = "unauthorized"
    status_code = 401

    def __init__(self, message: str = "Unauthorized", context: Optional[dict[str, Any]] = None):
        super().__init__(message, context)


class PasswordConflict(TrackerError):
    code = "password_exists"
    status_code = 400

    def __init__(self, context: Optional[dict[str, Any]] = None):
        super().__init__("Password already exists", context)


class PasswordNotFound(TrackerError):
    code = "password_not_found"
    status_code = 404

    def __init__(self, context: Optional[dict[str, Any]] = None):
        super().__init__("Password not found", context)


class LastPasswordRemoval(TrackerError):
    """Removing the only remaining password would lock everyone out."""

    code = "last_password"
    status_code = 400

    def __init__(self, context: Optional[dict[str, Any]] = None):
        super().__init__("Cannot remove the last password", context)


class InvalidAction(TrackerError):
    code = "invalid_action"
    status_code = 400

    def __init__(self, action: str, context: Optional[dict[str, Any]] = None):
        super().__init__("Invalid action", context)
        self.action = action
