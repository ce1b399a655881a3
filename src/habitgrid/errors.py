"""Error taxonomy shared by the store, the engine and the HTTP layer."""

from __future__ import annotations


class HabitGridError(Exception):
    """Base class for expected application failures."""

    status_code = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message())
        self.message = message or self.default_message()

    def default_message(self) -> str:
        return "unexpected error"

    @property
    def public_message(self) -> str:
        """Message safe to return to API clients."""

        return self.message


class ValidationError(HabitGridError):
    """Missing or invalid input."""

    status_code = 400

    def default_message(self) -> str:
        return "invalid input"


class NotFoundError(HabitGridError):
    """Unknown habit id."""

    status_code = 404

    def default_message(self) -> str:
        return "not found"

    @property
    def public_message(self) -> str:
        return "not found"


class PersistenceError(HabitGridError):
    """Store failure; details stay in the server log."""

    status_code = 500

    def default_message(self) -> str:
        return "internal storage error"

    @property
    def public_message(self) -> str:
        return "internal storage error"


__all__ = ["HabitGridError", "NotFoundError", "PersistenceError", "ValidationError"]
