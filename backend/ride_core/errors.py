"""Ride domain errors: stable code + user-facing message per failure kind."""


class RideError(Exception):
    """Base class for ride domain errors."""

    code = "internal"
    default_message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Serializable body for API responses."""
        return {"error": self.code, "message": self.message}


class InvalidArgument(RideError):
    """A payload or mutator argument is missing, unparseable or out of range."""

    code = "invalid_argument"
    default_message = "Invalid argument"

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"{field} is invalid")

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["field"] = self.field
        return body


class NotFound(RideError):
    """Referenced vehicle, user or open ride does not exist."""

    code = "not_found"
    default_message = "Not found"


class Conflict(RideError):
    """In-use transition not allowed, or another request won the race."""

    code = "conflict"
    default_message = "Conflicting vehicle state"


class TimedOut(RideError):
    """Deadline elapsed before the transaction committed."""

    code = "timed_out"
    default_message = "Operation timed out"


class Unavailable(RideError):
    """Store reported a transient failure; caller may retry."""

    code = "unavailable"
    default_message = "Service temporarily unavailable"


class Internal(RideError):
    """Store invariant broken (e.g. two open rides for one vehicle)."""

    code = "internal"
    default_message = "Internal error"
