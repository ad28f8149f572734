"""Error types raised by the healthmate core."""


class HealthMateError(Exception):
    """Base class for healthmate errors."""


class ValidationError(HealthMateError):
    """A payload field is missing, malformed or out of range.

    Raised at the validation boundary, before anything is persisted.
    """

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class NotFoundError(HealthMateError):
    """A record required by an operation does not exist."""


class ExternalServiceError(HealthMateError):
    """The AI completion service failed or returned an unusable payload."""


class PersistenceConflict(HealthMateError):
    """A concurrent write held the record lock for longer than we could wait."""
