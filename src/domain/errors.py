"""Domain error types."""


class ValidationError(ValueError):
    """User-supplied input violates a domain constraint.

    Attributes:
        field: Name of the offending input.
        value: Offending value, as computed or received.
    """

    def __init__(self, message: str, field: str | None = None, value=None):
        super().__init__(message)
        self.field = field
        self.value = value


class PersistenceError(RuntimeError):
    """Storage or rate-service I/O failed."""


__all__ = ["ValidationError", "PersistenceError"]
