"""Domain-specific exceptions for the vehicle expense core services."""

class ValidationError(ValueError):
    """Raised when provided data does not meet validation requirements."""


class PersistenceError(IOError):
    """Raised when the database layer encounters unrecoverable issues."""
