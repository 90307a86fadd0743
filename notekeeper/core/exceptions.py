"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a note cannot be found by identity."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class DatabaseError(ApplicationError):
    """Raised when a database operation fails."""

    def __init__(self, message: str = "Database error", code: str = "SYS_DATABASE_ERROR") -> None:
        super().__init__(message, code=code)


class StorageUnavailableError(DatabaseError):
    """Raised when the backing store cannot be opened or created."""

    def __init__(self, message: str = "Storage unavailable") -> None:
        super().__init__(message, code="SYS_STORAGE_UNAVAILABLE")


class PersistenceWriteError(DatabaseError):
    """Raised when an insert, update or delete against the store fails."""

    def __init__(self, message: str = "Persistence write failed") -> None:
        super().__init__(message, code="SYS_PERSISTENCE_WRITE_FAILED")
