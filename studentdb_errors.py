from typing import Any, Dict, Optional


class StudentDBError(Exception):
    """
    Base class for every error raised or reported by StudentDB Manager.
    Carries a human readable message plus a short machine code.
    """
    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details
        super().__init__(self.message)


class ValidationError(StudentDBError):
    """Form input rejected before anything reaches the store."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message=message, code="VALIDATION_ERROR", details=details)


class StorageError(StudentDBError):
    """A query against the store failed."""
    def __init__(self, message: str, details: dict = None, code: str = "STORAGE_ERROR"):
        super().__init__(message=message, code=code, details=details)


class DatabaseConnectionError(StorageError):
    """The store could not be opened."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message=message, details=details, code="CONNECTION_ERROR")
