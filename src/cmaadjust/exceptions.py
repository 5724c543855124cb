"""
Custom Exceptions for the CMA Adjustments service

The adjustment calculator itself never raises on degraded property data;
these exceptions cover the layers around it (configuration, storage,
request validation).

Exception Hierarchy:
    CmaAdjustError (base)
    ├── ConfigurationError
    ├── DatabaseError
    │   └── DatabaseConnectionError
    ├── CmaNotFoundError
    └── ValidationError
"""


class CmaAdjustError(Exception):
    """Base exception for all CMA adjustment errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ConfigurationError(CmaAdjustError):
    """Raised when there's a configuration problem."""

    pass


# Database Errors
class DatabaseError(CmaAdjustError):
    """Base exception for database-related errors."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when unable to connect to the database."""

    pass


class CmaNotFoundError(CmaAdjustError):
    """Raised when no saved adjustment configuration exists for a CMA."""

    def __init__(self, cma_id: str):
        self.cma_id = cma_id
        super().__init__(f"No saved adjustments for CMA: {cma_id}")


class ValidationError(CmaAdjustError):
    """Raised when request input validation fails."""

    def __init__(self, message: str, field: str = None, value=None):
        self.field = field
        self.value = value
        super().__init__(message)
