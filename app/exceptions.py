"""Domain-specific exceptions with user-ready messages."""


class ConfigurationError(Exception):
    """Raised when application configuration is invalid."""

    pass


class DatabaseConnectionError(Exception):
    """Raised when the database cannot be reached during startup."""

    def __init__(self, database_url: str, cause: Exception) -> None:
        self.database_url = database_url
        self.cause = cause
        super().__init__(f"Could not connect to database {database_url}: {cause}")


class BusinessLogicException(Exception):
    """Base exception class for request-level errors with an error code."""

    def __init__(self, message: str, error_code: str) -> None:
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class InvalidJsonException(BusinessLogicException):
    """Exception raised when a JSON request body cannot be parsed."""

    def __init__(self, cause: str) -> None:
        self.cause = cause
        super().__init__(f"Invalid JSON body: {cause}", error_code="INVALID_JSON")
