"""
Custom exceptions for the Unbox API client.

Exception Hierarchy:
    UnboxError (base)
    ├── ValidationError          - Order/Customer data is incomplete or invalid (local)
    ├── AuthenticationError      - API key rejected (401/403)
    ├── ServerError              - API returned a 500 (retryable on order ingest)
    ├── ServiceUnavailableError  - API returned a 5xx above 500 (retryable on order ingest)
    └── ApiError                 - Any other failure status, or the transport failed

Usage:
    Catch UnboxError to handle every failure raised by the client.
    ValidationError is raised before any network call is made.
"""

from typing import Optional, Dict, Any


class UnboxError(Exception):
    """
    Base exception for all Unbox client errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all client errors with a single except clause if needed.
    """

    def __init__(
        self,
        message: str,
        code: int = 0,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            code: HTTP status code where applicable (0 otherwise)
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# LOCAL ERRORS - Raised before anything is sent
# =============================================================================

class ValidationError(UnboxError):
    """
    Order or Customer data failed validation.

    Raised by the model builders, either eagerly from a setter (array items,
    attributes) or from to_dict() when a required field is missing.
    Never retried.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else None
        super().__init__(message, details=details)
        self.field = field


# =============================================================================
# API ERRORS - Raised from the response classification
# =============================================================================

class AuthenticationError(UnboxError):
    """
    The API rejected the API key (401 or 403).

    The response body is never read for these responses.
    """

    def __init__(self, status_code: int):
        message = (
            f"{status_code}: Authorization failed. "
            "Please check your API key is entered correctly"
        )
        super().__init__(message, status_code)


class ServerError(UnboxError):
    """
    The API returned exactly 500.

    Order ingestion retries this; every other operation surfaces it.
    """

    def __init__(self, body: str):
        super().__init__(f"Penny Black API service gave a 500 error: {body}", 500)
        self.body = body


class ServiceUnavailableError(UnboxError):
    """
    The API returned a status above 500 (501, 502, 503, 504...).

    Same retry policy as ServerError.
    """

    def __init__(self, body: str, code: int = 0):
        super().__init__(f"{code}: Penny Black API service is unavailable: {body}", code)
        self.body = body


class ApiError(UnboxError):
    """
    Any other non-success status (e.g. 422), or a transport-level failure.

    For transport failures the message is the transport's own message and
    the code is 0.
    """

    def __init__(self, body: str, code: int = 0):
        super().__init__(f"{code}: Stord Unbox API service error: {body}", code)
        self.body = body
