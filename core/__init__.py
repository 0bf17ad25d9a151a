"""
Core module for the Unbox API client.

Contains the request/response pipeline:
- exceptions: Custom exception hierarchy
- retry: Bounded immediate-retry helper
- api_client: The API façade (request building, dispatch, status classification)
"""

from .exceptions import (
    UnboxError,
    ValidationError,
    AuthenticationError,
    ServerError,
    ServiceUnavailableError,
    ApiError,
)
from .retry import call_with_retries
from .api_client import UnboxAPIClient, ResponseCategory, classify_status

__all__ = [
    "UnboxError",
    "ValidationError",
    "AuthenticationError",
    "ServerError",
    "ServiceUnavailableError",
    "ApiError",
    "call_with_retries",
    "UnboxAPIClient",
    "ResponseCategory",
    "classify_status",
]
