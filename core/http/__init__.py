"""
HTTP Client Module

requests-based HTTP transport with bounded retries.
"""

from .client import HttpClient, HttpError, HttpResponse

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpResponse",
]
