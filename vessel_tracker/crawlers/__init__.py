"""HTTP transport for the AIS provider.

Public API is exported from this file only.
"""

from .http_client import (
    HttpResponse,
    SharedHttpClient,
    get_shared_http_client,
    shutdown_shared_http_client,
)

__all__ = [
    "HttpResponse",
    "SharedHttpClient",
    "get_shared_http_client",
    "shutdown_shared_http_client",
]
