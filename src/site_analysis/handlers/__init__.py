"""Handler layer for HTTP endpoints.

This layer turns service results into HTTP responses.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .check_handler import CheckHandler

__all__ = [
    "CheckHandler",
]
