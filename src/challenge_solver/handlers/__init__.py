"""Handler layer for HTTP endpoints.

Handlers hold the HTTP-specific logic behind the FastAPI routes.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .relay_handler import RELAY_ERROR_MESSAGE, RelayHandler

__all__ = [
    "RELAY_ERROR_MESSAGE",
    "RelayHandler",
]
