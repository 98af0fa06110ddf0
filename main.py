"""HTTP Entry Point - Root Module.

Exposes the FastAPI application for an ASGI server, e.g.
`uvicorn main:app`.
"""

from api.main import app

__all__ = [
    "app",
]
