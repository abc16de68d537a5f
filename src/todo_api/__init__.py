"""
Minimal in-memory Todo API built on FastAPI.

Use create_app() to build an application with explicit dependencies, or
serve the ready-made instance at todo_api.main:app.
"""

from .main import create_app

__all__ = ["create_app"]
