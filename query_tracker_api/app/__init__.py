"""
Application package initializer.

The project is organised into logical pieces: ``core`` holds
configuration, logging, error types and the SQLite query store;
``schemas`` holds the pydantic request/response models; ``services``
holds business rules; ``api`` holds the FastAPI routers.
"""

from .main import app  # noqa: F401
