"""
Application package initializer.

The API is organised by concern: ``core`` holds configuration,
logging, errors and the database handle; ``schemas`` the pydantic
models; ``services`` the lesson and order logic; ``api`` the FastAPI
routers.
"""

from .main import app  # noqa: F401
