"""Route modules for FastAPI application."""
from . import predict, status

__all__ = ["predict", "status"]
