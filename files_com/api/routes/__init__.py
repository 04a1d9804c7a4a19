"""API routes module."""

from .files import FilesController, HealthController

__all__ = [
    "FilesController",
    "HealthController",
]
