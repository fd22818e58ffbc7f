"""Service layer for the setwise API."""

from .compare import CompareService

__all__ = ["CompareService"]
