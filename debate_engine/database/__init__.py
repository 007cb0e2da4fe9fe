"""Database management module."""

from .database import DatabaseManager

__all__ = ["DatabaseManager"]
