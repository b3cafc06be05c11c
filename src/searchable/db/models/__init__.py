"""Database models for Searchable."""

from .base import Base

__all__ = ["Base"]
