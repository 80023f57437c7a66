"""
Database Models

Shared declarative Base. Club table models live in features/club/models.py.
"""

from clubstats.models.base import Base

__all__ = ["Base"]
