"""
Declarative base shared by all NextUp models.
"""

from core.db import Base

__all__ = ["Base"]
