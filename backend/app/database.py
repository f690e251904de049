"""
Database session dependency for the API.

Re-exports from core.db; initialization happens in main.py startup, not at
import time.
"""

from core.db import db, get_db

__all__ = ["db", "get_db"]
