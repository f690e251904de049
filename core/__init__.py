"""
NextUp Core Library.

Database management, models, repositories, the ephemeral cache and
tier-list affinity scoring shared by the API.

Usage:
    # Database
    from core.db import db, get_db
    from core.models import User, TierList, Game
    from core.repositories import TierListRepository

    # Cache
    from core.cache import CacheKeys, create_cache

    # Config
    from core.config import get_settings, Settings

    # Logging
    from core.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"

# Import from submodules directly:
#   from core.db import db
#   from core.config import get_settings
#   from core.logging import get_logger
