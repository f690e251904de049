"""
Backend services for NextUp.

These translate domain results into API payloads and raise HTTPException
for client errors.
"""

from . import game_service, list_service, tier_list_service

__all__ = ["game_service", "list_service", "tier_list_service"]
