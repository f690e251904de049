"""
Business logic services.

Services sit between repositories and the API layer and never raise
HTTP errors themselves.
"""

from .affinity_service import AffinityService

__all__ = ["AffinityService"]
