"""
Scoring: tier-list affinity between rankers and content similarity between games.
"""

from .affinity import (
    AffinityResult,
    AffinityScore,
    CandidateRanking,
    collapse_rankings,
    score_candidates,
    tier_proximity,
)
from .similar_games import find_similar_games

__all__ = [
    "AffinityResult",
    "AffinityScore",
    "CandidateRanking",
    "collapse_rankings",
    "score_candidates",
    "tier_proximity",
    "find_similar_games",
]
