# Affinity scoring: how closely other users' and groups' tier rankings track a user's own

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from core.enums import CandidateKind, Tier

MAX_PROXIMITY = 6
DEFAULT_MIN_SHARED_GAMES = 3
DEFAULT_RESULT_LIMIT = 10


@dataclass(frozen=True)
class CandidateRanking:
    """One (owner, game, tier) row from somebody else's public tier list."""

    kind: CandidateKind
    owner_id: int
    owner_name: str | None
    game_id: int
    tier: Tier


@dataclass
class AffinityScore:
    kind: CandidateKind
    candidate_id: int
    name: str
    score: int = 0
    shared_games: int = 0

    @property
    def normalized_score(self) -> float:
        if not self.shared_games:
            return 0.0
        return self.score / self.shared_games

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "id": self.candidate_id,
            "name": self.name,
            "score": self.score,
            "sharedGames": self.shared_games,
            "normalizedScore": round(self.normalized_score, 2),
        }


@dataclass
class AffinityResult:
    users: list[AffinityScore] = field(default_factory=list)
    groups: list[AffinityScore] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "users": [s.to_dict() for s in self.users],
            "groups": [s.to_dict() for s in self.groups],
        }


def tier_proximity(own: Tier, other: Tier) -> int:
    """
    Score how close two tiers are.

    Args:
        own: Tier the querying user gave the game.
        other: Tier the candidate gave the same game.

    Returns:
        6 for an exact match, one less per step apart (S vs F is 1).
    """
    return MAX_PROXIMITY - abs(own.ordinal - other.ordinal)


def _ranking_key(score: AffinityScore) -> tuple:
    # Normalized score first; the rest only breaks ties deterministically
    return (
        -score.normalized_score,
        -score.shared_games,
        -score.score,
        score.kind != CandidateKind.USER,
        score.candidate_id,
    )


def collapse_rankings(rankings: Iterable[CandidateRanking]) -> dict[tuple[CandidateKind, int], dict]:
    """
    Group candidate rows per owner, one tier per game.

    When an owner ranks the same game in several lists, the last row wins,
    so callers should feed rows oldest list first.
    """
    owners: dict[tuple[CandidateKind, int], dict] = {}
    for row in rankings:
        key = (row.kind, row.owner_id)
        entry = owners.get(key)
        if entry is None:
            entry = owners[key] = {"name": row.owner_name or "Unknown", "tiers": {}}
        entry["tiers"][row.game_id] = row.tier
    return owners


def score_candidates(
    owner_tiers: Mapping[int, Tier],
    rankings: Iterable[CandidateRanking],
    min_shared_games: int = DEFAULT_MIN_SHARED_GAMES,
    limit: int = DEFAULT_RESULT_LIMIT,
) -> AffinityResult:
    """
    Rank other users and groups by how closely their tiers agree with owner_tiers.

    For every game both sides ranked, the candidate earns tier_proximity()
    points. Candidates sharing fewer than min_shared_games games are dropped;
    the rest are ordered by points per shared game and cut to limit before
    being split into users and groups.

    Args:
        owner_tiers: game_id -> Tier for the querying user.
        rankings: Rows from other owners' public tier lists.
        min_shared_games: Minimum overlap for a candidate to count.
        limit: Maximum number of candidates across both lists.

    Returns:
        AffinityResult with users and groups in ranked order.
    """
    if not owner_tiers:
        return AffinityResult()

    scores: list[AffinityScore] = []
    for (kind, owner_id), entry in collapse_rankings(rankings).items():
        affinity = AffinityScore(kind=kind, candidate_id=owner_id, name=entry["name"])
        for game_id, tier in entry["tiers"].items():
            own = owner_tiers.get(game_id)
            if own is None:
                continue
            affinity.score += tier_proximity(own, tier)
            affinity.shared_games += 1
        if affinity.shared_games >= min_shared_games:
            scores.append(affinity)

    ranked = sorted(scores, key=_ranking_key)[:limit]

    return AffinityResult(
        users=[s for s in ranked if s.kind == CandidateKind.USER],
        groups=[s for s in ranked if s.kind == CandidateKind.GROUP],
    )
