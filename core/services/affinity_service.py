"""
Affinity Service.

Finds the users and groups whose public tier lists agree most with a
user's own rankings.

Usage:
    from core.services import AffinityService
    from core.repositories import TierListRepository

    with db.session() as session:
        service = AffinityService(TierListRepository(session))
        result = service.find_similar(user_id)
"""

from core.config import Settings, get_settings
from core.enums import CandidateKind
from core.logging import get_logger, log_timing
from core.repositories import TierListRepository
from core.scoring import AffinityResult, CandidateRanking, score_candidates

logger = get_logger("affinity")


class AffinityService:
    def __init__(self, tier_list_repo: TierListRepository, settings: Settings | None = None):
        self.tier_list_repo = tier_list_repo
        self.settings = settings or get_settings()

    def owner_tiers(self, user_id: int) -> dict:
        # Rows come oldest list first, so the latest list's tier wins
        return dict(self.tier_list_repo.owner_rankings(user_id))

    def candidate_rankings(self, user_id: int) -> list[CandidateRanking]:
        rankings = []
        for owner_user_id, user_name, group_id, group_name, game_id, tier in (
            self.tier_list_repo.public_rankings(user_id)
        ):
            if owner_user_id is not None:
                rankings.append(
                    CandidateRanking(CandidateKind.USER, owner_user_id, user_name, game_id, tier)
                )
            elif group_id is not None:
                rankings.append(
                    CandidateRanking(CandidateKind.GROUP, group_id, group_name, game_id, tier)
                )
        return rankings

    @log_timing("affinity_scoring", logger=logger)
    def find_similar(self, user_id: int) -> AffinityResult:
        """
        Rank other users and groups by tier agreement with user_id.

        Returns an empty result when the user has not ranked anything.
        """
        owner_tiers = self.owner_tiers(user_id)
        if not owner_tiers:
            logger.info("affinity_skipped", user_id=user_id, reason="no_rankings")
            return AffinityResult()

        result = score_candidates(
            owner_tiers,
            self.candidate_rankings(user_id),
            min_shared_games=self.settings.affinity_min_shared_games,
            limit=self.settings.affinity_result_limit,
        )
        logger.info(
            "affinity_computed",
            user_id=user_id,
            ranked_games=len(owner_tiers),
            users=len(result.users),
            groups=len(result.groups),
        )
        return result
