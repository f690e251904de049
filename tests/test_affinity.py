import pytest

from core.enums import CandidateKind, Tier
from core.scoring import (
    AffinityScore,
    CandidateRanking,
    collapse_rankings,
    score_candidates,
    tier_proximity,
)

USER = CandidateKind.USER
GROUP = CandidateKind.GROUP


def rankings_for(kind, owner_id, name, tiers):
    return [CandidateRanking(kind, owner_id, name, game_id, Tier(label)) for game_id, label in tiers.items()]


@pytest.mark.parametrize(
    "own, other, expected",
    [
        (Tier.S, Tier.S, 6),
        (Tier.A, Tier.S, 5),
        (Tier.B, Tier.F, 3),
        (Tier.S, Tier.F, 1),
        (Tier.F, Tier.S, 1),
    ],
)
def test_tier_proximity(own, other, expected):
    assert tier_proximity(own, other) == expected


def test_parse_rejects_unknown_tier():
    with pytest.raises(ValueError, match="Invalid tier"):
        Tier.parse("E")


def test_score_matches_worked_example():
    owner = {1: Tier.S, 2: Tier.A, 3: Tier.B}
    rows = rankings_for(USER, 7, "Sam", {1: "S", 2: "S", 3: "F"})

    result = score_candidates(owner, rows)

    assert len(result.users) == 1
    match = result.users[0]
    assert match.score == 14
    assert match.shared_games == 3
    assert match.normalized_score == pytest.approx(14 / 3)
    assert match.to_dict() == {
        "type": "user",
        "id": 7,
        "name": "Sam",
        "score": 14,
        "sharedGames": 3,
        "normalizedScore": 4.67,
    }


def test_candidates_below_shared_threshold_are_dropped():
    owner = {1: Tier.S, 2: Tier.A, 3: Tier.B}
    rows = rankings_for(USER, 7, "Two", {1: "S", 2: "A", 99: "S"})

    result = score_candidates(owner, rows)

    assert result.users == []
    assert result.groups == []


def test_empty_owner_rankings_return_empty_result():
    rows = rankings_for(USER, 7, "Sam", {1: "S", 2: "S", 3: "S"})

    result = score_candidates({}, rows)

    assert result.to_dict() == {"users": [], "groups": []}


def test_ordering_by_normalized_score():
    owner = {1: Tier.S, 2: Tier.S, 3: Tier.S, 4: Tier.S}
    rows = (
        rankings_for(USER, 1, "Far", {1: "F", 2: "F", 3: "F"})
        + rankings_for(USER, 2, "Close", {1: "S", 2: "S", 3: "A"})
        # More raw points, but a lower average
        + rankings_for(USER, 3, "Many", {1: "B", 2: "B", 3: "B", 4: "B"})
    )

    result = score_candidates(owner, rows)

    assert [s.name for s in result.users] == ["Close", "Many", "Far"]


def test_ties_prefer_more_shared_games_then_users_then_lower_id():
    owner = {g: Tier.S for g in range(1, 6)}
    rows = (
        rankings_for(GROUP, 1, "Group three", {1: "S", 2: "S", 3: "S"})
        + rankings_for(USER, 9, "User three", {1: "S", 2: "S", 3: "S"})
        + rankings_for(USER, 4, "User three low id", {1: "S", 2: "S", 3: "S"})
        + rankings_for(USER, 5, "User four", {1: "S", 2: "S", 3: "S", 4: "S"})
    )

    result = score_candidates(owner, rows, limit=4)

    assert [s.name for s in result.users] == ["User four", "User three low id", "User three"]
    assert [s.name for s in result.groups] == ["Group three"]


def test_limit_applies_before_partition():
    owner = {1: Tier.S, 2: Tier.S, 3: Tier.S}
    rows = []
    for user_id in range(1, 9):
        rows += rankings_for(USER, user_id, f"user{user_id}", {1: "S", 2: "S", 3: "S"})
    for group_id in range(1, 5):
        rows += rankings_for(GROUP, group_id, f"group{group_id}", {1: "A", 2: "A", 3: "A"})

    result = score_candidates(owner, rows, limit=10)

    assert len(result.users) == 8
    assert [s.name for s in result.groups] == ["group1", "group2"]


def test_same_id_for_user_and_group_are_distinct_candidates():
    owner = {1: Tier.S, 2: Tier.S, 3: Tier.S}
    rows = rankings_for(USER, 1, "Alex", {1: "S", 2: "S", 3: "S"}) + rankings_for(
        GROUP, 1, "Alex's crew", {1: "F", 2: "F", 3: "F"}
    )

    result = score_candidates(owner, rows)

    assert [(s.kind, s.candidate_id, s.score) for s in result.users] == [(USER, 1, 18)]
    assert [(s.kind, s.candidate_id, s.score) for s in result.groups] == [(GROUP, 1, 3)]


def test_collapse_keeps_last_tier_and_fills_missing_name():
    rows = [
        CandidateRanking(USER, 3, None, 1, Tier.F),
        CandidateRanking(USER, 3, None, 1, Tier.S),
        CandidateRanking(USER, 3, None, 2, Tier.B),
    ]

    collapsed = collapse_rankings(rows)

    assert collapsed == {(USER, 3): {"name": "Unknown", "tiers": {1: Tier.S, 2: Tier.B}}}


def test_duplicate_rows_count_a_game_once():
    owner = {1: Tier.S, 2: Tier.S, 3: Tier.S}
    rows = rankings_for(USER, 2, "Dup", {1: "F", 2: "S", 3: "S"}) + [
        CandidateRanking(USER, 2, "Dup", 1, Tier.S)
    ]

    result = score_candidates(owner, rows)

    assert result.users[0].shared_games == 3
    assert result.users[0].score == 18


def test_normalized_score_without_shared_games_is_zero():
    assert AffinityScore(kind=USER, candidate_id=1, name="x").normalized_score == 0.0
