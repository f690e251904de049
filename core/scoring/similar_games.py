# Content-based "more like this" scoring over genres, themes and franchises

from collections.abc import Iterable
from typing import Any, Protocol

GENRE_WEIGHT = 3
THEME_WEIGHT = 2
FRANCHISE_WEIGHT = 5
DEFAULT_SIMILAR_LIMIT = 6


class _GameLike(Protocol):
    id: int
    name: str
    slug: str | None
    cover_url: str | None
    rating: float | None
    genres: list[str] | None
    themes: list[str] | None
    franchises: list[str] | None


def _shared(ours: list[str] | None, theirs: list[str] | None) -> list[str]:
    theirs_set = set(theirs or [])
    return [value for value in ours or [] if value in theirs_set]


def _match_reason(franchises: list[str], genres: list[str], themes: list[str]) -> str:
    if franchises:
        return f"Same series: {franchises[0]}"
    if genres:
        return f"Similar genre: {genres[0]}"
    if themes:
        return f"Similar theme: {themes[0]}"
    return "Related"


def find_similar_games(
    game: _GameLike, candidates: Iterable[_GameLike], limit: int = DEFAULT_SIMILAR_LIMIT
) -> list[dict[str, Any]]:
    """
    Score candidates against game and return the best matches as dicts.

    Franchise overlap weighs 5, genre 3, theme 2 per shared value. Games
    with no overlap are left out; equal scores keep candidate order.
    """
    scored = []
    for other in candidates:
        if other.id == game.id:
            continue
        genres = _shared(game.genres, other.genres)
        themes = _shared(game.themes, other.themes)
        franchises = _shared(game.franchises, other.franchises)
        score = (
            len(genres) * GENRE_WEIGHT
            + len(themes) * THEME_WEIGHT
            + len(franchises) * FRANCHISE_WEIGHT
        )
        if score > 0:
            scored.append((score, other, _match_reason(franchises, genres, themes)))

    scored.sort(key=lambda item: item[0], reverse=True)

    return [
        {
            "id": other.id,
            "name": other.name,
            "slug": other.slug,
            "coverUrl": other.cover_url,
            "rating": other.rating,
            "genres": other.genres or [],
            "score": score,
            "matchReason": reason,
        }
        for score, other, reason in scored[:limit]
    ]
