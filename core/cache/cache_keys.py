"""
Cache key management.

Keys are namespaced {domain}:{kind}:{id} so whole domains can be dropped
with one delete_pattern call.
"""


class CacheKeys:
    """
    Centralized cache key definitions.

    Examples:
        - game:search:zelda -> search results for "zelda"
        - game:detail:42 -> game 42's detail payload
        - game:similar:42 -> games similar to game 42
    """

    PREFIX_GAME = "game"

    @staticmethod
    def game_search(query: str) -> str:
        return f"game:search:{query.lower()}"

    @staticmethod
    def game_detail(game_id: int) -> str:
        return f"game:detail:{game_id}"

    @staticmethod
    def game_similar(game_id: int) -> str:
        return f"game:similar:{game_id}"

    # Pattern keys for bulk invalidation
    @staticmethod
    def game_pattern() -> str:
        """Pattern to match every game cache key."""
        return "game:*"
