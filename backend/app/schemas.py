"""
Pydantic schemas for request validation.

Request bodies use the camelCase keys the web client sends. Tier and status
labels are accepted as plain strings and checked by the services, which
answer 400 for unknown values.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TierListCreateRequest(_CamelModel):
    name: str | None = None
    description: str | None = None
    is_public: bool = Field(default=False, alias="isPublic")
    group_id: int | None = Field(default=None, alias="groupId")


class TierListUpdateRequest(_CamelModel):
    name: str | None = None
    description: str | None = None
    is_public: bool | None = Field(default=None, alias="isPublic")
    categories: list[str] | None = None
    platforms: list[str] | None = None
    game_modes: list[str] | None = Field(default=None, alias="gameModes")


class TierListGameAddRequest(_CamelModel):
    game_id: int | None = Field(default=None, alias="gameId")
    tier: str | None = None


class TierListGameMove(_CamelModel):
    game_id: int | None = Field(default=None, alias="gameId")
    tier: str | None = None
    position: int | None = None


class TierListGamesUpdateRequest(_CamelModel):
    updates: list[TierListGameMove] | None = None


class ListEntryCreateRequest(_CamelModel):
    game_id: int | None = Field(default=None, alias="gameId")
    status: str | None = None
    platform: str | None = None
    rating: int | None = Field(default=None, ge=1, le=10)
    notes: str | None = None
    group_id: int | None = Field(default=None, alias="groupId")


class ListEntryUpdateRequest(_CamelModel):
    """Only the keys present in the body are applied."""

    status: str | None = None
    platform: str | None = None
    rating: int | None = Field(default=None, ge=1, le=10)
    notes: str | None = None
    started_at: datetime | None = Field(default=None, alias="startedAt")
    finished_at: datetime | None = Field(default=None, alias="finishedAt")


class CacheClearRequest(BaseModel):
    key: str | None = None
    pattern: str | None = None
