"""Group and membership repository."""

from core.models import Group, GroupMember

from .base import BaseRepository


class GroupRepository(BaseRepository[Group]):
    """Repository for Group operations."""

    model = Group

    def get_membership(self, group_id: int, user_id: int) -> GroupMember | None:
        return (
            self.session.query(GroupMember)
            .filter(GroupMember.group_id == group_id, GroupMember.user_id == user_id)
            .first()
        )

    def is_member(self, group_id: int, user_id: int) -> bool:
        return self.get_membership(group_id, user_id) is not None
