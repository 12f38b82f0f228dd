"""
CarLookup Backend: User Repository
===================================

Login lookups only. Roles are loaded eagerly because the token carries one
claim per role and the session may be gone by the time claims are built.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from carlookup.models.user import User, UserRole


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_username(self, username: str) -> Optional[User]:
        """Active user with roles loaded, or None when missing or inactive."""
        stmt = (
            select(User)
            .where(User.username == username, User.is_active.is_(True))
            .options(selectinload(User.user_roles).selectinload(UserRole.role))
        )
        return await self.session.scalar(stmt)
