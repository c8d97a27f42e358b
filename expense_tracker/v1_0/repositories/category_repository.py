import uuid
from typing import Iterable, List, Optional, Set
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.v1_0.models import Category
from expense_tracker.v1_0.models.category import DEFAULT_COLOR, DEFAULT_ICON
from expense_tracker.v1_0.schemas import CategoryCreate
from .base_repository import BaseRepository

class CategoryRepository(BaseRepository[Category]):
    def __init__(self):
        super().__init__(Category)

    async def create_category(
        self,
        user_id: str,
        payload: CategoryCreate,
        session: AsyncSession
    ) -> Category:
        """
        Insert a category for the user and flush to assign PK.
        A case-insensitive duplicate name raises IntegrityError.
        """
        category = Category(
            user_id=user_id,
            name=payload.name,
            color=payload.color or DEFAULT_COLOR,
            icon=payload.icon or DEFAULT_ICON,
        )
        await self.add(category, session)
        return category

    async def get_for_user(
        self,
        category_id: uuid.UUID,
        user_id: str,
        session: AsyncSession
    ) -> Optional[Category]:
        return await self.get_owned(category_id, user_id, session)

    async def list_for_user(
        self,
        user_id: str,
        session: AsyncSession
    ) -> List[Category]:
        return await self.list_owned(
            user_id,
            session,
            order_by=(Category.created_at.desc()),
        )

    async def names_for_user(
        self,
        user_id: str,
        session: AsyncSession
    ) -> Set[str]:
        """Lower-cased names the user already has."""
        rows = await session.execute(
            select(func.lower(Category.name)).where(Category.user_id == user_id)
        )
        return {r[0] for r in rows.all()}

    async def create_many(
        self,
        user_id: str,
        payloads: Iterable[CategoryCreate],
        session: AsyncSession
    ) -> List[Category]:
        items = [
            Category(
                user_id=user_id,
                name=p.name,
                color=p.color or DEFAULT_COLOR,
                icon=p.icon or DEFAULT_ICON,
            )
            for p in payloads
        ]
        if not items:
            return []
        return await self.add_many(items, session)
