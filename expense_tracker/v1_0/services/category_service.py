import uuid
from typing import List
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.logger import logger
from expense_tracker.utils.tx import maybe_begin
from expense_tracker.v1_0.entities import (
    CategoryDTO,
    CategoryListDTO,
    CategoryCreatedDTO,
    CategorySeedDTO,
)
from expense_tracker.v1_0.models import Category
from expense_tracker.v1_0.repositories import CategoryRepository
from expense_tracker.v1_0.schemas import CategoryCreate

DUPLICATE_NAME = "A category with this name already exists"

DEFAULT_CATEGORIES: List[CategoryCreate] = [
    CategoryCreate(name="Food & Dining", color="#FF6B6B", icon="🍽️"),
    CategoryCreate(name="Transportation", color="#4ECDC4", icon="🚗"),
    CategoryCreate(name="Shopping", color="#45B7D1", icon="🛍️"),
    CategoryCreate(name="Entertainment", color="#FFA07A", icon="🎬"),
    CategoryCreate(name="Bills & Utilities", color="#98D8C8", icon="💡"),
    CategoryCreate(name="Healthcare", color="#F7DC6F", icon="⚕️"),
    CategoryCreate(name="Travel", color="#BB8FCE", icon="✈️"),
    CategoryCreate(name="Education", color="#85C1E2", icon="📚"),
    CategoryCreate(name="Personal Care", color="#F8B500", icon="💅"),
    CategoryCreate(name="Other", color="#95A5A6", icon="📌"),
]


def to_category_dto(c: Category) -> CategoryDTO:
    return CategoryDTO(
        id=c.id,
        user_id=c.user_id,
        name=c.name,
        color=c.color,
        icon=c.icon,
        created_at=c.created_at,
    )


class CategoryService:
    """Per-user expense categories."""

    def __init__(self, category_repository: CategoryRepository) -> None:
        self.repo = category_repository

    async def _require(self, user_id: str, category_id: uuid.UUID, db: AsyncSession) -> Category:
        """Fetch the caller's category or raise 404.

        Args:
            user_id: Owner of the category.
            category_id: Category ID.
            db: Active async DB session.

        Returns:
            ORM category row.

        Raises:
            HTTPException: 404 if not found or owned by another user.
        """
        cat = await self.repo.get_for_user(category_id, user_id, db)
        if not cat:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Category not found"
            )
        return cat

    async def create(self, user_id: str, payload: CategoryCreate, db: AsyncSession) -> CategoryCreatedDTO:
        """Create a category for the caller.

        The unique index on (user_id, lower(name)) makes the duplicate check
        part of the insert itself.

        Args:
            user_id: Owner of the new category.
            payload: Category data; color and icon fall back to defaults.
            db: Active async DB session.

        Returns:
            CategoryCreatedDTO.

        Raises:
            HTTPException: 409 on a case-insensitive duplicate name, 500 on failure.
        """
        logger.info("[CategoryService] Creating category user=%s name=%s", user_id, payload.name)
        try:
            async with maybe_begin(db):
                c = await self.repo.create_category(user_id, payload, db)
                dto = to_category_dto(c)
        except IntegrityError:
            logger.info("[CategoryService] Duplicate name user=%s name=%s", user_id, payload.name)
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_NAME)
        except Exception as e:
            logger.error("[CategoryService] Create failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to create category")
        logger.info("[CategoryService] Created ID=%s", dto.id)
        return CategoryCreatedDTO(message="Category created successfully", category=dto)

    async def get(self, user_id: str, category_id: uuid.UUID, db: AsyncSession) -> CategoryDTO:
        logger.debug("[CategoryService] Get ID=%s", category_id)
        try:
            async with maybe_begin(db):
                c = await self._require(user_id, category_id, db)
            return to_category_dto(c)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(
                "[CategoryService] Get failed ID=%s: %s", category_id, e, exc_info=True
            )
            raise HTTPException(status_code=500, detail="Failed to fetch category")

    async def list_all(self, user_id: str, db: AsyncSession) -> CategoryListDTO:
        """List the caller's categories, newest first.

        Raises:
            HTTPException: 500 on failure.
        """
        logger.debug("[CategoryService] List user=%s", user_id)
        try:
            async with maybe_begin(db):
                rows = await self.repo.list_for_user(user_id, db)
            items = [to_category_dto(c) for c in rows]
            return CategoryListDTO(categories=items, count=len(items))
        except Exception as e:
            logger.error("[CategoryService] List failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to fetch categories")

    async def seed_defaults(self, user_id: str, db: AsyncSession) -> CategorySeedDTO:
        """Insert the default category set, skipping names the user already has.

        Raises:
            HTTPException: 409 if a concurrent insert took one of the names, 500 on failure.
        """
        logger.info("[CategoryService] Seeding defaults user=%s", user_id)
        try:
            async with maybe_begin(db):
                existing = await self.repo.names_for_user(user_id, db)
                missing = [c for c in DEFAULT_CATEGORIES if c.name.lower() not in existing]
                created = await self.repo.create_many(user_id, missing, db)
                items = [to_category_dto(c) for c in created]
        except IntegrityError:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_NAME)
        except Exception as e:
            logger.error("[CategoryService] Seed failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to seed categories")
        logger.info("[CategoryService] Seeded %s categories user=%s", len(items), user_id)
        return CategorySeedDTO(
            message=f"Created {len(items)} categories",
            categories=items,
            created=len(items),
        )
