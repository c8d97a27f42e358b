import uuid
from typing import Any, Dict

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.logger import logger
from expense_tracker.utils.tx import maybe_begin
from expense_tracker.v1_0.entities import (
    ExpenseCategoryRefDTO,
    ExpenseDTO,
    ExpenseMessageDTO,
    ExpensePageDTO,
    build_pagination,
    page_offset,
)
from expense_tracker.v1_0.models import Category, Expense
from expense_tracker.v1_0.models.base import utcnow
from expense_tracker.v1_0.repositories import CategoryRepository, ExpenseRepository
from expense_tracker.v1_0.schemas import ExpenseCreate, ExpenseFilters, ExpenseUpdate

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 20


def to_expense_dto(e: Expense, category: Category | None = None) -> ExpenseDTO:
    cat = category if category is not None else e.category
    return ExpenseDTO(
        id=e.id,
        user_id=e.user_id,
        category_id=e.category_id,
        amount=e.amount,
        description=e.description,
        date=e.date,
        receipt_url=e.receipt_url,
        created_at=e.created_at,
        updated_at=e.updated_at,
        category=(
            ExpenseCategoryRefDTO(id=cat.id, name=cat.name, color=cat.color, icon=cat.icon)
            if cat is not None
            else None
        ),
    )


class ExpenseService:
    def __init__(
        self,
        expense_repository: ExpenseRepository,
        category_repository: CategoryRepository,
    ) -> None:
        self.expense_repo = expense_repository
        self.category_repo = category_repository

    async def _require(
        self,
        user_id: str,
        expense_id: uuid.UUID,
        db: AsyncSession,
    ) -> Expense:
        """
        Ensure the caller owns the expense or raise an HTTP 404 error.

        Rows owned by other users are reported exactly like missing rows.

        Raises:
            HTTPException: If the expense does not exist for this user.
        """
        e = await self.expense_repo.get_for_user(expense_id, user_id, db)
        if not e:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Expense not found",
            )
        return e

    async def _require_category(
        self,
        user_id: str,
        category_id: uuid.UUID,
        db: AsyncSession,
    ) -> Category:
        cat = await self.category_repo.get_for_user(category_id, user_id, db)
        if not cat:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Category not found",
            )
        return cat

    async def create(
        self,
        user_id: str,
        payload: ExpenseCreate,
        db: AsyncSession,
    ) -> ExpenseMessageDTO:
        """
        Create a new expense for the caller.

        Operations:
        - Validate the category belongs to the caller.
        - Insert the expense.

        Args:
            user_id: Owner of the expense.
            payload: ExpenseCreate data (amount, categoryId and date are required).
            db: Active async database session.

        Returns:
            ExpenseMessageDTO wrapping the created expense.

        Raises:
            HTTPException:
                - 404 if the category is missing or owned by another user.
                - 500 if creation fails.
        """
        logger.info(
            "[ExpenseService] Creating expense user=%s: %s",
            user_id,
            payload.model_dump(),
        )
        try:
            async with maybe_begin(db):
                cat = await self._require_category(user_id, payload.category_id, db)
                exp = await self.expense_repo.create_expense(user_id, payload, db)
                dto = to_expense_dto(exp, cat)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(
                "[ExpenseService] Create failed: %s",
                e,
                exc_info=True,
            )
            raise HTTPException(
                status_code=500,
                detail="Failed to create expense",
            )

        logger.info("[ExpenseService] Expense created ID=%s", dto.id)
        return ExpenseMessageDTO(message="Expense created successfully", expense=dto)

    async def get(
        self,
        user_id: str,
        expense_id: uuid.UUID,
        db: AsyncSession,
    ) -> ExpenseDTO:
        try:
            async with maybe_begin(db):
                exp = await self._require(user_id, expense_id, db)
                return to_expense_dto(exp)
        except HTTPException:
            raise
        except Exception as e:
            logger.error("[ExpenseService] Get failed ID=%s: %s", expense_id, e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to fetch expense")

    async def update(
        self,
        user_id: str,
        expense_id: uuid.UUID,
        payload: ExpenseUpdate,
        db: AsyncSession,
    ) -> ExpenseMessageDTO:
        """
        Apply a partial update to one of the caller's expenses.

        Fields absent from the request body are left untouched; ``updated_at``
        is refreshed on every call.

        Raises:
            HTTPException:
                - 404 if the expense (or a newly referenced category) is not the caller's.
                - 500 if the update fails.
        """
        data: Dict[str, Any] = payload.model_dump(exclude_unset=True)
        logger.info("[ExpenseService] Update ID=%s fields=%s", expense_id, sorted(data))

        try:
            async with maybe_begin(db):
                exp = await self._require(user_id, expense_id, db)
                new_category_id = data.pop("category_id", None)
                if new_category_id is not None:
                    data["category"] = await self._require_category(user_id, new_category_id, db)
                data["updated_at"] = utcnow()
                await self.expense_repo.update_fields(
                    exp,
                    data,
                    db,
                    deny={"id", "user_id", "created_at"},
                )
                dto = to_expense_dto(exp)
        except HTTPException:
            raise
        except Exception as e:
            logger.error("[ExpenseService] Update failed ID=%s: %s", expense_id, e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to update expense")

        return ExpenseMessageDTO(message="Expense updated successfully", expense=dto)

    async def delete(
        self,
        user_id: str,
        expense_id: uuid.UUID,
        db: AsyncSession,
    ) -> ExpenseMessageDTO:
        """
        Delete one of the caller's expenses.

        Returns:
            ExpenseMessageDTO with the deleted row.

        Raises:
            HTTPException: 404 if not the caller's, 500 if the delete fails.
        """
        logger.warning("[ExpenseService] Delete ID=%s user=%s", expense_id, user_id)
        try:
            async with maybe_begin(db):
                exp = await self._require(user_id, expense_id, db)
                dto = to_expense_dto(exp)
                await self.expense_repo.delete(exp, db)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(
                "[ExpenseService] Delete failed ID=%s: %s",
                expense_id,
                e,
                exc_info=True,
            )
            raise HTTPException(
                status_code=500,
                detail="Failed to delete expense",
            )

        return ExpenseMessageDTO(message="Expense deleted successfully", expense=dto)

    async def list_filtered(
        self,
        user_id: str,
        filters: ExpenseFilters,
        page: int,
        page_size: int,
        db: AsyncSession,
    ) -> ExpensePageDTO:
        """
        List the caller's expenses with filters, newest first, one page at a time.

        Args:
            user_id: Owner of the rows.
            filters: Optional date range, category set and amount range.
            page: Page number to retrieve (1-based).
            page_size: Items per page, 1..100.
            db: Active async database session.

        Returns:
            ExpensePageDTO containing:
                - expenses: rows of this page with their category.
                - pagination: page, pageSize, totalCount, totalPages,
                  hasNextPage, hasPreviousPage.

        Raises:
            HTTPException: 400 for an out-of-range page or page size, 500 on failure.
        """
        if page < 1:
            raise HTTPException(status_code=400, detail="page must be >= 1")
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise HTTPException(
                status_code=400,
                detail=f"pageSize must be between 1 and {MAX_PAGE_SIZE}",
            )

        try:
            async with maybe_begin(db):
                items, total = await self.expense_repo.list_filtered(
                    session=db,
                    user_id=user_id,
                    filters=filters,
                    offset=page_offset(page, page_size),
                    limit=page_size,
                )
                rows = [to_expense_dto(e) for e in items]
        except Exception as e:
            logger.error("[ExpenseService] List failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to fetch expenses")

        return ExpensePageDTO(
            expenses=rows,
            pagination=build_pagination(page, page_size, total),
        )
