import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select, func, extract
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.elements import ColumnElement

from expense_tracker.v1_0.models import Category, Expense
from expense_tracker.v1_0.schemas import ExpenseCreate, ExpenseFilters
from .base_repository import BaseRepository

WhereExpr = ColumnElement[bool]

class ExpenseRepository(BaseRepository[Expense]):
    def __init__(self) -> None:
        super().__init__(Expense)

    @staticmethod
    def _date_range(
        user_id: str,
        start: Optional[datetime],
        end: Optional[datetime],
    ) -> List[WhereExpr]:
        conds: List[WhereExpr] = [Expense.user_id == user_id]
        if start is not None:
            conds.append(Expense.date >= start)
        if end is not None:
            conds.append(Expense.date <= end)
        return conds

    def _filters(self, user_id: str, filters: ExpenseFilters) -> List[WhereExpr]:
        conds = self._date_range(user_id, filters.start, filters.end)
        if filters.category_ids:
            conds.append(Expense.category_id.in_(filters.category_ids))
        if filters.min_amount is not None:
            conds.append(Expense.amount >= filters.min_amount)
        if filters.max_amount is not None:
            conds.append(Expense.amount <= filters.max_amount)
        return conds

    async def create_expense(
        self,
        user_id: str,
        payload: ExpenseCreate,
        session: AsyncSession
    ) -> Expense:
        """
        Create an expense from input schema and flush to assign PK.
        """
        entity = Expense(
            user_id=user_id,
            category_id=payload.category_id,
            amount=payload.amount,
            description=payload.description,
            date=payload.date,
            receipt_url=payload.receipt_url,
        )
        await self.add(entity, session)
        return entity

    async def get_for_user(
        self,
        expense_id: uuid.UUID,
        user_id: str,
        session: AsyncSession
    ) -> Optional[Expense]:
        return await self.get_owned(
            expense_id,
            user_id,
            session,
            options=(selectinload(Expense.category),),
        )

    async def list_filtered(
        self,
        *,
        session: AsyncSession,
        user_id: str,
        filters: ExpenseFilters,
        offset: int,
        limit: int,
    ) -> Tuple[List[Expense], int]:
        """One page of the user's expenses, newest first, plus the total match count."""
        conds = self._filters(user_id, filters)

        total = int(
            await session.scalar(
                select(func.count(Expense.id)).where(*conds)
            ) or 0
        )

        stmt = (
            select(Expense)
            .options(selectinload(Expense.category))
            .where(*conds)
            .order_by(Expense.date.desc(), Expense.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        items = list((await session.execute(stmt)).scalars().all())
        return items, total

    async def list_between(
        self,
        *,
        session: AsyncSession,
        user_id: str,
        start: datetime,
        end: datetime,
    ) -> List[Expense]:
        stmt = (
            select(Expense)
            .options(selectinload(Expense.category))
            .where(*self._date_range(user_id, start, end))
            .order_by(Expense.date.desc(), Expense.created_at.desc())
        )
        return list((await session.execute(stmt)).scalars().all())

    async def overall_stats(
        self,
        *,
        session: AsyncSession,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        SUM/COUNT/AVG/MAX/MIN of amount in one round trip.
        Returns: { "total", "count", "average", "highest", "lowest" } (aggregates None when no rows)
        """
        stmt = select(
            func.sum(Expense.amount).label("total"),
            func.count(Expense.id).label("count"),
            func.avg(Expense.amount).label("average"),
            func.max(Expense.amount).label("highest"),
            func.min(Expense.amount).label("lowest"),
        ).where(*self._date_range(user_id, start, end))
        row = (await session.execute(stmt)).mappings().one()
        return dict(row)

    async def stats_by_category(
        self,
        *,
        session: AsyncSession,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """
        Per-category SUM/COUNT/AVG joined with the category's display fields.
        Returns: [{ "category_id", "category_name", "category_color", "category_icon", "total", "count", "average" }, ...]
        """
        stmt = (
            select(
                Expense.category_id.label("category_id"),
                Category.name.label("category_name"),
                Category.color.label("category_color"),
                Category.icon.label("category_icon"),
                func.sum(Expense.amount).label("total"),
                func.count(Expense.id).label("count"),
                func.avg(Expense.amount).label("average"),
            )
            .select_from(Expense)
            .outerjoin(Category, Expense.category_id == Category.id)
            .where(*self._date_range(user_id, start, end))
            .group_by(Expense.category_id, Category.name, Category.color, Category.icon)
        )
        rows = (await session.execute(stmt)).mappings().all()
        return [dict(r) for r in rows]

    async def stats_by_month(
        self,
        *,
        session: AsyncSession,
        user_id: str,
        year: int,
    ) -> List[Dict[str, Any]]:
        """
        Calendar-month buckets of the stored expense date for one year.
        Returns: [{ "month": 1..12, "total", "count", "average" }, ...] (months with rows only)
        """
        month_col = extract("month", Expense.date)
        stmt = (
            select(
                month_col.label("month"),
                func.sum(Expense.amount).label("total"),
                func.count(Expense.id).label("count"),
                func.avg(Expense.amount).label("average"),
            )
            .where(Expense.user_id == user_id)
            .where(extract("year", Expense.date) == year)
            .group_by(month_col)
            .order_by(month_col)
        )
        rows = (await session.execute(stmt)).mappings().all()
        return [
            {
                "month": int(r["month"]),
                "total": r["total"],
                "count": int(r["count"] or 0),
                "average": r["average"],
            }
            for r in rows
        ]
