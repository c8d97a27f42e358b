import math
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.logger import logger
from expense_tracker.utils.dates import parse_range_bound
from expense_tracker.utils.periods import INVALID_PERIOD_MESSAGE, resolve_period
from expense_tracker.utils.tx import maybe_begin
from expense_tracker.v1_0.entities import (
    AnalyticsDTO,
    CategoryBreakdownDTO,
    DateRangeDTO,
    MonthEntryDTO,
    MonthlyReportDTO,
    OverallStatsDTO,
    RecentExpensesDTO,
)
from expense_tracker.v1_0.repositories import ExpenseRepository
from .expense_service import to_expense_dto

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def _money(raw: Any) -> Decimal:
    if raw is None:
        return Decimal("0")
    return Decimal(str(raw)).quantize(Decimal("0.01"))


def _as_float(raw: Any) -> float:
    return float(_money(raw))


def share_percentage(total: float, overall_total: float) -> float:
    """Share of the overall total in percent, one decimal, halves rounded up; 0 when overall is 0."""
    if overall_total <= 0:
        return 0.0
    return math.floor(total / overall_total * 1000 + 0.5) / 10


class AnalyticsService:
    """
    Aggregates over the caller's expenses: totals, per-category breakdown,
    calendar-month report and named relative windows.
    """

    def __init__(self, expense_repository: ExpenseRepository) -> None:
        self.expense_repo = expense_repository

    async def summary(
        self,
        user_id: str,
        db: AsyncSession,
        *,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> AnalyticsDTO:
        try:
            start = parse_range_bound(start_date)
            end = parse_range_bound(end_date, end=True)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="startDate and endDate must be ISO dates",
            )
        if start and end and start > end:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="startDate must be before endDate",
            )

        try:
            async with maybe_begin(db):
                overall = await self.expense_repo.overall_stats(
                    session=db, user_id=user_id, start=start, end=end
                )
                groups = await self.expense_repo.stats_by_category(
                    session=db, user_id=user_id, start=start, end=end
                )
        except Exception as e:
            logger.error("[AnalyticsService] summary failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to calculate analytics")

        overall_total = _as_float(overall["total"])
        breakdown = [
            CategoryBreakdownDTO(
                category_id=g["category_id"],
                category_name=g["category_name"],
                category_color=g["category_color"],
                category_icon=g["category_icon"],
                total=_as_float(g["total"]),
                count=int(g["count"] or 0),
                average=_as_float(g["average"]),
                percentage=share_percentage(_as_float(g["total"]), overall_total),
            )
            for g in groups
        ]
        breakdown.sort(key=lambda b: b.total, reverse=True)

        return AnalyticsDTO(
            overall=OverallStatsDTO(
                total=overall_total,
                count=int(overall["count"] or 0),
                average=_as_float(overall["average"]),
                highest=_as_float(overall["highest"]),
                lowest=_as_float(overall["lowest"]),
            ),
            by_category=breakdown,
            date_range=DateRangeDTO(start_date=start_date, end_date=end_date),
        )

    async def monthly_report(
        self,
        user_id: str,
        year: int,
        db: AsyncSession,
    ) -> MonthlyReportDTO:
        """Twelve calendar-month buckets for ``year``; empty months are zero-filled."""
        try:
            async with maybe_begin(db):
                rows = await self.expense_repo.stats_by_month(
                    session=db, user_id=user_id, year=year
                )
        except Exception as e:
            logger.error("[AnalyticsService] monthly report failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to generate monthly report")

        by_month = {r["month"]: r for r in rows}
        year_total = Decimal("0")
        months = []
        for idx, name in enumerate(MONTH_NAMES, start=1):
            r = by_month.get(idx)
            total = _money(r["total"]) if r else Decimal("0")
            year_total += total
            months.append(
                MonthEntryDTO(
                    month=idx,
                    month_name=name,
                    total=float(total),
                    count=r["count"] if r else 0,
                    average=_as_float(r["average"]) if r else 0.0,
                )
            )

        return MonthlyReportDTO(year=year, year_total=float(year_total), months=months)

    async def recent(
        self,
        user_id: str,
        period: str,
        db: AsyncSession,
        *,
        now: Optional[datetime] = None,
    ) -> RecentExpensesDTO:
        window = resolve_period(period, now=now)
        if window is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=INVALID_PERIOD_MESSAGE,
            )

        try:
            async with maybe_begin(db):
                items = await self.expense_repo.list_between(
                    session=db, user_id=user_id, start=window.start, end=window.end
                )
                rows = [to_expense_dto(e) for e in items]
        except Exception as e:
            logger.error("[AnalyticsService] recent failed period=%s: %s", period, e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to fetch expenses")

        return RecentExpensesDTO(
            expenses=rows,
            count=len(rows),
            period=window.period,
            date_range=DateRangeDTO(
                start_date=window.start.isoformat(),
                end_date=window.end.isoformat(),
            ),
        )
