from datetime import datetime, timezone
from typing import Optional
from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from expense_tracker.core.security.deps import AuthUser, get_current_user
from expense_tracker.storage.database.db_connector import get_db
from expense_tracker.app_containers import ApplicationContainer
from expense_tracker.core.logger import logger

from expense_tracker.v1_0.entities import AnalyticsDTO, MonthlyReportDTO, RecentExpensesDTO
from expense_tracker.v1_0.services import AnalyticsService

# Mounted ahead of the expense router so these paths never reach "/expenses/{expense_id}".
router = APIRouter(prefix="/expenses", tags=["Analytics"])


def _current_year() -> int:
    return datetime.now(timezone.utc).year


@router.get(
    "/analytics",
    response_model=AnalyticsDTO,
    summary="Totals and per-category breakdown, optionally within a date range",
)
@inject
async def get_analytics(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
    service: AnalyticsService = Depends(
        Provide[ApplicationContainer.api_container.analytics_service]
    ),
):
    try:
        return await service.summary(
            user.user_id, db, start_date=start_date, end_date=end_date
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[AnalyticsRouter] analytics error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to calculate analytics")


@router.get(
    "/monthly-report",
    response_model=MonthlyReportDTO,
    summary="Twelve month totals for a calendar year",
)
@inject
async def get_monthly_report(
    year: Optional[int] = Query(None, ge=1900, le=9999, description="Defaults to the current year"),
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
    service: AnalyticsService = Depends(
        Provide[ApplicationContainer.api_container.analytics_service]
    ),
):
    target = year if year is not None else _current_year()
    logger.debug(f"[AnalyticsRouter] monthly report year={target}")
    try:
        return await service.monthly_report(user.user_id, target, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[AnalyticsRouter] monthly report error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to generate monthly report")


@router.get(
    "/recent",
    response_model=RecentExpensesDTO,
    summary="Expenses inside a named relative window",
)
@inject
async def get_recent_expenses(
    period: str = Query("thisMonth", description="today, yesterday, thisWeek, thisMonth, lastMonth, last30Days, last90Days, thisYear"),
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
    service: AnalyticsService = Depends(
        Provide[ApplicationContainer.api_container.analytics_service]
    ),
):
    try:
        return await service.recent(user.user_id, period, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[AnalyticsRouter] recent error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch expenses")
