import uuid
from typing import Optional
from fastapi import APIRouter, HTTPException, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from expense_tracker.core.security.deps import AuthUser, get_current_user
from expense_tracker.storage.database.db_connector import get_db
from expense_tracker.app_containers import ApplicationContainer
from expense_tracker.core.logger import logger

from expense_tracker.v1_0.schemas import ExpenseCreate, ExpenseFilters, ExpenseUpdate
from expense_tracker.v1_0.entities import ExpenseDTO, ExpenseMessageDTO, ExpensePageDTO
from expense_tracker.v1_0.services import ExpenseService
from expense_tracker.v1_0.services.expense_service import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

router = APIRouter(prefix="/expenses", tags=["Expenses"])

@router.get(
    "",
    response_model=ExpensePageDTO,
    summary="List the caller's expenses (filtered, paginated)",
)
@inject
async def list_expenses(
    page: int = Query(1, ge=1, description="1-based page number"),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, alias="pageSize"),
    start_date: Optional[str] = Query(None, alias="startDate", description="ISO date or datetime"),
    end_date: Optional[str] = Query(None, alias="endDate", description="ISO date (whole day) or datetime"),
    category_ids: Optional[str] = Query(None, alias="categoryIds", description="Comma separated category IDs"),
    min_amount: Optional[str] = Query(None, alias="minAmount"),
    max_amount: Optional[str] = Query(None, alias="maxAmount"),
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
    service: ExpenseService = Depends(
        Provide[ApplicationContainer.api_container.expense_service]
    ),
) -> ExpensePageDTO:
    logger.debug(f"[ExpenseRouter] list page={page} page_size={page_size}")
    try:
        filters = ExpenseFilters.from_query(
            start_date=start_date,
            end_date=end_date,
            category_ids=category_ids,
            min_amount=min_amount,
            max_amount=max_amount,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        return await service.list_filtered(user.user_id, filters, page, page_size, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[ExpenseRouter] list error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch expenses")

@router.post(
    "",
    response_model=ExpenseMessageDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new expense",
)
@inject
async def create_expense(
    request: ExpenseCreate,
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
    service: ExpenseService = Depends(
        Provide[ApplicationContainer.api_container.expense_service]
    ),
) -> ExpenseMessageDTO:
    logger.info("[ExpenseRouter] create user=%s", user.user_id)
    try:
        return await service.create(user.user_id, request, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[ExpenseRouter] create error: %s", e, exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to create expense",
        )

@router.get(
    "/{expense_id}",
    response_model=ExpenseDTO,
    summary="Get one of the caller's expenses",
)
@inject
async def get_expense(
    expense_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
    service: ExpenseService = Depends(
        Provide[ApplicationContainer.api_container.expense_service]
    ),
) -> ExpenseDTO:
    try:
        return await service.get(user.user_id, expense_id, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[ExpenseRouter] get error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch expense")

@router.put(
    "/{expense_id}",
    response_model=ExpenseMessageDTO,
    summary="Partially update one of the caller's expenses",
)
@inject
async def update_expense(
    expense_id: uuid.UUID,
    request: ExpenseUpdate,
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
    service: ExpenseService = Depends(
        Provide[ApplicationContainer.api_container.expense_service]
    ),
) -> ExpenseMessageDTO:
    logger.info("[ExpenseRouter] update id=%s", expense_id)
    try:
        return await service.update(user.user_id, expense_id, request, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[ExpenseRouter] update error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update expense")

@router.delete(
    "/{expense_id}",
    response_model=ExpenseMessageDTO,
    summary="Delete one of the caller's expenses",
)
@inject
async def delete_expense(
    expense_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
    service: ExpenseService = Depends(
        Provide[ApplicationContainer.api_container.expense_service]
    ),
) -> ExpenseMessageDTO:
    logger.warning("[ExpenseRouter] delete id=%s", expense_id)
    try:
        return await service.delete(user.user_id, expense_id, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("[ExpenseRouter] delete error: %s", e, exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to delete expense",
        )
