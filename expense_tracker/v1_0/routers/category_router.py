import uuid
from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from expense_tracker.core.security.deps import AuthUser, get_current_user
from expense_tracker.storage.database.db_connector import get_db
from expense_tracker.app_containers import ApplicationContainer
from expense_tracker.core.logger import logger

from expense_tracker.v1_0.schemas import CategoryCreate
from expense_tracker.v1_0.entities import (
    CategoryDTO,
    CategoryListDTO,
    CategoryCreatedDTO,
    CategorySeedDTO,
)
from expense_tracker.v1_0.services import CategoryService

router = APIRouter(prefix="/categories", tags=["Categories"])

@router.get(
    "",
    response_model=CategoryListDTO,
    summary="List the caller's categories (newest first)",
)
@inject
async def list_categories(
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
    service: CategoryService = Depends(
        Provide[ApplicationContainer.api_container.category_service]
    ),
):
    logger.debug("[CategoryRouter] list user=%s", user.user_id)
    try:
        return await service.list_all(user.user_id, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[CategoryRouter] list error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch categories")

@router.post(
    "",
    response_model=CategoryCreatedDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
)
@inject
async def create_category(
    request: CategoryCreate,
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
    service: CategoryService = Depends(
        Provide[ApplicationContainer.api_container.category_service]
    ),
):
    logger.info(f"[CategoryRouter] create payload={request.model_dump()}")
    try:
        return await service.create(user.user_id, request, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[CategoryRouter] create error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create category")

@router.post(
    "/defaults",
    response_model=CategorySeedDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Add the default category set (existing names are skipped)",
)
@inject
async def seed_default_categories(
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
    service: CategoryService = Depends(
        Provide[ApplicationContainer.api_container.category_service]
    ),
):
    logger.info("[CategoryRouter] seed defaults user=%s", user.user_id)
    try:
        return await service.seed_defaults(user.user_id, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[CategoryRouter] seed error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to seed categories")

@router.get(
    "/{category_id}",
    response_model=CategoryDTO,
    summary="Get a category by ID",
)
@inject
async def get_category(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
    service: CategoryService = Depends(
        Provide[ApplicationContainer.api_container.category_service]
    ),
):
    logger.debug(f"[CategoryRouter] get id={category_id}")
    try:
        return await service.get(user.user_id, category_id, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[CategoryRouter] get error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch category")
