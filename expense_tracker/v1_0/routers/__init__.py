from .analytics_router import router as analytics_router
from .expense_router import router as expense_router
from .category_router import router as category_router
from .preferences_router import router as preferences_router
from .receipt_router import router as receipt_router
defined_routers = [
    analytics_router,
    expense_router,
    category_router,
    preferences_router,
    receipt_router,
    ]
