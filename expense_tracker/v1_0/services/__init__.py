from .category_service import CategoryService
from .expense_service import ExpenseService
from .analytics_service import AnalyticsService
from .preferences_service import PreferencesService
from .receipt_service import ReceiptService
__all__=[
    "CategoryService",
    "ExpenseService",
    "AnalyticsService",
    "PreferencesService",
    "ReceiptService",
    ]
