from .base import CamelDTO
from .page import PaginationDTO, build_pagination, page_offset
from .category_DTO import CategoryDTO, CategoryListDTO, CategoryCreatedDTO, CategorySeedDTO
from .expense_DTO import ExpenseDTO, ExpenseCategoryRefDTO, ExpenseMessageDTO, ExpensePageDTO
from .analytics_DTO import (
    DateRangeDTO,
    OverallStatsDTO,
    CategoryBreakdownDTO,
    AnalyticsDTO,
    MonthEntryDTO,
    MonthlyReportDTO,
    RecentExpensesDTO,
)
from .preferences_DTO import NotificationsDTO, PreferencesDTO, PreferencesSavedDTO, Theme
from .receipt_DTO import ReceiptUploadDTO


__all__ = [
    "CamelDTO",
    "PaginationDTO", "build_pagination", "page_offset",
    "CategoryDTO", "CategoryListDTO", "CategoryCreatedDTO", "CategorySeedDTO",
    "ExpenseDTO", "ExpenseCategoryRefDTO", "ExpenseMessageDTO", "ExpensePageDTO",
    "DateRangeDTO", "OverallStatsDTO", "CategoryBreakdownDTO", "AnalyticsDTO",
    "MonthEntryDTO", "MonthlyReportDTO", "RecentExpensesDTO",
    "NotificationsDTO", "PreferencesDTO", "PreferencesSavedDTO", "Theme",
    "ReceiptUploadDTO",
]
