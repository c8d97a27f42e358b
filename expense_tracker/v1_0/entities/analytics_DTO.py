import uuid
from typing import List, Optional
from .base import CamelDTO
from .expense_DTO import ExpenseDTO

class DateRangeDTO(CamelDTO):
    start_date: Optional[str] = None
    end_date: Optional[str] = None

class OverallStatsDTO(CamelDTO):
    total: float = 0.0
    count: int = 0
    average: float = 0.0
    highest: float = 0.0
    lowest: float = 0.0

class CategoryBreakdownDTO(CamelDTO):
    category_id: uuid.UUID
    category_name: Optional[str] = None
    category_color: Optional[str] = None
    category_icon: Optional[str] = None
    total: float
    count: int
    average: float
    percentage: float

class AnalyticsDTO(CamelDTO):
    overall: OverallStatsDTO
    by_category: List[CategoryBreakdownDTO]
    date_range: DateRangeDTO

class MonthEntryDTO(CamelDTO):
    month: int
    month_name: str
    total: float
    count: int
    average: float

class MonthlyReportDTO(CamelDTO):
    year: int
    year_total: float
    months: List[MonthEntryDTO]

class RecentExpensesDTO(CamelDTO):
    expenses: List[ExpenseDTO]
    count: int
    period: str
    date_range: DateRangeDTO
