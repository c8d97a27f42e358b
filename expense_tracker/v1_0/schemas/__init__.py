from .category_schema import CategoryCreate
from .expense_schema import ExpenseCreate, ExpenseUpdate, ExpenseFilters
from .preferences_schema import PreferencesUpdate
__all__ = [
    "CategoryCreate",
    "ExpenseCreate", "ExpenseUpdate", "ExpenseFilters",
    "PreferencesUpdate",
]
