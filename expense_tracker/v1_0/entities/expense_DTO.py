import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from .base import CamelDTO
from .page import PaginationDTO

class ExpenseCategoryRefDTO(CamelDTO):
    id: uuid.UUID
    name: str
    color: str
    icon: str

class ExpenseDTO(CamelDTO):
    id: uuid.UUID
    user_id: str
    category_id: uuid.UUID
    amount: Decimal
    description: Optional[str] = None
    date: datetime
    receipt_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    category: Optional[ExpenseCategoryRefDTO] = None

class ExpenseMessageDTO(CamelDTO):
    message: str
    expense: ExpenseDTO

class ExpensePageDTO(CamelDTO):
    expenses: List[ExpenseDTO]
    pagination: PaginationDTO
