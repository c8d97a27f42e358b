import uuid
from datetime import datetime
from typing import List
from .base import CamelDTO

class CategoryDTO(CamelDTO):
    id: uuid.UUID
    user_id: str
    name: str
    color: str
    icon: str
    created_at: datetime

class CategoryListDTO(CamelDTO):
    categories: List[CategoryDTO]
    count: int

class CategoryCreatedDTO(CamelDTO):
    message: str
    category: CategoryDTO

class CategorySeedDTO(CamelDTO):
    message: str
    categories: List[CategoryDTO]
    created: int
