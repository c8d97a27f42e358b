from typing import Optional
from pydantic import BaseModel, Field, field_validator

class CategoryCreate(BaseModel):
    """Create schema for a category."""
    name: str = Field(..., min_length=1, max_length=100)
    color: Optional[str] = Field(default=None, max_length=20, description="Display color, e.g. #FF6B6B")
    icon: Optional[str] = Field(default=None, max_length=16)

    model_config = {
        "json_schema_extra": {
            "example": {"name": "Groceries", "color": "#FF6B6B", "icon": "🛒"}
        }
    }

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Category name is required")
        return v

    @field_validator("color", "icon", mode="before")
    @classmethod
    def _blank_is_default(cls, v):
        if isinstance(v, str):
            return v.strip() or None
        return v
