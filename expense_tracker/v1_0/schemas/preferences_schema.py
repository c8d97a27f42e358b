from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from expense_tracker.v1_0.entities import NotificationsDTO, Theme

class PreferencesUpdate(BaseModel):
    theme: Theme
    currency: str = Field(..., min_length=1, max_length=10)
    language: Optional[str] = Field(default=None, max_length=10)
    notifications: Optional[NotificationsDTO] = None
    default_category: Optional[str] = Field(default=None, max_length=100)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
