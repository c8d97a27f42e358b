from typing import Literal
from pydantic import Field
from .base import CamelDTO

Theme = Literal["light", "dark"]

class NotificationsDTO(CamelDTO):
    email: bool = True
    push: bool = False
    weekly_report: bool = True

class PreferencesDTO(CamelDTO):
    user_id: str
    theme: Theme = "light"
    currency: str = "USD"
    language: str = "en"
    notifications: NotificationsDTO = Field(default_factory=NotificationsDTO)
    default_category: str = "Other"
    updated_at: str

class PreferencesSavedDTO(CamelDTO):
    message: str
    preferences: PreferencesDTO
