from .service import PreferencesStore
from .dynamodb_client import TABLE_NAME, create_preferences_table, preferences_table

__all__ = ["PreferencesStore", "TABLE_NAME", "create_preferences_table", "preferences_table"]
