from typing import Any, Dict, Optional
from .dynamodb_client import get_item, put_item

class PreferencesStore:
    """One preferences document per user; last write wins."""

    def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        return get_item(user_id)

    def put(self, item: Dict[str, Any]) -> None:
        put_item(item)
