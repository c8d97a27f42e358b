import uuid
from datetime import datetime
from sqlalchemy import String, DateTime, Index, func
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base, utcnow

DEFAULT_COLOR = "#95A5A6"
DEFAULT_ICON = "📌"

class Category(Base):
    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    color: Mapped[str] = mapped_column(String(20), nullable=False, default=DEFAULT_COLOR)
    icon: Mapped[str] = mapped_column(String(16), nullable=False, default=DEFAULT_ICON)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


# one name per user, case-insensitive
Index(
    "uq_categories_user_lower_name",
    Category.user_id,
    func.lower(Category.name),
    unique=True,
)
