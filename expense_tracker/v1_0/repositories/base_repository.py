from typing import Any, Iterable, Optional, Protocol, Sequence, Type, TypeVar, Generic, runtime_checkable
from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

# --- models must expose .id and .user_id ---
@runtime_checkable
class UserOwned(Protocol):
    id: Any  # PK column
    user_id: Any

ModelT = TypeVar("ModelT", bound=UserOwned)


class BaseRepository(Generic[ModelT]):
    """Persistence helpers for rows owned by a single user."""

    def __init__(self, model: Type[ModelT]):
        self.model = model

    async def add(self, entity: ModelT, session: AsyncSession) -> ModelT:
        session.add(entity)
        try:
            await session.flush([entity])
        except IntegrityError:
            await session.rollback()
            raise
        return entity

    async def add_many(self, entities: Iterable[ModelT], session: AsyncSession) -> list[ModelT]:
        items = list(entities)
        session.add_all(items)
        try:
            await session.flush()
        except IntegrityError:
            await session.rollback()
            raise
        return items

    async def get_owned(
        self,
        id_: Any,
        user_id: str,
        session: AsyncSession,
        *,
        options: Sequence[Any] | None = None,
    ) -> Optional[ModelT]:
        """Row by id, or None when absent or owned by someone else."""
        stmt: Select = select(self.model).where(
            self.model.id == id_,
            self.model.user_id == user_id,
        )
        if options:
            stmt = stmt.options(*options)
        res = await session.execute(stmt)
        return res.scalars().first()

    async def list_owned(
        self,
        user_id: str,
        session: AsyncSession,
        *,
        order_by: Any | None = None,
        options: Sequence[Any] | None = None,
    ) -> list[ModelT]:
        if order_by is None:
            order_by = self.model.id.desc()
        stmt: Select = select(self.model).where(self.model.user_id == user_id).order_by(order_by)
        if options:
            stmt = stmt.options(*options)
        res = await session.execute(stmt)
        return list(res.scalars().all())

    async def update_fields(
        self,
        entity: ModelT,
        data: dict[str, Any],
        session: AsyncSession,
        *,
        deny: set[str] | None = None,
    ) -> ModelT:
        for k, v in data.items():
            if deny and k in deny:
                continue
            setattr(entity, k, v)
        await session.flush([entity])
        return entity

    async def delete(self, entity: ModelT, session: AsyncSession) -> None:
        await session.delete(entity)
        await session.flush()
