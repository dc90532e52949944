"""Generic repository over one ORM model.

Concrete repositories build on these helpers and translate rows into
application DTOs; ORM instances never leave the infrastructure layer.
All writes flush into the caller's session and never commit.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from docflow.infrastructure.persistence.database import Base


class BaseRepository[ModelType: Base]:
    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Row by primary key (identity map first), or None."""
        return await self.db.get(self.model, entity_id)

    async def create(self, obj: ModelType) -> ModelType:
        """Add and flush; refresh so server defaults (timestamps) are loaded."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        await self.db.delete(obj)
        await self.db.flush()
