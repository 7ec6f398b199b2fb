"""
Lookup of the entities that revisions can target.

A reference type is the collection name a revision carries in its
``reference`` column ("plants"). Each registered type knows its model and how
to turn the string ``reference_id`` into a primary key.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Type

from fastapi.encoders import jsonable_encoder
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, StorageError, ValidationError
from app.db.base import Base
from app.models.plant import Plant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferenceType:
    name: str
    model: Type[Base]
    parse_id: Callable[[str], Any]


class ReferenceRegistry:
    def __init__(self) -> None:
        self._types: Dict[str, ReferenceType] = {}

    def register(self, name: str, model: Type[Base], parse_id: Callable[[str], Any] = str) -> None:
        self._types[name] = ReferenceType(name=name, model=model, parse_id=parse_id)

    def is_registered(self, name: str) -> bool:
        return name in self._types

    async def resolve(self, session: AsyncSession, name: str, reference_id: str) -> Base:
        """
        Load the entity a revision points at.

        Raises:
            ValidationError: reference type is not registered
            NotFoundError: id does not parse for this type, or no such row
            StorageError: the lookup itself failed
        """
        ref_type = self._types.get(name)
        if ref_type is None:
            raise ValidationError(f"Unsupported reference type '{name}'")

        try:
            pk = ref_type.parse_id(reference_id)
        except (TypeError, ValueError):
            raise NotFoundError(f"Invalid id '{reference_id}' for {name}")

        try:
            entity = await session.get(ref_type.model, pk)
        except SQLAlchemyError as e:
            logger.error(f"Lookup of {name}/{reference_id} failed: {e}", exc_info=True)
            raise StorageError(f"Failed to load {name}/{reference_id}") from e

        if entity is None:
            raise NotFoundError(f"{name}/{reference_id} not found")
        return entity


def build_default_registry() -> ReferenceRegistry:
    registry = ReferenceRegistry()
    registry.register("plants", Plant, int)
    return registry


reference_registry = build_default_registry()


def current_field_value(entity: Base, field: str) -> Any:
    """JSON-safe value of a mapped column on ``entity``; None for anything that is not a column."""
    if field not in sa_inspect(entity).mapper.column_attrs.keys():
        return None
    # datetimes and the like are stored in a JSON column
    return jsonable_encoder(getattr(entity, field))


def canonical_id(entity: Base) -> str:
    """Primary key of a loaded entity as the string revisions are filed under."""
    return "/".join(str(part) for part in sa_inspect(entity).identity)
