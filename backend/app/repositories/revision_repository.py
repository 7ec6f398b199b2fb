from __future__ import annotations

import logging
from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import StorageError
from app.models.revision import Revision

logger = logging.getLogger(__name__)


class RevisionRepository:
    @staticmethod
    async def insert_many(session: AsyncSession, revisions: Sequence[Revision]) -> List[Revision]:
        """Insert every revision in one transaction, or none of them."""
        try:
            session.add_all(revisions)
            await session.commit()
            for revision in revisions:
                await session.refresh(revision)
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Batch insert of {len(revisions)} revision(s) failed: {e}", exc_info=True)
            raise StorageError("Failed to insert revisions") from e
        return list(revisions)

    @staticmethod
    async def list_by_reference(
        session: AsyncSession,
        reference: str,
        reference_id: str,
    ) -> List[Revision]:
        stmt = (
            select(Revision)
            .where(Revision.reference == reference, Revision.reference_id == reference_id)
            .order_by(Revision.created_at.asc())
        )
        try:
            result = await session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Revision query for {reference}/{reference_id} failed: {e}", exc_info=True)
            raise StorageError("Failed to query revisions") from e
        return list(result.scalars().all())
