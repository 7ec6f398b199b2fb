from __future__ import annotations

from typing import Dict, Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.profile import Profile


class ProfileRepository:
    @staticmethod
    async def get_many(session: AsyncSession, profile_ids: Iterable[UUID]) -> Dict[UUID, Profile]:
        """Load the profiles for a set of owner ids, keyed by id. Missing ids are absent."""
        ids = set(profile_ids)
        if not ids:
            return {}
        result = await session.execute(select(Profile).where(Profile.id.in_(ids)))
        return {profile.id: profile for profile in result.scalars().all()}
