from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.models.plant import Plant


class PlantService:
    """Read side of the plant wiki page."""

    @staticmethod
    async def get_plant(session: AsyncSession, plant_id: int) -> Plant:
        plant = await session.get(Plant, plant_id)
        if not plant:
            raise NotFoundError(f"Plant {plant_id} not found")
        return plant
