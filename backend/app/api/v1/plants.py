from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.db.database import get_db
from app.schemas.plant import PlantResponse
from app.services.plant_service import PlantService

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/plants", tags=["plants"])


@router.get("/{plant_id}", response_model=PlantResponse)
async def get_plant(
    plant_id: int,
    session: AsyncSession = Depends(get_db),
):
    """Wiki page data for one plant."""
    return await PlantService.get_plant(session, plant_id)
