from typing import Dict, List, Optional, Union

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.origin import get_origin_trust, require_trusted_origin
from app.db.database import get_db
from app.schemas.revision import CreateRevisionRequest, RevisionFull, RevisionPublic
from app.services.revision_history import group_revisions_by_date
from app.services.revision_service import RevisionService

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/revisions", tags=["revisions"])


@router.post("", response_model=List[RevisionFull])
async def create_revision(
    request: CreateRevisionRequest,
    trusted: bool = Depends(require_trusted_origin),
    session: AsyncSession = Depends(get_db),
):
    """
    Propose changes to a wiki entity.

    Each key of ``changes`` becomes its own Pending revision holding the
    field's current value and the proposed one. Only trusted origins may
    propose.
    """
    return await RevisionService.propose(
        session,
        reference=request.reference,
        reference_id=request.reference_id,
        owner_id=request.owner_id,
        changes=request.changes,
        trusted=trusted,
    )


@router.get("", response_model=None)
async def list_revisions(
    reference: Optional[str] = Query(None),
    reference_id: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db),
    trusted: bool = Depends(get_origin_trust),
) -> Union[List[RevisionPublic], List[RevisionFull]]:
    """List revisions of one entity. Public origins get the restricted projection."""
    return await RevisionService.list_revisions(
        session,
        reference=reference,
        reference_id=reference_id,
        trusted=trusted,
    )


@router.get("/history", response_model=None)
async def revision_history(
    reference: Optional[str] = Query(None),
    reference_id: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db),
    trusted: bool = Depends(get_origin_trust),
) -> Dict[str, list]:
    """Revisions of one entity grouped by day (YYYY-MM-DD), for the history tab."""
    revisions = await RevisionService.list_revisions(
        session,
        reference=reference,
        reference_id=reference_id,
        trusted=trusted,
    )
    return group_revisions_by_date(revisions)
