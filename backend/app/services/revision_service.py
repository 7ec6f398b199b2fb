"""
Service layer for wiki revisions.

Provides methods for:
- Proposing field-level changes to a referenced entity (one Pending revision per field)
- Listing the revisions of a reference, projected by caller trust
"""
import logging
from typing import Any, List, Mapping, Optional, Union
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import UnauthorizedError, ValidationError
from app.models.enums import RevisionStatus
from app.models.revision import Revision
from app.repositories.profile_repository import ProfileRepository
from app.repositories.reference_registry import (
    ReferenceRegistry,
    canonical_id,
    current_field_value,
    reference_registry,
)
from app.repositories.revision_repository import RevisionRepository
from app.schemas.revision import ProfileSummary, RevisionFull, RevisionPublic

logger = logging.getLogger(__name__)


class RevisionService:
    """Revision proposals and revision listings. Stateless; one session per call."""

    @staticmethod
    async def propose(
        session: AsyncSession,
        *,
        reference: Optional[str],
        reference_id: Optional[str],
        owner_id: UUID,
        changes: Mapping[str, Any],
        trusted: bool,
        registry: ReferenceRegistry = reference_registry,
    ) -> List[Revision]:
        """
        Store one Pending revision per entry in ``changes``.

        The current value of each field on the referenced entity is captured as
        ``old_value``; a field the entity does not have gives ``None``. The
        entity itself is never modified. All revisions are written in a single
        transaction.

        Raises:
            UnauthorizedError: caller is not a trusted origin (checked first)
            ValidationError: missing reference/reference_id, no changes, or
                unknown reference type
            NotFoundError: the referenced entity does not exist
            StorageError: the lookup or the insert failed
        """
        if not trusted:
            logger.warning(f"Rejected revision proposal from untrusted origin for {reference}/{reference_id}")
            raise UnauthorizedError("Revisions can only be proposed from a trusted origin")

        if not reference or not reference_id:
            raise ValidationError("reference and reference_id are required")
        if not changes:
            raise ValidationError("No changes specified")

        entity = await registry.resolve(session, reference, reference_id)
        # "042" and "42" resolve the same row; file both under one key
        reference_id = canonical_id(entity)

        revisions = [
            Revision(
                field=field,
                old_value=current_field_value(entity, field),
                new_value=new_value,
                owner_id=owner_id,
                status=RevisionStatus.PENDING,
                reference=reference,
                reference_id=reference_id,
            )
            for field, new_value in changes.items()
        ]

        created = await RevisionRepository.insert_many(session, revisions)
        logger.info(f"Stored {len(created)} pending revision(s) for {reference}/{reference_id} by {owner_id}")
        return created

    @staticmethod
    async def list_revisions(
        session: AsyncSession,
        *,
        reference: Optional[str],
        reference_id: Optional[str],
        trusted: bool,
    ) -> Union[List[RevisionPublic], List[RevisionFull]]:
        """
        All revisions of one reference, oldest first.

        Untrusted callers get ``RevisionPublic`` (no owner id, no moderation
        timestamps). Trusted callers get ``RevisionFull`` with the owner's
        profile attached when one exists. An empty list means no revisions yet;
        a failed query raises StorageError.
        """
        if not reference or not reference_id:
            raise ValidationError("reference and reference_id are required")

        revisions = await RevisionRepository.list_by_reference(session, reference, reference_id)

        if not trusted:
            return [RevisionPublic.model_validate(r) for r in revisions]

        profiles = await ProfileRepository.get_many(session, (r.owner_id for r in revisions))
        result = []
        for r in revisions:
            view = RevisionFull.model_validate(r)
            profile = profiles.get(r.owner_id)
            if profile is not None:
                view.owner = ProfileSummary.model_validate(profile)
            result.append(view)
        return result
