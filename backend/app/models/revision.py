from sqlalchemy import Column, String, TIMESTAMP, Enum, JSON, Index
from app.db.base import Base, utc_now
from app.db.types import GUID
from app.models.enums import RevisionStatus
import uuid


class Revision(Base):
    """One proposed change to one field of one referenced entity."""
    __tablename__ = "revisions"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    field = Column(String(100), nullable=False)
    # JSON so list-valued fields (edibilities, sun_preferences) keep their shape
    old_value = Column(JSON, nullable=True)
    new_value = Column(JSON, nullable=True)
    owner_id = Column(GUID(), nullable=False)
    # Stored by value ("Pending"), not by member name
    status = Column(
        Enum(
            RevisionStatus,
            native_enum=False,
            length=20,
            values_callable=lambda e: [m.value for m in e],
        ),
        default=RevisionStatus.PENDING,
        nullable=False,
    )
    reference = Column(String(50), nullable=False)
    reference_id = Column(String(100), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), default=utc_now, nullable=False)
    # Set by whatever moderates revisions; nothing in this service transitions status
    approved_on = Column(TIMESTAMP(timezone=True), nullable=True)
    rejected_on = Column(TIMESTAMP(timezone=True), nullable=True)

    __table_args__ = (
        Index("idx_revisions_reference", "reference", "reference_id"),
    )
