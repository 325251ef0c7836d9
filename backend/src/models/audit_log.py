"""AuditLog SQLAlchemy model"""

from uuid import uuid4

from sqlalchemy import Column, Text, ForeignKey, Index, DateTime, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base, JSONDocument


class AuditLog(Base):
    """AuditLog model for immutable security event logging.

    Records product mutations, permission denials and logins.
    Entries are append-only and should never be updated or deleted.
    """
    __tablename__ = "audit_log"
    __table_args__ = (
        Index("ix_audit_log_organization_id", "organization_id"),
        Index("ix_audit_log_organization_id_created_at", "organization_id", "created_at"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    organization_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("organization.id", ondelete="RESTRICT"),
        nullable=True
    )
    actor_id = Column(Uuid(as_uuid=True), ForeignKey("user.id", ondelete="SET NULL"), nullable=True)
    action = Column(Text, nullable=False)
    entity_type = Column(Text, nullable=True)
    entity_id = Column(Uuid(as_uuid=True), nullable=True)
    metadata_json = Column(JSONDocument, nullable=True)
    ip_address = Column(Text, nullable=True)
    user_agent = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    organization = relationship("Organization")
    actor = relationship("User")
