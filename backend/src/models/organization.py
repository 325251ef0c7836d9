"""Organization model - Root entity for multi-tenant isolation"""

from uuid import uuid4

from sqlalchemy import Column, Text, DateTime, Uuid, func
from sqlalchemy.orm import validates, relationship

from .base import Base


class Organization(Base):
    """
    Organization model - Root entity for the multi-tenant catalog.

    Each organization is a tenant. Products and (non super admin) users
    reference organization.id via foreign key.
    """
    __tablename__ = "organization"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    name = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now()
    )

    # Relationships
    users = relationship("User", back_populates="organization")
    products = relationship("Product", back_populates="organization")

    @validates('name')
    def validate_name(self, key, value):
        """
        Ensure organization name is not empty and within length limits.

        Raises:
            ValueError: If name is empty/whitespace or exceeds 200 characters
        """
        if not value or len(value.strip()) == 0:
            raise ValueError("Organization name cannot be empty")
        if len(value) > 200:
            raise ValueError("Organization name cannot exceed 200 characters")
        return value.strip()

    def __repr__(self):
        return f"<Organization(id={self.id}, name='{self.name}')>"
