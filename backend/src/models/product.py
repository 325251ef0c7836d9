"""Product SQLAlchemy model"""

from uuid import uuid4

from sqlalchemy import Column, Text, ForeignKey, Numeric, Integer, Date, DateTime, Index, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base


class Product(Base):
    """Product model representing a catalog item of one organization.

    The owning organization is set at creation and never changes.
    """
    __tablename__ = "product"
    __table_args__ = (
        Index("ix_product_organization_id", "organization_id"),
        Index("ix_product_organization_name", "organization_id", "name"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    organization_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("organization.id", ondelete="RESTRICT"),
        nullable=False
    )
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    image = Column(Text, nullable=False)
    price = Column(Numeric(precision=12, scale=2), nullable=False)
    available_date = Column(Date, nullable=False)
    stock = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    organization = relationship("Organization", back_populates="products", lazy="selectin")

    @property
    def organization_name(self):
        return self.organization.name if self.organization else None

    def to_dict(self):
        """Convert product to dictionary representation"""
        return {
            "id": str(self.id),
            "organization_id": str(self.organization_id),
            "name": self.name,
            "description": self.description,
            "image": self.image,
            "price": str(self.price),
            "available_date": self.available_date.isoformat(),
            "stock": self.stock,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat()
        }
