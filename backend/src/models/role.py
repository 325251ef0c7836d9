"""Role SQLAlchemy model and user/role association table"""

from sqlalchemy import Column, Integer, Text, ForeignKey, Table, Uuid

from .base import Base


user_role = Table(
    "user_role",
    Base.metadata,
    Column("user_id", Uuid(as_uuid=True), ForeignKey("user.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("role.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base):
    """Named role granted to users.

    Only the labels in auth.roles.UserRole carry capabilities; any other
    label is stored but ignored by the access policy.
    """
    __tablename__ = "role"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, unique=True)

    def __repr__(self):
        return f"<Role(name='{self.name}')>"
