"""SQLAlchemy Models for the catalog admin"""

from .base import Base
from .organization import Organization
from .role import Role, user_role
from .user import User
from .product import Product
from .audit_log import AuditLog

__all__ = [
    "Base",
    "Organization",
    "Role",
    "user_role",
    "User",
    "Product",
    "AuditLog",
]
