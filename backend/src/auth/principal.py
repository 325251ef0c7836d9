"""Authenticated principal passed explicitly to every policy function."""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional
from uuid import UUID

from models.user import User
from .roles import UserRole, parse_roles


@dataclass(frozen=True)
class Principal:
    """The actor making a request: identity, tenant and roles.

    Built once per request by auth.dependencies.get_current_principal and
    never mutated afterwards.
    """
    user_id: Optional[UUID]
    organization_id: Optional[UUID]
    roles: FrozenSet[UserRole] = field(default_factory=frozenset)
    email: Optional[str] = None

    def has_role(self, role: UserRole) -> bool:
        return role in self.roles

    @property
    def is_super_admin(self) -> bool:
        return UserRole.SUPER_ADMIN in self.roles

    @property
    def is_organization_admin(self) -> bool:
        return UserRole.ORGANIZATION_ADMIN in self.roles

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(
            user_id=user.id,
            organization_id=user.organization_id,
            roles=parse_roles(role.name for role in user.roles),
            email=user.email,
        )
