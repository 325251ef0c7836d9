"""Access policy for Product records.

Decides whether a principal may view, edit or delete a product, narrows
product list queries to the rows a principal may see, and picks the
organization form field a principal gets.

Rules:
- super_admin may act on every product.
- organization_admin may act on products of its own organization.
- Anyone else may not view, edit or delete.
- Lists are narrowed to the principal's organization when it holds
  organization_admin, even if it also holds super_admin. Other principals
  get the unscoped list unless strict list scoping is enabled.

Every function takes the principal explicitly and has no side effects
beyond logging and metrics.
"""

import logging
from typing import Any, Optional, Tuple

from sqlalchemy import Select

from auth.principal import Principal
from auth.roles import UserRole
from models.product import Product
from observability.metrics import authorization_decisions_total, list_scope_total
from .fields import FieldComponent, FieldSpec

logger = logging.getLogger(__name__)

VIEW = "view"
EDIT = "edit"
DELETE = "delete"
RECORD_ACTIONS = (VIEW, EDIT, DELETE)


class AuthorizationDenied(Exception):
    """The principal may not perform `action` on the product."""

    def __init__(self, action: str, principal: Principal, product: Any):
        self.action = action
        self.principal = principal
        self.product = product
        super().__init__(f"Not permitted to {action} this product")


class AccessScope:
    """Role and tenant based visibility policy for products.

    Args:
        strict_list_scoping: Narrow lists of every principal without
            super_admin to its own organization. Off by default, which keeps
            principals without a role unscoped.
    """

    def __init__(self, strict_list_scoping: bool = False):
        self.strict_list_scoping = strict_list_scoping

    def _can_manage(self, principal: Principal, product: Any) -> bool:
        if principal.has_role(UserRole.SUPER_ADMIN):
            return True
        return (
            principal.has_role(UserRole.ORGANIZATION_ADMIN)
            and product.organization_id == principal.organization_id
        )

    def can_view(self, principal: Principal, product: Any) -> bool:
        return self._can_manage(principal, product)

    def can_edit(self, principal: Principal, product: Any) -> bool:
        return self._can_manage(principal, product)

    def can_delete(self, principal: Principal, product: Any) -> bool:
        return self._can_manage(principal, product)

    def is_permitted(self, action: str, principal: Principal, product: Any) -> bool:
        checks = {
            VIEW: self.can_view,
            EDIT: self.can_edit,
            DELETE: self.can_delete,
        }
        if action not in checks:
            raise ValueError(f"Unknown product action: {action}")
        return checks[action](principal, product)

    def authorize(self, action: str, principal: Principal, product: Any) -> None:
        """Raise AuthorizationDenied unless `action` is permitted.

        Raises:
            AuthorizationDenied: If the principal may not perform the action
            ValueError: If the action is not one of view, edit, delete
        """
        allowed = self.is_permitted(action, principal, product)
        authorization_decisions_total.labels(
            action=action,
            outcome="allowed" if allowed else "denied"
        ).inc()

        if not allowed:
            logger.info(
                f"Denied {action} on product {getattr(product, 'id', None)}",
                extra={
                    "action": action,
                    "user_id": principal.user_id,
                    "organization_id": principal.organization_id,
                    "product_id": getattr(product, "id", None),
                }
            )
            raise AuthorizationDenied(action, principal, product)

    def permitted_actions(self, principal: Principal, product: Any) -> Tuple[str, ...]:
        """Record actions the principal may take on this product, in display order."""
        return tuple(
            action for action in RECORD_ACTIONS
            if self.is_permitted(action, principal, product)
        )

    def scope_list(self, principal: Principal, base_query: Select) -> Select:
        """Narrow a product query to the rows the principal may list.

        The returned query has the same shape as `base_query`; it is never
        modified in place.
        """
        scoped = principal.has_role(UserRole.ORGANIZATION_ADMIN)
        if not scoped and self.strict_list_scoping:
            scoped = not principal.has_role(UserRole.SUPER_ADMIN)

        if scoped:
            list_scope_total.labels(scope="organization").inc()
            return base_query.where(Product.organization_id == principal.organization_id)

        list_scope_total.labels(scope="unscoped").inc()
        return base_query

    def resolve_organization_field(self, principal: Principal) -> FieldSpec:
        """Organization form field for this principal.

        super_admin picks any organization; everyone else gets a hidden
        value fixed to its own organization.
        """
        if principal.has_role(UserRole.SUPER_ADMIN):
            return FieldSpec(
                name="organization_id",
                component=FieldComponent.SELECT,
                required=True,
                editable=True,
                relationship=("organization", "name"),
            )

        return FieldSpec(
            name="organization_id",
            component=FieldComponent.HIDDEN,
            required=False,
            editable=False,
            default=principal.organization_id,
        )

    def owning_organization(self, principal: Principal, requested: Optional[Any]) -> Optional[Any]:
        """Organization a new product will belong to.

        Mirrors resolve_organization_field: a super admin's choice is kept,
        anyone else's choice is replaced by its own organization.
        """
        if principal.has_role(UserRole.SUPER_ADMIN):
            return requested
        return principal.organization_id
