"""Declarative description of the Product admin resource.

Pages, navigation, form fields and table columns. The builders are pure
functions of the principal and return immutable tuples.
"""

from typing import Dict, Optional, Tuple

from auth.principal import Principal
from auth.roles import UserRole
from .access import AccessScope, RECORD_ACTIONS
from .fields import ActionSpec, ColumnKind, ColumnSpec, FieldComponent, FieldSpec

DEFAULT_CURRENCY = "IDR"

NAVIGATION_ICON = "heroicon-o-shopping-bag"

# Logical page name -> route pattern relative to the resource root
PAGES: Dict[str, str] = {
    "index": "/",
    "create": "/create",
    "edit": "/{record}/edit",
}

NAME_MAX_LENGTH = 255


def _payload_fields(currency: str) -> Tuple[FieldSpec, ...]:
    return (
        FieldSpec(
            name="name",
            component=FieldComponent.TEXT_INPUT,
            required=True,
            max_length=NAME_MAX_LENGTH,
        ),
        FieldSpec(
            name="description",
            component=FieldComponent.TEXTAREA,
            required=True,
        ),
        FieldSpec(
            name="image",
            component=FieldComponent.FILE_UPLOAD,
            required=True,
            image_only=True,
        ),
        FieldSpec(
            name="price",
            component=FieldComponent.TEXT_INPUT,
            required=True,
            numeric=True,
            prefix=currency,
            input_mode="decimal",
        ),
        FieldSpec(
            name="available_date",
            component=FieldComponent.DATE_PICKER,
            required=True,
        ),
        FieldSpec(
            name="stock",
            component=FieldComponent.TEXT_INPUT,
            required=True,
            numeric=True,
            default=0,
        ),
    )


def build_field_list(
    principal: Principal,
    access_scope: Optional[AccessScope] = None,
    currency: str = DEFAULT_CURRENCY,
) -> Tuple[FieldSpec, ...]:
    """Product form fields for this principal, organization field first."""
    access_scope = access_scope or AccessScope()
    return (access_scope.resolve_organization_field(principal),) + _payload_fields(currency)


def build_column_list(principal: Principal, currency: str = DEFAULT_CURRENCY) -> Tuple[ColumnSpec, ...]:
    """Product table columns; the organization column is only shown to super admins."""
    return (
        ColumnSpec(name="image", kind=ColumnKind.IMAGE),
        ColumnSpec(
            name="organization.name",
            sortable=True,
            visible=principal.has_role(UserRole.SUPER_ADMIN),
        ),
        ColumnSpec(name="name", sortable=True, searchable=True),
        ColumnSpec(name="price", format="money", currency=currency),
        ColumnSpec(name="available_date", format="date"),
        ColumnSpec(name="stock", sortable=True),
    )


def build_row_actions() -> Tuple[ActionSpec, ...]:
    return tuple(ActionSpec(name=action, label=action.capitalize()) for action in RECORD_ACTIONS)


def sortable_columns(principal: Principal) -> Tuple[str, ...]:
    return tuple(
        column.name for column in build_column_list(principal)
        if column.sortable and column.visible
    )


def searchable_columns(principal: Principal) -> Tuple[str, ...]:
    return tuple(
        column.name for column in build_column_list(principal)
        if column.searchable and column.visible
    )
