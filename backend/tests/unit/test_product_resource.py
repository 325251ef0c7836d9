"""Unit tests for the product admin resource description

Tests cover:
- Form field order and per-field configuration
- Organization field per role
- Table columns and organization column visibility
- Row actions, pages and navigation icon
"""

from uuid import uuid4

import sys
from pathlib import Path
backend_src = Path(__file__).parent.parent.parent / "src"
sys.path.insert(0, str(backend_src))

from auth.principal import Principal
from auth.roles import UserRole
from catalog.access import AccessScope
from catalog.fields import ColumnKind, FieldComponent
from catalog.resource import (
    NAVIGATION_ICON,
    PAGES,
    build_column_list,
    build_field_list,
    build_row_actions,
    searchable_columns,
    sortable_columns,
)


ORG_ID = uuid4()
SUPER_ADMIN = Principal(user_id=uuid4(), organization_id=None, roles=frozenset({UserRole.SUPER_ADMIN}))
ORG_ADMIN = Principal(user_id=uuid4(), organization_id=ORG_ID, roles=frozenset({UserRole.ORGANIZATION_ADMIN}))
ROLELESS = Principal(user_id=uuid4(), organization_id=ORG_ID)


class TestFieldList:

    def test_field_order(self):
        names = [field.name for field in build_field_list(ORG_ADMIN)]

        assert names == ["organization_id", "name", "description", "image", "price", "available_date", "stock"]

    def test_organization_field_is_select_for_super_admin(self):
        organization_field = build_field_list(SUPER_ADMIN)[0]

        assert organization_field.component == FieldComponent.SELECT
        assert organization_field.required is True

    def test_organization_field_is_hidden_for_organization_admin(self):
        organization_field = build_field_list(ORG_ADMIN)[0]

        assert organization_field.component == FieldComponent.HIDDEN
        assert organization_field.default == ORG_ID

    def test_payload_fields(self):
        fields = {field.name: field for field in build_field_list(ROLELESS)}

        assert fields["name"].component == FieldComponent.TEXT_INPUT
        assert fields["name"].max_length == 255
        assert fields["description"].component == FieldComponent.TEXTAREA
        assert fields["image"].component == FieldComponent.FILE_UPLOAD
        assert fields["image"].image_only is True
        assert fields["price"].numeric is True
        assert fields["price"].prefix == "IDR"
        assert fields["price"].input_mode == "decimal"
        assert fields["available_date"].component == FieldComponent.DATE_PICKER
        assert fields["stock"].numeric is True
        assert fields["stock"].default == 0
        assert all(field.required for name, field in fields.items() if name != "organization_id")

    def test_currency_prefix_configurable(self):
        fields = {field.name: field for field in build_field_list(ORG_ADMIN, currency="SGD")}

        assert fields["price"].prefix == "SGD"

    def test_strict_scope_does_not_change_fields(self):
        assert build_field_list(ORG_ADMIN, AccessScope(strict_list_scoping=True)) == build_field_list(ORG_ADMIN)


class TestColumnList:

    def test_column_order(self):
        names = [column.name for column in build_column_list(SUPER_ADMIN)]

        assert names == ["image", "organization.name", "name", "price", "available_date", "stock"]

    def test_organization_column_visible_only_to_super_admin(self):
        def organization_column(principal):
            return next(c for c in build_column_list(principal) if c.name == "organization.name")

        assert organization_column(SUPER_ADMIN).visible is True
        assert organization_column(ORG_ADMIN).visible is False
        assert organization_column(ROLELESS).visible is False

    def test_column_formats(self):
        columns = {column.name: column for column in build_column_list(ORG_ADMIN)}

        assert columns["image"].kind == ColumnKind.IMAGE
        assert columns["price"].format == "money"
        assert columns["price"].currency == "IDR"
        assert columns["available_date"].format == "date"

    def test_sortable_and_searchable(self):
        assert sortable_columns(SUPER_ADMIN) == ("organization.name", "name", "stock")
        assert sortable_columns(ORG_ADMIN) == ("name", "stock")
        assert searchable_columns(ORG_ADMIN) == ("name",)


class TestResourceConstants:

    def test_row_actions(self):
        assert [action.name for action in build_row_actions()] == ["view", "edit", "delete"]
        assert [action.label for action in build_row_actions()] == ["View", "Edit", "Delete"]

    def test_pages(self):
        assert PAGES == {"index": "/", "create": "/create", "edit": "/{record}/edit"}

    def test_navigation_icon(self):
        assert NAVIGATION_ICON == "heroicon-o-shopping-bag"
