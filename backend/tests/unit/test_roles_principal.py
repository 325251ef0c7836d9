"""Unit tests for role parsing and the Principal value"""

import pytest
from dataclasses import FrozenInstanceError
from uuid import uuid4

import sys
from pathlib import Path
backend_src = Path(__file__).parent.parent.parent / "src"
sys.path.insert(0, str(backend_src))

from auth.principal import Principal
from auth.roles import UserRole, parse_roles


class TestParseRoles:

    def test_known_labels_parsed(self):
        assert parse_roles(["super_admin", "organization_admin"]) == frozenset(
            {UserRole.SUPER_ADMIN, UserRole.ORGANIZATION_ADMIN}
        )

    def test_unknown_labels_ignored(self):
        assert parse_roles(["editor", "organization_admin"]) == frozenset({UserRole.ORGANIZATION_ADMIN})

    def test_labels_are_case_sensitive(self):
        assert parse_roles(["Super_Admin", "SUPER_ADMIN"]) == frozenset()

    def test_empty(self):
        assert parse_roles([]) == frozenset()


class TestPrincipal:

    def test_role_checks_are_independent(self):
        principal = Principal(
            user_id=uuid4(),
            organization_id=uuid4(),
            roles=frozenset({UserRole.SUPER_ADMIN, UserRole.ORGANIZATION_ADMIN}),
        )

        assert principal.is_super_admin
        assert principal.is_organization_admin
        assert principal.has_role(UserRole.SUPER_ADMIN)

    def test_roleless_principal(self):
        principal = Principal(user_id=uuid4(), organization_id=uuid4())

        assert principal.roles == frozenset()
        assert not principal.is_super_admin
        assert not principal.is_organization_admin

    def test_principal_is_immutable(self):
        principal = Principal(user_id=uuid4(), organization_id=uuid4())

        with pytest.raises(FrozenInstanceError):
            principal.organization_id = uuid4()

    def test_from_user_reads_roles_and_organization(self, make_user, acme_org):
        user = make_user("buyer@acme.com", acme_org, role_names=["organization_admin", "auditor"])

        principal = Principal.from_user(user)

        assert principal.user_id == user.id
        assert principal.organization_id == acme_org.id
        assert principal.email == "buyer@acme.com"
        assert principal.roles == frozenset({UserRole.ORGANIZATION_ADMIN})

    def test_from_user_without_organization(self, super_admin_user):
        principal = Principal.from_user(super_admin_user)

        assert principal.organization_id is None
        assert principal.is_super_admin
