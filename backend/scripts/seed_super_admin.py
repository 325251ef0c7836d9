#!/usr/bin/env python
"""Seed script to create the built-in roles and the first super admin.

Run once during initial setup. Tables are created if they do not exist yet.
The super admin can then create organizations' products through the API.

Usage:
    python backend/scripts/seed_super_admin.py

Environment Variables:
    DATABASE_URL: Database connection string
    PASSWORD_PEPPER: Password hashing pepper (required)
    ADMIN_EMAIL: Email for the super admin (default: admin@example.com)
    ADMIN_PASSWORD: Password for the super admin (default: AdminP@ss123)
    ADMIN_NAME: Display name (default: System Administrator)
    ORGANIZATION_NAME: If set, create this organization and attach the admin to it
"""

import os
import sys
from pathlib import Path

# Add backend/src to Python path
backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from auth.password import hash_password, validate_password_strength
from auth.roles import UserRole
from config import get_settings
from database import build_engine
from models import Base, Organization, Role, User


def ensure_roles(session) -> dict:
    """Create any missing built-in roles and return them by name."""
    roles = {role.name: role for role in session.execute(select(Role)).scalars()}
    for role_name in UserRole:
        if role_name.value not in roles:
            role = Role(name=role_name.value)
            session.add(role)
            roles[role_name.value] = role
    session.flush()
    return roles


def main():
    """Create the super admin user."""
    admin_email = os.getenv("ADMIN_EMAIL", "admin@example.com").lower()
    admin_password = os.getenv("ADMIN_PASSWORD", "AdminP@ss123")
    admin_name = os.getenv("ADMIN_NAME", "System Administrator")
    organization_name = os.getenv("ORGANIZATION_NAME")

    is_valid, error_msg = validate_password_strength(admin_password)
    if not is_valid:
        print(f"ERROR: Password does not meet strength requirements: {error_msg}")
        sys.exit(1)

    engine = build_engine(get_settings().DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine)
    session = Session()

    try:
        existing_user = session.execute(
            select(User).where(User.email == admin_email)
        ).scalar_one_or_none()

        if existing_user:
            print(f"ERROR: User with email {admin_email} already exists")
            sys.exit(1)

        roles = ensure_roles(session)

        organization = None
        if organization_name:
            organization = Organization(name=organization_name)
            session.add(organization)
            session.flush()

        admin_user = User(
            organization_id=organization.id if organization else None,
            email=admin_email,
            name=admin_name,
            password_hash=hash_password(admin_password),
            status="ACTIVE",
        )
        admin_user.roles.append(roles[UserRole.SUPER_ADMIN.value])

        session.add(admin_user)
        session.commit()

        print("SUCCESS: Super admin created")
        print(f"  ID:    {admin_user.id}")
        print(f"  Org:   {admin_user.organization_id}")
        print(f"  Email: {admin_user.email}")
        print(f"  Roles: {', '.join(admin_user.role_names)}")

    except SQLAlchemyError as e:
        session.rollback()
        print(f"ERROR: Failed to create super admin: {e}")
        sys.exit(1)

    finally:
        session.close()


if __name__ == "__main__":
    main()
