"""Declarative base and shared column types for the catalog models"""

from sqlalchemy import JSON, MetaData
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base

# Stable index/FK names; tables are created from metadata, not migrations
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# JSONB on PostgreSQL, plain JSON on SQLite (tests)
JSONDocument = JSON().with_variant(JSONB(), "postgresql")

Base = declarative_base(metadata=MetaData(naming_convention=NAMING_CONVENTION))
