"""Catalog domain module: the product admin resource and its access policy

The HTTP router lives in catalog.router and is mounted by main.
"""

from .access import AccessScope, AuthorizationDenied
from .schemas import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
    ResourceSchemaResponse,
)

__all__ = [
    "AccessScope",
    "AuthorizationDenied",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductListResponse",
    "ResourceSchemaResponse",
]
