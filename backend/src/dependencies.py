"""Global FastAPI dependencies for the product admin.

This module provides:
- get_access_scope: the access policy configured from settings
- get_product_repository: product persistence bound to the request session

The current principal comes from auth.dependencies.get_current_principal.
Nothing here reads ambient user state; every policy call receives the
principal explicitly.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from catalog.access import AccessScope
from catalog.repository import ProductRepository
from config import Settings, get_settings
from database import get_db


def get_access_scope(settings: Settings = Depends(get_settings)) -> AccessScope:
    """Access policy for the current request.

    Example:
        @router.get("/products")
        def list_products(scope: AccessScope = Depends(get_access_scope)):
            ...
    """
    return AccessScope(strict_list_scoping=settings.STRICT_LIST_SCOPING)


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    return ProductRepository(db)
