"""Product admin API endpoints

Every record lookup goes through the principal's list scope first, so a
product outside that scope answers 404. Records inside the scope are then
checked against the view/edit/delete policy, which answers 403.
"""

import logging
from dataclasses import replace
from typing import Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from audit.service import log_from_request
from auth.dependencies import get_current_principal
from auth.principal import Principal
from config import Settings, get_settings
from database import get_db
from dependencies import get_access_scope, get_product_repository
from models.product import Product
from observability.metrics import product_mutations_total
from .access import AccessScope, AuthorizationDenied, VIEW, EDIT, DELETE
from .fields import FieldComponent, FieldOption
from .repository import ProductRepository, SORT_COLUMNS
from .resource import (
    NAVIGATION_ICON,
    PAGES,
    build_column_list,
    build_field_list,
    build_row_actions,
    sortable_columns,
)
from .schemas import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListItem,
    ProductListResponse,
    ResourceSchemaResponse,
    FieldSpecResponse,
    ColumnSpecResponse,
    ActionSpecResponse,
    TableSchemaResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])


def _load_in_scope(
    product_id: UUID,
    principal: Principal,
    scope: AccessScope,
    repository: ProductRepository,
) -> Product:
    """Find a product inside the principal's list scope or answer 404."""
    product = repository.find(scope.scope_list(principal, repository.base_query()), product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )
    return product


def _authorize(
    action: str,
    product: Product,
    principal: Principal,
    scope: AccessScope,
    request: Request,
    db: Session,
) -> None:
    """Check the policy; record a PERMISSION_DENIED audit entry before re-raising."""
    try:
        scope.authorize(action, principal, product)
    except AuthorizationDenied:
        log_from_request(
            db=db,
            request=request,
            organization_id=product.organization_id,
            action="PERMISSION_DENIED",
            actor_id=principal.user_id,
            entity_type="product",
            entity_id=product.id,
            metadata={"operation": action},
        )
        db.commit()
        raise


# ============================================================================
# Resource description
# ============================================================================

@router.get("/schema", response_model=ResourceSchemaResponse)
def get_resource_schema(
    principal: Principal = Depends(get_current_principal),
    scope: AccessScope = Depends(get_access_scope),
    repository: ProductRepository = Depends(get_product_repository),
    settings: Settings = Depends(get_settings),
):
    """
    Describe the product admin for the current principal.

    Returns pages, navigation icon, form fields and table layout. For super
    admins the organization select is filled with every organization.
    """
    fields = build_field_list(principal, scope, currency=settings.CURRENCY)

    form = []
    for field in fields:
        if field.component == FieldComponent.SELECT and field.name == "organization_id":
            field = replace(field, options=tuple(
                FieldOption(value=organization.id, label=organization.name)
                for organization in repository.list_organizations()
            ))
        form.append(FieldSpecResponse.model_validate(field))

    return ResourceSchemaResponse(
        navigation_icon=NAVIGATION_ICON,
        pages=PAGES,
        form=form,
        table=TableSchemaResponse(
            columns=[
                ColumnSpecResponse.model_validate(column)
                for column in build_column_list(principal, currency=settings.CURRENCY)
            ],
            actions=[ActionSpecResponse.model_validate(action) for action in build_row_actions()],
        ),
    )


# ============================================================================
# Product CRUD Endpoints
# ============================================================================

@router.get("", response_model=ProductListResponse)
def list_products(
    search: Optional[str] = Query(None, description="Case-insensitive search on product name"),
    sort: Optional[str] = Query(None, description=f"One of: {', '.join(SORT_COLUMNS)}"),
    direction: Literal["asc", "desc"] = Query("asc"),
    limit: int = Query(50, ge=1, le=100, description="Number of results per page"),
    offset: int = Query(0, ge=0, description="Number of results to skip"),
    principal: Principal = Depends(get_current_principal),
    scope: AccessScope = Depends(get_access_scope),
    repository: ProductRepository = Depends(get_product_repository),
):
    """
    List the products visible to the current principal.

    Each item carries the record actions the principal may take on it.

    Raises:
        HTTPException 400: If sort names a column that is not sortable for the caller
    """
    if sort is not None and sort not in sortable_columns(principal):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot sort by '{sort}'"
        )

    query = scope.scope_list(principal, repository.base_query())
    products, total = repository.fetch_page(
        query,
        search=search,
        sort=sort,
        descending=direction == "desc",
        limit=limit,
        offset=offset,
    )

    items = [
        ProductListItem.model_validate(product).model_copy(
            update={"actions": list(scope.permitted_actions(principal, product))}
        )
        for product in products
    ]

    return ProductListResponse(items=items, total=total, limit=limit, offset=offset)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    product_data: ProductCreate,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    scope: AccessScope = Depends(get_access_scope),
    repository: ProductRepository = Depends(get_product_repository),
):
    """
    Create a product.

    Super admins choose the organization; everyone else creates products in
    their own organization whatever the payload says.

    Raises:
        HTTPException 422: If a super admin omits organization_id or names an unknown one
    """
    organization_id = scope.owning_organization(principal, product_data.organization_id)

    if organization_id is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="organization_id is required"
        )
    if not repository.organization_exists(organization_id):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Organization not found"
        )

    values = product_data.model_dump(exclude={"organization_id"})
    values["organization_id"] = organization_id
    product = repository.create(values)

    log_from_request(
        db=db,
        request=request,
        organization_id=organization_id,
        action="PRODUCT_CREATED",
        actor_id=principal.user_id,
        entity_type="product",
        entity_id=product.id,
        metadata={"name": product.name},
    )
    db.commit()
    db.refresh(product)

    product_mutations_total.labels(operation="create").inc()
    logger.info(
        f"Product {product.id} created",
        extra={"product_id": product.id, "organization_id": organization_id, "user_id": principal.user_id}
    )

    return ProductResponse.model_validate(product)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: UUID,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    scope: AccessScope = Depends(get_access_scope),
    repository: ProductRepository = Depends(get_product_repository),
):
    """
    Get a single product.

    Raises:
        HTTPException 404: If the product is outside the caller's scope
        AuthorizationDenied: If the caller may not view it (403)
    """
    product = _load_in_scope(product_id, principal, scope, repository)
    _authorize(VIEW, product, principal, scope, request, db)

    return ProductResponse.model_validate(product)


@router.patch("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: UUID,
    product_data: ProductUpdate,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    scope: AccessScope = Depends(get_access_scope),
    repository: ProductRepository = Depends(get_product_repository),
):
    """
    Update a product. The owning organization never changes.

    Raises:
        HTTPException 404: If the product is outside the caller's scope
        AuthorizationDenied: If the caller may not edit it (403)
    """
    product = _load_in_scope(product_id, principal, scope, repository)
    _authorize(EDIT, product, principal, scope, request, db)

    update_data = product_data.model_dump(exclude_unset=True, exclude_none=True)
    repository.update(product, update_data)

    log_from_request(
        db=db,
        request=request,
        organization_id=product.organization_id,
        action="PRODUCT_UPDATED",
        actor_id=principal.user_id,
        entity_type="product",
        entity_id=product.id,
        metadata={"fields": sorted(update_data)},
    )
    db.commit()
    db.refresh(product)

    product_mutations_total.labels(operation="update").inc()

    return ProductResponse.model_validate(product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: UUID,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    scope: AccessScope = Depends(get_access_scope),
    repository: ProductRepository = Depends(get_product_repository),
):
    """
    Delete a product.

    Raises:
        HTTPException 404: If the product is outside the caller's scope
        AuthorizationDenied: If the caller may not delete it (403)
    """
    product = _load_in_scope(product_id, principal, scope, repository)
    _authorize(DELETE, product, principal, scope, request, db)

    log_from_request(
        db=db,
        request=request,
        organization_id=product.organization_id,
        action="PRODUCT_DELETED",
        actor_id=principal.user_id,
        entity_type="product",
        entity_id=product.id,
        metadata={"name": product.name},
    )
    repository.delete(product)
    db.commit()

    product_mutations_total.labels(operation="delete").inc()
    logger.info(
        f"Product {product_id} deleted",
        extra={"product_id": product_id, "user_id": principal.user_id}
    )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
