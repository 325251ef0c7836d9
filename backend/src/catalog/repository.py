"""Persistence helpers for products.

The repository hands out an unscoped base query; callers narrow it with
AccessScope.scope_list before fetching anything a principal will see.
"""

from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import Select, select, func
from sqlalchemy.orm import Session

from models.organization import Organization
from models.product import Product

# Sort keys accepted by fetch_page -> column expression
SORT_COLUMNS = {
    "name": Product.name,
    "stock": Product.stock,
    "organization.name": Organization.name,
}


def _contains_pattern(term: str) -> str:
    """LIKE pattern matching `term` literally anywhere in the value."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ProductRepository:
    """Product queries and writes bound to one database session."""

    def __init__(self, db: Session):
        self.db = db

    def base_query(self) -> Select:
        return select(Product)

    def fetch_page(
        self,
        query: Select,
        search: Optional[str] = None,
        sort: Optional[str] = None,
        descending: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[List[Product], int]:
        """Apply search, ordering and pagination to a (scoped) query.

        Returns:
            Tuple of (products on the page, total matching rows)
        """
        if search:
            query = query.where(Product.name.ilike(_contains_pattern(search), escape="\\"))

        total = self.db.execute(
            select(func.count()).select_from(query.order_by(None).subquery())
        ).scalar_one()

        if sort:
            column = SORT_COLUMNS[sort]
            if sort == "organization.name":
                query = query.join(Organization, Product.organization_id == Organization.id)
            query = query.order_by(column.desc() if descending else column.asc(), Product.id)
        else:
            query = query.order_by(Product.created_at.desc(), Product.id)

        products = self.db.execute(query.limit(limit).offset(offset)).scalars().all()
        return list(products), total

    def find(self, query: Select, product_id: UUID) -> Optional[Product]:
        """Product with this id inside `query`, or None."""
        return self.db.execute(query.where(Product.id == product_id)).scalar_one_or_none()

    def organization_exists(self, organization_id: UUID) -> bool:
        return self.db.get(Organization, organization_id) is not None

    def list_organizations(self) -> Sequence[Organization]:
        return self.db.execute(select(Organization).order_by(Organization.name)).scalars().all()

    def create(self, values: Dict[str, Any]) -> Product:
        product = Product(**values)
        self.db.add(product)
        self.db.flush()
        return product

    def update(self, product: Product, values: Dict[str, Any]) -> Product:
        for field, value in values.items():
            setattr(product, field, value)
        self.db.flush()
        return product

    def delete(self, product: Product) -> None:
        self.db.delete(product)
        self.db.flush()
