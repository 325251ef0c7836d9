"""Pydantic schemas for the product admin resource"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from .fields import ColumnKind, FieldComponent
from .resource import NAME_MAX_LENGTH


class ProductBase(BaseModel):
    """Fields shared by create and response payloads"""
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    description: str = Field(..., min_length=1)
    image: str = Field(..., min_length=1, max_length=2048, description="Stored image path or URL")
    price: Decimal = Field(..., max_digits=12, decimal_places=2)
    available_date: date
    stock: int = 0


class ProductCreate(ProductBase):
    """Schema for creating a product.

    organization_id is only honoured for super admins; everyone else's
    products belong to their own organization.
    """
    organization_id: Optional[UUID] = None


class ProductUpdate(BaseModel):
    """Schema for updating a product.

    The owning organization cannot be changed, so organization_id is not
    accepted here.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    description: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = Field(None, min_length=1, max_length=2048)
    price: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)
    available_date: Optional[date] = None
    stock: Optional[int] = None


class ProductResponse(ProductBase):
    """Schema for product response"""
    id: UUID
    organization_id: UUID
    organization_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProductListItem(ProductResponse):
    """A product row with the actions the caller may take on it"""
    actions: List[str] = Field(default_factory=list)


class ProductListResponse(BaseModel):
    items: List[ProductListItem]
    total: int
    limit: int
    offset: int


class FieldOptionResponse(BaseModel):
    value: Any
    label: str

    class Config:
        from_attributes = True


class FieldSpecResponse(BaseModel):
    name: str
    component: FieldComponent
    required: bool
    editable: bool
    default: Any = None
    max_length: Optional[int] = None
    numeric: bool = False
    prefix: Optional[str] = None
    input_mode: Optional[str] = None
    image_only: bool = False
    relationship: Optional[List[str]] = None
    options: List[FieldOptionResponse] = Field(default_factory=list)

    class Config:
        from_attributes = True


class ColumnSpecResponse(BaseModel):
    name: str
    kind: ColumnKind
    sortable: bool
    searchable: bool
    visible: bool
    format: Optional[str] = None
    currency: Optional[str] = None

    class Config:
        from_attributes = True


class ActionSpecResponse(BaseModel):
    name: str
    label: str

    class Config:
        from_attributes = True


class TableSchemaResponse(BaseModel):
    columns: List[ColumnSpecResponse]
    actions: List[ActionSpecResponse]
    filters: List[Dict[str, Any]] = Field(default_factory=list)


class ResourceSchemaResponse(BaseModel):
    """Everything a UI needs to render the product admin for the caller"""
    model: Literal["product"] = "product"
    navigation_icon: str
    pages: Dict[str, str]
    form: List[FieldSpecResponse]
    table: TableSchemaResponse
