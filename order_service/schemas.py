from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .models import Order
from .pagination import Page


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class CreateOrderRequest(CamelModel):
    product_id: int = Field(..., description="Referenced product ID")
    quantity: int = Field(..., description="Number of units ordered")
    price: Decimal = Field(..., description="Order price, two decimal places")


class ProductData(CamelModel):
    id: int = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    description: Optional[str] = Field(None, description="Product description")


class OrderResponse(CamelModel):
    id: int = Field(..., description="Order ID")
    product: ProductData = Field(..., description="Ordered product")
    quantity: int = Field(..., description="Number of units ordered")
    price: Decimal = Field(..., description="Order price")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")
    updated_at: datetime = Field(..., description="Last update timestamp (UTC)")


class PageResponse(CamelModel):
    content: List[OrderResponse] = Field(..., description="Orders on this page")
    total_elements: int = Field(..., description="Total number of orders")
    total_pages: int = Field(..., description="Total number of pages")
    first: bool = Field(..., description="Whether this is the first page")
    last: bool = Field(..., description="Whether this is the last page")
    number: int = Field(..., description="Zero-based page index")
    size: int = Field(..., description="Requested page size")
    number_of_elements: int = Field(..., description="Orders on this page")
    empty: bool = Field(..., description="Whether the page has no orders")

    @classmethod
    def from_page(cls, page: Page[Order]) -> "PageResponse":
        return cls(
            content=[OrderResponse.model_validate(o) for o in page.content],
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            first=page.is_first,
            last=page.is_last,
            number=page.page_index,
            size=page.page_size,
            number_of_elements=page.number_of_elements,
            empty=page.is_empty,
        )


class HealthResponse(BaseModel):
    status: str = Field(..., description="Service health status")


class ErrorResponse(BaseModel):
    status: int = Field(..., description="HTTP status code")
    message: str = Field(..., description="Error message")
    error: str = Field(..., description="Error category")
    timestamp: datetime = Field(..., description="Error timestamp")
    path: str = Field(..., description="Request path")
