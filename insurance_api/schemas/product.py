"""
API schemas for Product endpoints following FastAPI best practices
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from insurance_api.models.product import MAX_PRICE, Product, ProductLocation


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductCreate(_CamelModel):
    """Schema for creating a new product"""
    product_code: int = Field(..., ge=0)
    product_desc: Optional[str] = Field(None, max_length=255)
    # Checked against ProductLocation by the service
    location: str
    price: Decimal = Field(..., ge=0, le=MAX_PRICE)


class ProductUpdate(_CamelModel):
    """Schema for updating an existing product"""
    product_desc: Optional[str] = Field(None, max_length=255)
    location: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, le=MAX_PRICE)


class ProductResponse(_CamelModel):
    """Schema for product responses, price rendered with two decimals"""
    id: str
    product_code: int
    product_desc: Optional[str] = None
    location: ProductLocation
    price: Decimal

    @field_serializer("price")
    def format_price(self, price: Decimal) -> str:
        return f"{price:.2f}"

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(**product.model_dump())
