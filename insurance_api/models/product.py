"""
Product domain model
"""

from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


PRICE_QUANTUM = Decimal("0.01")
MAX_PRICE = Decimal("99999999.99")  # decimal(10,2)


class ProductLocation(str, Enum):
    """Markets a product can be sold in"""
    WEST_MALAYSIA = "West Malaysia"
    EAST_MALAYSIA = "East Malaysia"

    @classmethod
    def values(cls) -> List[str]:
        return [location.value for location in cls]

    @classmethod
    def is_valid(cls, value: Optional[str]) -> bool:
        return value in cls.values()


def normalize_price(value: Union[Decimal, float, int, str]) -> Decimal:
    """Round a price to exactly two decimal places"""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)


class Product(BaseModel):
    """A persisted insurance product"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    product_code: int = Field(..., ge=0)
    product_desc: Optional[str] = None
    location: ProductLocation
    price: Decimal

    @property
    def identity(self) -> tuple:
        """The (product code, location) pair that is unique across products"""
        return (self.product_code, self.location.value)
