"""
Product service containing business logic layer
"""

from typing import Optional

from insurance_api.core.errors import BadRequestError, ConflictError, NotFoundError
from insurance_api.core.logger import logger
from insurance_api.models.product import Product, ProductLocation, normalize_price
from insurance_api.repositories.product import DUPLICATE_PRODUCT_MESSAGE, ProductRepository
from insurance_api.schemas.product import ProductCreate, ProductUpdate

INVALID_LOCATION_MESSAGE = "Invalid location value provided"
PRODUCT_NOT_FOUND_MESSAGE = "Product not found"
NO_PRODUCT_CODE_MESSAGE = "No product code provided"
NO_PRODUCT_LOCATION_MESSAGE = "No product location provided"
NO_CRITERIA_MESSAGE = "No product code and location provided"


class ProductService:
    """Service layer for product business logic"""

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    @staticmethod
    def _validate_location(location: Optional[str]) -> None:
        if location is not None and not ProductLocation.is_valid(location):
            raise BadRequestError(INVALID_LOCATION_MESSAGE, details={"allowed": ProductLocation.values()})

    async def create(self, product_data: ProductCreate) -> Product:
        """
        Create a product.

        Raises:
            BadRequestError: location is not one of the supported markets
            ConflictError: a product already uses this code in this location
        """
        if not ProductLocation.is_valid(product_data.location):
            raise BadRequestError(INVALID_LOCATION_MESSAGE, details={"allowed": ProductLocation.values()})

        # Fast path only, the unique index is authoritative
        existing = await self.repository.find_one(product_data.product_code, product_data.location)
        if existing:
            raise ConflictError(DUPLICATE_PRODUCT_MESSAGE)

        product = await self.repository.create(
            product_code=product_data.product_code,
            location=product_data.location,
            price=normalize_price(product_data.price),
            product_desc=product_data.product_desc,
        )

        logger.info(
            f"Created product {product.id}",
            metadata={
                "event": "create_product",
                "product_id": product.id,
                "product_code": product.product_code,
                "location": product.location.value,
            }
        )

        return product

    async def find_one(self, product_code: Optional[int] = None, location: Optional[str] = None) -> Product:
        """Get the first product matching a product code and/or location"""
        if product_code is None and location is None:
            raise BadRequestError(NO_CRITERIA_MESSAGE)

        product = await self.repository.find_one(product_code, location)
        if not product:
            raise NotFoundError(PRODUCT_NOT_FOUND_MESSAGE)

        logger.info(
            f"Fetched product {product.id}",
            metadata={"event": "get_product", "product_id": product.id}
        )

        return product

    async def update(
        self,
        product_code: Optional[int],
        current_location: Optional[str],
        product_data: ProductUpdate,
    ) -> Product:
        """
        Update the product identified by (product_code, current_location).

        When current_location is omitted the location in the patch is used
        for the lookup, so a patch that moves a product cannot find it.
        """
        if product_code is None:
            raise BadRequestError(NO_PRODUCT_CODE_MESSAGE)

        self._validate_location(current_location)
        self._validate_location(product_data.location)

        lookup_location = current_location if current_location is not None else product_data.location
        if lookup_location is None:
            raise BadRequestError(NO_PRODUCT_LOCATION_MESSAGE)

        product = await self.repository.find_one(product_code, lookup_location)
        if not product:
            raise NotFoundError(PRODUCT_NOT_FOUND_MESSAGE)

        changes = product_data.model_dump(exclude_unset=True)
        if changes.get("price") is not None:
            changes["price"] = normalize_price(changes["price"])
        else:
            changes.pop("price", None)
        if changes.get("location") is None:
            changes.pop("location", None)

        updated = Product(**{**product.model_dump(), **changes})

        if updated.location != product.location:
            clash = await self.repository.find_one(product_code, updated.location.value)
            if clash:
                raise ConflictError(DUPLICATE_PRODUCT_MESSAGE)

        saved = await self.repository.save(updated)
        if not saved:
            raise NotFoundError(PRODUCT_NOT_FOUND_MESSAGE)

        logger.info(
            f"Updated product {saved.id}",
            metadata={
                "event": "update_product",
                "product_id": saved.id,
                "changes": sorted(changes),
            }
        )

        return saved

    async def remove(self, product_code: Optional[int], location: Optional[str] = None) -> int:
        """
        Delete products by code. Without a location every product sharing
        the code is removed.
        """
        if product_code is None:
            raise BadRequestError(NO_PRODUCT_CODE_MESSAGE)

        self._validate_location(location)

        deleted = await self.repository.delete(product_code, location)
        if deleted == 0:
            raise NotFoundError(PRODUCT_NOT_FOUND_MESSAGE)

        logger.info(
            f"Deleted {deleted} product(s) with code {product_code}",
            metadata={
                "event": "delete_product",
                "product_code": product_code,
                "location": location,
                "deleted_count": deleted,
            }
        )

        return deleted
