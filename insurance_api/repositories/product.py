"""
Product repository for data access layer following Repository pattern
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from bson import Decimal128, ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from insurance_api.core.errors import ConflictError, ErrorResponse
from insurance_api.core.logger import logger
from insurance_api.models.product import Product, normalize_price

DUPLICATE_PRODUCT_MESSAGE = "Product with this location and product code already exists"
UNIQUE_INDEX_NAME = "uq_product_code_location"


class ProductRepository:
    """Repository for product data access operations"""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    @staticmethod
    def build_filter(product_code: Optional[int] = None, location: Optional[str] = None) -> Dict[str, Any]:
        """Build a query from whichever identifying fields were supplied"""
        query = {}
        if product_code is not None:
            query["product_code"] = product_code
        if location is not None:
            query["location"] = location
        return query

    @staticmethod
    def _doc_to_product(doc: dict) -> Optional[Product]:
        """Convert MongoDB document to Product model"""
        if not doc:
            return None

        price = doc.get("price")
        if isinstance(price, Decimal128):
            price = price.to_decimal()

        return Product(
            id=str(doc["_id"]),
            product_code=doc["product_code"],
            product_desc=doc.get("product_desc"),
            location=doc["location"],
            price=normalize_price(price),
        )

    @staticmethod
    def _to_document(product_code: int, location: str, price: Decimal, product_desc: Optional[str]) -> dict:
        return {
            "product_code": product_code,
            "product_desc": product_desc,
            "location": location,
            "price": Decimal128(normalize_price(price)),
        }

    async def ensure_indexes(self) -> None:
        """Create the unique (product_code, location) index"""
        try:
            await self.collection.create_index(
                [("product_code", ASCENDING), ("location", ASCENDING)],
                unique=True,
                name=UNIQUE_INDEX_NAME,
            )
            logger.info(
                "Product indexes ensured",
                metadata={"event": "indexes_ensured", "index": UNIQUE_INDEX_NAME}
            )
        except PyMongoError as e:
            logger.error(f"MongoDB error creating product indexes: {e}")
            raise ErrorResponse("Database error during index creation", status_code=503)

    async def find_one(self, product_code: Optional[int] = None, location: Optional[str] = None) -> Optional[Product]:
        """Find the first product matching the supplied fields"""
        try:
            doc = await self.collection.find_one(self.build_filter(product_code, location))
            return self._doc_to_product(doc)

        except PyMongoError as e:
            logger.error(f"MongoDB error getting product: {e}")
            raise ErrorResponse("Database error during product retrieval", status_code=503)

    async def create(
        self,
        product_code: int,
        location: str,
        price: Decimal,
        product_desc: Optional[str] = None,
    ) -> Product:
        """Insert a new product"""
        doc = self._to_document(product_code, location, price, product_desc)
        try:
            result = await self.collection.insert_one(doc)

        except DuplicateKeyError:
            logger.warning(
                "Duplicate product rejected by unique index",
                metadata={"event": "duplicate_product", "product_code": product_code, "location": location}
            )
            raise ConflictError(DUPLICATE_PRODUCT_MESSAGE)
        except PyMongoError as e:
            logger.error(f"MongoDB error creating product: {e}")
            raise ErrorResponse("Database error during product creation", status_code=503)

        doc["_id"] = result.inserted_id
        return self._doc_to_product(doc)

    async def save(self, product: Product) -> Optional[Product]:
        """Persist a modified product, returns None if it no longer exists"""
        if not ObjectId.is_valid(product.id):
            return None

        doc = self._to_document(
            product.product_code, product.location.value, product.price, product.product_desc
        )
        try:
            result = await self.collection.replace_one({"_id": ObjectId(product.id)}, doc)

        except DuplicateKeyError:
            logger.warning(
                "Duplicate product rejected by unique index",
                metadata={"event": "duplicate_product", "product_id": product.id}
            )
            raise ConflictError(DUPLICATE_PRODUCT_MESSAGE)
        except PyMongoError as e:
            logger.error(f"MongoDB error updating product: {e}")
            raise ErrorResponse("Database error during product update", status_code=503)

        if result.matched_count == 0:
            return None

        doc["_id"] = ObjectId(product.id)
        return self._doc_to_product(doc)

    async def delete(self, product_code: int, location: Optional[str] = None) -> int:
        """Delete every product matching the filter, returns the number removed"""
        try:
            result = await self.collection.delete_many(self.build_filter(product_code, location))
            return result.deleted_count

        except PyMongoError as e:
            logger.error(f"MongoDB error deleting product: {e}")
            raise ErrorResponse("Database error during product deletion", status_code=503)
