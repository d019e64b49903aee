#!/usr/bin/env python3

import asyncio
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from insurance_api.core.errors import ConflictError
from insurance_api.db.mongodb import close_mongo_connection, connect_to_mongo, get_product_collection
from insurance_api.repositories.product import ProductRepository
from insurance_api.schemas.product import ProductCreate
from insurance_api.services.product import ProductService


SAMPLE_PRODUCTS = [
    {"productCode": 1000, "productDesc": "Sedan", "location": "West Malaysia", "price": 300},
    {"productCode": 1000, "productDesc": "Sedan", "location": "East Malaysia", "price": 450},
    {"productCode": 2000, "productDesc": "Motorcycle", "location": "West Malaysia", "price": 120.5},
    {"productCode": 3000, "productDesc": "Commercial van", "location": "East Malaysia", "price": 780.25},
]


class ProductDatabaseSeeder:
    async def connect(self):
        """Establish MongoDB connection and make sure indexes exist"""
        await connect_to_mongo()
        self.repository = ProductRepository(await get_product_collection())
        await self.repository.ensure_indexes()
        self.service = ProductService(self.repository)

    async def seed_products(self):
        """Create sample products, skipping ones that already exist"""
        created = 0
        for data in SAMPLE_PRODUCTS:
            try:
                product = await self.service.create(ProductCreate(**data))
                created += 1
                print(f"Created product {product.product_code} ({product.location.value}) at {product.price}")
            except ConflictError:
                print(f"Product {data['productCode']} ({data['location']}) already exists, skipping")
        print(f"Seeded {created} products")

    async def close(self):
        await close_mongo_connection()


async def main():
    seeder = ProductDatabaseSeeder()
    try:
        print("=" * 50)
        print("Insurance Product Database Seeder")
        print("=" * 50)

        await seeder.connect()
        await seeder.seed_products()
    except Exception as error:
        print(f"Product database seeding failed: {error}")
        sys.exit(1)
    finally:
        await seeder.close()


if __name__ == "__main__":
    asyncio.run(main())
