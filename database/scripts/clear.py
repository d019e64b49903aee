#!/usr/bin/env python3

import asyncio
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from dotenv import load_dotenv

load_dotenv()

from insurance_api.core.config import config
from insurance_api.db.mongodb import close_mongo_connection, get_database


async def main():
    operation = sys.argv[1] if len(sys.argv) > 1 else "clear"

    try:
        print("=" * 50)
        print("Insurance Product Database Cleaner")
        print("=" * 50)

        database = await get_database()
        collection = database[config.product_collection]

        if operation == "drop":
            await collection.drop()
            print(f"Dropped collection: {config.product_collection}")
        else:
            result = await collection.delete_many({})
            print(f"Deleted {result.deleted_count} documents from '{config.product_collection}'")

        print(f"Product database {operation} completed!")
    except Exception as error:
        print(f"Product database {operation} failed: {error}")
        sys.exit(1)
    finally:
        await close_mongo_connection()


if __name__ == "__main__":
    asyncio.run(main())
