"""MongoDB database connection using Motor (async driver)"""

import logging

import pymongo
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from app.config import settings

logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "categories", "products", "orders")


class Database:
    """Database connection manager"""
    client: AsyncIOMotorClient = None
    db: AsyncIOMotorDatabase = None


database = Database()


async def connect_to_mongo():
    """Connect to MongoDB on application startup"""
    database.client = AsyncIOMotorClient(settings.mongodb_url)
    database.db = database.client[settings.mongodb_db_name]
    await ensure_indexes(database.db)
    logger.info(f"Connected to MongoDB: {settings.mongodb_db_name}")


async def close_mongo_connection():
    """Close MongoDB connection on application shutdown"""
    if database.client:
        database.client.close()
        database.client = None
        database.db = None
        logger.info("Closed MongoDB connection")


async def ensure_indexes(db: AsyncIOMotorDatabase):
    """Create the unique indexes the data model relies on"""
    await db.users.create_index("email", unique=True)
    await db.categories.create_index("name", unique=True)
    await db.categories.create_index("slug", unique=True)
    await db.products.create_index(
        [("name", pymongo.ASCENDING), ("category", pymongo.ASCENDING)],
        unique=True,
    )
    await db.products.create_index("slug")
    await db.orders.create_index([("buyer", pymongo.ASCENDING), ("created_at", pymongo.DESCENDING)])


async def reset_database(db: AsyncIOMotorDatabase):
    """Delete every document from the application collections (test utility)"""
    for name in COLLECTIONS:
        await db[name].delete_many({})
    logger.debug("Database reset complete")


def get_database() -> AsyncIOMotorDatabase:
    """Dependency to get database instance"""
    return database.db
