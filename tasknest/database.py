"""
TASKNEST API - Database Module

MongoDB connection management using Motor (async driver).
"""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from tasknest.config import settings

logger = logging.getLogger(__name__)


class Database:
    """MongoDB database connection manager."""

    client: AsyncIOMotorClient | None = None
    db: AsyncIOMotorDatabase | None = None

    async def connect(self) -> None:
        """Connect to MongoDB."""
        # tz_aware so stored datetimes come back comparable with UTC "now"
        self.client = AsyncIOMotorClient(settings.MONGODB_URI, tz_aware=True)
        self.db = self.client[settings.MONGODB_DATABASE]
        logger.info(f"Connected to MongoDB database '{settings.MONGODB_DATABASE}'")

    async def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        if self.client:
            self.client.close()
            self.client = None
            self.db = None

    def get_database(self) -> AsyncIOMotorDatabase:
        """Get the database instance."""
        if self.db is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self.db


# Singleton database instance
database = Database()


async def get_database() -> AsyncIOMotorDatabase:
    """Dependency to get the database instance."""
    return database.get_database()


async def ping(db: AsyncIOMotorDatabase) -> None:
    """Round-trip to the server; raises if it is unreachable."""
    await db.command("ping")
