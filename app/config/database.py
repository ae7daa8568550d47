"""
MongoDB connection for the form collection
"""
import logging
from motor.motor_asyncio import AsyncIOMotorClient

from app.config.settings import settings

logger = logging.getLogger(__name__)

class DatabaseConfig:
    """Owns the motor client between startup and shutdown"""

    def __init__(self, uri: str = settings.MONGO_URI, name: str = settings.DATABASE_NAME):
        self.uri = uri
        self.name = name
        self.client = None
        self.database = None

    async def connect_db(self):
        self.client = AsyncIOMotorClient(self.uri)
        self.database = self.client[self.name]
        try:
            await self.client.admin.command('ping')
        except Exception as e:
            logger.error("❌ Error connecting to MongoDB: %s", e)
            raise
        logger.info("✅ Connected to MongoDB: %s", self.name)

    async def close_db(self):
        if self.client:
            self.client.close()
            logger.info("✅ MongoDB connection closed")

    def get_collection(self, collection_name: str):
        if self.database is None:
            raise RuntimeError("Database not connected")
        return self.database[collection_name]

db_config = DatabaseConfig()

# Collection names
class Collections:
    FORMS = "forms"
