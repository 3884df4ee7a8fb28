from contextlib import asynccontextmanager
import logging
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import errors
from config import DATABASE_URL, DATABASE_NAME, REVIEW_COLLECTION

logger = logging.getLogger(__name__)
db_config = {
    "db_url": DATABASE_URL,
    "db_name": DATABASE_NAME,
    "review_collection": REVIEW_COLLECTION,
}


class StoreConfigurationError(RuntimeError):
    """The store is unusable at startup; the server must not come up."""


async def connect():
    if not db_config["db_url"]:
        raise StoreConfigurationError("Error: MONGODB_URI not found in environment variables.")
    try:
        client = AsyncIOMotorClient(
            db_config["db_url"], serverSelectionTimeoutMS=5000, tz_aware=True
        )
        await client.admin.command("ping")
        return client
    except errors.ConfigurationError as err:
        raise StoreConfigurationError(f"Error: Invalid MongoDB configuration: {err}") from err
    except errors.ConnectionFailure as err:
        raise StoreConfigurationError(f"Error: Unable to connect to the MongoDB server: {err}") from err
    except errors.OperationFailure as err:
        raise StoreConfigurationError(f"Authentication or command error: {err}") from err


@asynccontextmanager
async def lifespan(app):
    """Async context manager for MongoDB connection lifecycle"""
    try:
        connection = await connect()
        database = connection.get_default_database(db_config["db_name"])
        app.state.mongo_client = connection
        app.state.review_collection = database[db_config["review_collection"]]
        logger.info("✅ Successfully connected to MongoDB (database=%s).", database.name)
    except Exception as e:
        logger.error(f"❌ MongoDB connection failed at startup: {e}")
        raise

    yield

    mongo_client = getattr(app.state, "mongo_client", None)
    if mongo_client:
        mongo_client.close()
        logger.info("🔌 MongoDB connection closed at shutdown.")
    logger.info("🚪 Shutting down FastAPI app.")
