from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, ConfigurationError
import os

from faqbot.config import get_mongo_db_name
from faqbot.constants import (
    CONVERSATIONS_COLLECTION,
    FAQS_COLLECTION,
    FEEDBACK_COLLECTION,
    MONGODB_SERVER_SELECTION_TIMEOUT_MS,
)
from faqbot.logger import logger


def connect(mongo_url: str | None = None) -> Database:
    """
    Open the MongoDB connection and return the bot database.
    Raises if the server cannot be reached.
    """
    try:
        mongo_url = mongo_url or os.environ.get("MONGO_URL")
        if not mongo_url:
            raise ValueError("MONGO_URL environment variable is not set")

        client = MongoClient(mongo_url, serverSelectionTimeoutMS=MONGODB_SERVER_SELECTION_TIMEOUT_MS)
        # Test the connection
        client.admin.command('ping')
        db = client[get_mongo_db_name()]

        try:
            db[FAQS_COLLECTION].create_index("is_active")
            db[CONVERSATIONS_COLLECTION].create_index("slack_user_id")
            db[FEEDBACK_COLLECTION].create_index("slack_user_id")
            logger.debug("MongoDB indexes created/verified")
        except Exception as e:
            logger.warning("Could not create MongoDB indexes: %s", e)

        logger.info("MongoDB connection established successfully")
        return db
    except (ConnectionFailure, ConfigurationError, ValueError) as e:
        logger.critical("Failed to connect to MongoDB: %s", e)
        raise
    except Exception as e:
        logger.critical("Unexpected error connecting to MongoDB: %s", e)
        raise
