import logging

from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

# Set pymongo logger to WARNING to reduce noise from driver-level logs
logging.getLogger('pymongo').setLevel(logging.WARNING)

USERS_COLLECTION_NAME = 'users'
PROJECTS_COLLECTION_NAME = 'projects'
LIKES_COLLECTION_NAME = 'likes'

_client_cache: MongoClient | None = None


def reset_client() -> None:
    global _client_cache
    if _client_cache is not None:
        _client_cache.close()
    _client_cache = None


def get_mongodb_client(mongo_url: str | None, timeout_ms: int = 5000) -> MongoClient | None:
    """Get a MongoDB client, reusing the cached one while it answers pings.

    Args:
        mongo_url: Connection string, None when not configured
        timeout_ms: Bound for server selection, connect and socket operations

    Returns:
        MongoDB client or None if connection fails
    """
    global _client_cache

    if _client_cache is not None:
        try:
            _client_cache.admin.command('ping')
            return _client_cache
        except PyMongoError:
            _client_cache = None
            logger.debug("[MONGODB] Cached client failed ping, attempting reconnection...")

    if not mongo_url:
        logger.error("[MONGODB] MONGO_URL not configured.")
        return None

    try:
        client = MongoClient(
            mongo_url,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
            socketTimeoutMS=timeout_ms,
            maxPoolSize=10,
            minPoolSize=0,
            maxIdleTimeMS=30000,
            # Failures are surfaced to the caller, never retried
            retryWrites=False,
            retryReads=False,
        )
        client.admin.command('ping')
    except (ConnectionFailure, PyMongoError) as e:
        logger.error("[MONGODB] Connection failed", extra={"error": str(e)[:200]})
        return None

    _client_cache = client
    logger.info("[MONGODB] Connected successfully")
    return client
