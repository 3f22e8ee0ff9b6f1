"""MongoDB index management.

Uniqueness of emails, project external ids and (user, project) likes is
enforced by unique indexes. Building one fails when the collection already
holds duplicates; that is reported instead of aborting startup.
"""

from logging import getLogger

from pymongo.errors import OperationFailure

logger = getLogger(__name__)

# Server error code for a duplicate key, also raised by unique index builds
DUPLICATE_KEY_CODE = 11000


def create_unique_index(collection, keys: list, name: str) -> bool:
    """Create a unique index, returning False when existing duplicates block it.

    Other server errors propagate.
    """
    try:
        collection.create_index(keys, name=name, unique=True)
        return True
    except OperationFailure as e:
        if e.code != DUPLICATE_KEY_CODE:
            raise
        logger.error(
            "Existing duplicate documents block unique index",
            extra={"collection": collection.name, "index": name, "error": str(e)[:200]},
        )
        return False


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.like_repository import MongoLikeRepository
    from adapter.mongodb.project_repository import MongoProjectRepository
    from adapter.mongodb.user_repository import MongoUserRepository

    results = [
        MongoUserRepository(db).ensure_indexes(),
        MongoProjectRepository(db).ensure_indexes(),
        MongoLikeRepository(db).ensure_indexes(),
    ]
    return all(results)
