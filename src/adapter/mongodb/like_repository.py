"""MongoDB implementation of LikeRepository.

A unique compound index on (user_id, project_id) makes the store itself
reject duplicate likes, across processes.
"""

import uuid
from logging import getLogger

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb.connection import LIKES_COLLECTION_NAME
from domain.model.errors import AlreadyLikedError, StoreUnavailableError
from domain.model.like import Like

logger = getLogger(__name__)


class MongoLikeRepository:
    def __init__(self, db: Database):
        self.collection = db[LIKES_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for likes collection."""
        from adapter.mongodb.indexes import create_unique_index

        try:
            self.collection.create_index([('project_id', 1)], name='idx_likes_project')
            return create_unique_index(
                self.collection,
                [('user_id', 1), ('project_id', 1)],
                'idx_likes_user_project',
            )
        except Exception as e:
            logger.error("Failed to create likes indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> Like:
        return Like(
            id=doc['_id'],
            user_id=doc['user_id'],
            project_id=doc['project_id'],
            created_at=doc.get('created_at', ''),
        )

    def find(self, user_id: str, project_id: str) -> list[Like]:
        try:
            docs = self.collection.find({'user_id': user_id, 'project_id': project_id})
            return [self._to_domain(d) for d in docs]
        except PyMongoError as e:
            logger.error("Failed to find likes", extra={"userId": user_id, "projectId": project_id, "error": str(e)})
            raise StoreUnavailableError("Failed to find likes") from e

    def create(self, user_id: str, project_id: str, created_at: str) -> Like:
        doc = {
            '_id': uuid.uuid4().hex,
            'user_id': user_id,
            'project_id': project_id,
            'created_at': created_at,
        }
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError as e:
            raise AlreadyLikedError(user_id, project_id) from e
        except PyMongoError as e:
            logger.error("Failed to create like", extra={"userId": user_id, "projectId": project_id, "error": str(e)})
            raise StoreUnavailableError("Failed to create like") from e
        return self._to_domain(doc)

    def delete(self, like_id: str) -> bool:
        try:
            result = self.collection.delete_one({'_id': like_id})
        except PyMongoError as e:
            logger.error("Failed to delete like", extra={"likeId": like_id, "error": str(e)})
            raise StoreUnavailableError("Failed to delete like") from e
        return result.deleted_count > 0
