"""MongoDB implementation of UserRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError, StoreUnavailableError
from domain.model.user import User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_unique_index

        try:
            return create_unique_index(self.collection, [('email', 1)], 'idx_users_email')
        except Exception as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            email=doc['email'],
            first_name=doc.get('first_name', ''),
            last_name=doc.get('last_name', ''),
            phone=doc.get('phone'),
            created_at=doc.get('created_at'),
            updated_at=doc.get('updated_at'),
            password_hash=doc.get('password_hash'),
        )

    def create(
        self,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        phone: int | float | None = None,
    ) -> User:
        now = datetime.now(timezone.utc)
        user_doc = {
            '_id': uuid.uuid4().hex,
            'email': email,
            'password_hash': password_hash,
            'first_name': first_name,
            'last_name': last_name,
            'created_at': now,
            'updated_at': now,
        }
        if phone is not None:
            user_doc['phone'] = phone

        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError as e:
            # Lost a registration race on the unique email index
            logger.warning("User creation failed: email already exists")
            raise DuplicateError("User already exists with this email") from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"error": str(e)})
            raise StoreUnavailableError("Failed to create user") from e

        logger.info("User created", extra={"userId": user_doc['_id']})
        return self._to_domain(user_doc)

    def get_by_email(self, email: str) -> User | None:
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"error": str(e)})
            raise StoreUnavailableError("Failed to get user") from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise StoreUnavailableError("Failed to get user") from e
        return self._to_domain(doc) if doc else None

    def update(
        self,
        user_id: str,
        first_name: str,
        last_name: str,
        phone: int | float | None,
    ) -> User | None:
        changes: dict = {
            '$set': {
                'first_name': first_name,
                'last_name': last_name,
                'updated_at': datetime.now(timezone.utc),
            }
        }
        if phone is None:
            changes['$unset'] = {'phone': ''}
        else:
            changes['$set']['phone'] = phone

        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id}, changes, return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
            raise StoreUnavailableError("Failed to update user") from e
        return self._to_domain(doc) if doc else None

    def delete(self, user_id: str) -> bool:
        try:
            result = self.collection.delete_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise StoreUnavailableError("Failed to delete user") from e
        return result.deleted_count > 0
