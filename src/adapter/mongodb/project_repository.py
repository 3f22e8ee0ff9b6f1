"""MongoDB implementation of ProjectRepository.

Like counts are derived from the likes collection, never stored. Project
ids are exposed as strings whatever the stored _id type.
"""

import re
from logging import getLogger

from bson import ObjectId
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import LIKES_COLLECTION_NAME, PROJECTS_COLLECTION_NAME
from domain.model.errors import StoreUnavailableError
from domain.model.project import Project

logger = getLogger(__name__)


class MongoProjectRepository:
    def __init__(self, db: Database):
        self.collection = db[PROJECTS_COLLECTION_NAME]
        self.likes = db[LIKES_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for projects collection."""
        from adapter.mongodb.indexes import create_unique_index

        try:
            return create_unique_index(self.collection, [('external_id', 1)], 'idx_projects_external_id')
        except Exception as e:
            logger.error("Failed to create projects indexes", extra={"error": str(e)})
            return False

    def _like_counts(self, project_ids: list[str]) -> dict[str, int]:
        pipeline = [
            {'$match': {'project_id': {'$in': project_ids}}},
            {'$group': {'_id': '$project_id', 'count': {'$sum': 1}}},
        ]
        return {row['_id']: row['count'] for row in self.likes.aggregate(pipeline)}

    def _to_domain(self, doc: dict, likes: int) -> Project:
        return Project(
            id=str(doc['_id']),
            external_id=doc.get('external_id'),
            title=doc.get('title', ''),
            description=doc.get('description', ''),
            created_at=doc.get('created_at'),
            likes=likes,
            picture=doc.get('picture'),
        )

    def _find(self, query: dict) -> list[Project]:
        try:
            docs = list(self.collection.find(query).sort('external_id', 1))
            counts = self._like_counts([str(d.get('external_id')) for d in docs])
        except PyMongoError as e:
            logger.error("Failed to fetch projects", extra={"error": str(e)})
            raise StoreUnavailableError("Failed to fetch projects") from e
        return [self._to_domain(d, counts.get(str(d.get('external_id')), 0)) for d in docs]

    def list_all(self) -> list[Project]:
        return self._find({})

    def get_by_id(self, project_id: str) -> Project | None:
        # Seeded projects may carry ObjectId or plain string ids
        if ObjectId.is_valid(project_id):
            query = {'_id': {'$in': [ObjectId(project_id), project_id]}}
        else:
            query = {'_id': project_id}
        projects = self._find(query)
        return projects[0] if projects else None

    def search(self, keywords: str) -> list[Project]:
        pattern = {'$regex': re.escape(keywords), '$options': 'i'}
        return self._find({'$or': [{'title': pattern}, {'description': pattern}]})
