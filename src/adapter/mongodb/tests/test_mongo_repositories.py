"""Tests for the MongoDB repositories against mocked collections."""

import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock

from bson import ObjectId
from pymongo.errors import DuplicateKeyError, OperationFailure, PyMongoError

from adapter.mongodb.connection import LIKES_COLLECTION_NAME, PROJECTS_COLLECTION_NAME, USERS_COLLECTION_NAME
from adapter.mongodb.indexes import DUPLICATE_KEY_CODE, create_unique_index, ensure_all_indexes
from adapter.mongodb.like_repository import MongoLikeRepository
from adapter.mongodb.project_repository import MongoProjectRepository
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import AlreadyLikedError, DuplicateError, StoreUnavailableError


def make_db() -> tuple[MagicMock, dict[str, MagicMock]]:
    collections = {
        USERS_COLLECTION_NAME: MagicMock(),
        PROJECTS_COLLECTION_NAME: MagicMock(),
        LIKES_COLLECTION_NAME: MagicMock(),
    }
    db = MagicMock()
    db.__getitem__.side_effect = collections.__getitem__
    return db, collections


class TestMongoUserRepository(unittest.TestCase):

    def setUp(self):
        db, collections = make_db()
        self.users = collections[USERS_COLLECTION_NAME]
        self.repo = MongoUserRepository(db)

    def test_create_inserts_document(self):
        user = self.repo.create('a@x.com', 'hash', 'A', 'B', phone=612345678)

        doc = self.users.insert_one.call_args[0][0]
        self.assertEqual(doc['email'], 'a@x.com')
        self.assertEqual(doc['phone'], 612345678)
        self.assertEqual(user.id, doc['_id'])
        self.assertEqual(user.password_hash, 'hash')

    def test_create_without_phone_omits_field(self):
        self.repo.create('a@x.com', 'hash', 'A', 'B')
        self.assertNotIn('phone', self.users.insert_one.call_args[0][0])

    def test_create_duplicate_email_raises_duplicate(self):
        self.users.insert_one.side_effect = DuplicateKeyError('E11000 duplicate key')

        with self.assertRaises(DuplicateError):
            self.repo.create('a@x.com', 'hash', 'A', 'B')

    def test_get_by_email_maps_document(self):
        now = datetime.now(timezone.utc)
        self.users.find_one.return_value = {
            '_id': 'u1', 'email': 'a@x.com', 'password_hash': 'hash',
            'first_name': 'A', 'last_name': 'B', 'created_at': now, 'updated_at': now,
        }

        user = self.repo.get_by_email('a@x.com')

        self.assertEqual(user.id, 'u1')
        self.assertIsNone(user.phone)
        self.users.find_one.assert_called_once_with({'email': 'a@x.com'})

    def test_get_by_id_not_found(self):
        self.users.find_one.return_value = None
        self.assertIsNone(self.repo.get_by_id('u1'))

    def test_read_failure_raises_store_unavailable(self):
        self.users.find_one.side_effect = PyMongoError('down')

        with self.assertRaises(StoreUnavailableError):
            self.repo.get_by_id('u1')

    def test_update_unsets_cleared_phone(self):
        self.users.find_one_and_update.return_value = {
            '_id': 'u1', 'email': 'a@x.com', 'first_name': 'C', 'last_name': 'D',
        }

        user = self.repo.update('u1', 'C', 'D', None)

        changes = self.users.find_one_and_update.call_args[0][1]
        self.assertEqual(changes['$unset'], {'phone': ''})
        self.assertEqual(changes['$set']['first_name'], 'C')
        self.assertEqual(user.first_name, 'C')

    def test_delete_reports_deleted_count(self):
        self.users.delete_one.return_value = MagicMock(deleted_count=1)
        self.assertTrue(self.repo.delete('u1'))

        self.users.delete_one.return_value = MagicMock(deleted_count=0)
        self.assertFalse(self.repo.delete('u1'))

    def test_ensure_indexes_creates_unique_email_index(self):
        self.assertTrue(self.repo.ensure_indexes())
        self.users.create_index.assert_called_once_with([('email', 1)], name='idx_users_email', unique=True)


class TestMongoProjectRepository(unittest.TestCase):

    def setUp(self):
        db, collections = make_db()
        self.projects = collections[PROJECTS_COLLECTION_NAME]
        self.likes = collections[LIKES_COLLECTION_NAME]
        self.repo = MongoProjectRepository(db)

    def test_list_all_derives_like_counts(self):
        self.projects.find.return_value.sort.return_value = [
            {'_id': 'p1', 'external_id': 1, 'title': 'One'},
            {'_id': 'p2', 'external_id': 2, 'title': 'Two'},
        ]
        self.likes.aggregate.return_value = [{'_id': '2', 'count': 5}]

        projects = self.repo.list_all()

        self.assertEqual([(p.id, p.likes) for p in projects], [('p1', 0), ('p2', 5)])

    def test_search_uses_escaped_case_insensitive_regex(self):
        self.projects.find.return_value.sort.return_value = []
        self.likes.aggregate.return_value = []

        self.repo.search('c++')

        query = self.projects.find.call_args[0][0]
        self.assertEqual(query['$or'][0], {'title': {'$regex': r'c\+\+', '$options': 'i'}})

    def test_failure_raises_store_unavailable(self):
        self.projects.find.side_effect = PyMongoError('down')

        with self.assertRaises(StoreUnavailableError):
            self.repo.get_by_id('p1')

    def test_object_ids_are_exposed_as_strings(self):
        oid = ObjectId()
        self.projects.find.return_value.sort.return_value = [{'_id': oid, 'external_id': 1, 'title': 'T'}]
        self.likes.aggregate.return_value = []

        projects = self.repo.list_all()

        self.assertEqual(projects[0].id, str(oid))

    def test_get_by_id_matches_object_id_or_string(self):
        oid = ObjectId()
        self.projects.find.return_value.sort.return_value = [{'_id': oid, 'external_id': 1, 'title': 'T'}]
        self.likes.aggregate.return_value = []

        project = self.repo.get_by_id(str(oid))

        self.assertEqual(project.id, str(oid))
        self.projects.find.assert_called_once_with({'_id': {'$in': [oid, str(oid)]}})

    def test_get_by_id_with_plain_string_id(self):
        self.projects.find.return_value.sort.return_value = [{'_id': 'recA', 'external_id': 1, 'title': 'T'}]
        self.likes.aggregate.return_value = []

        project = self.repo.get_by_id('recA')

        self.assertEqual(project.id, 'recA')
        self.projects.find.assert_called_once_with({'_id': 'recA'})

    def test_ensure_indexes_creates_unique_external_id_index(self):
        self.assertTrue(self.repo.ensure_indexes())
        self.projects.create_index.assert_called_once_with(
            [('external_id', 1)], name='idx_projects_external_id', unique=True,
        )


class TestMongoLikeRepository(unittest.TestCase):

    def setUp(self):
        db, collections = make_db()
        self.likes = collections[LIKES_COLLECTION_NAME]
        self.repo = MongoLikeRepository(db)

    def test_duplicate_insert_raises_already_liked(self):
        self.likes.insert_one.side_effect = DuplicateKeyError('E11000 duplicate key')

        with self.assertRaises(AlreadyLikedError):
            self.repo.create('u1', '3', '2024-05-01')

    def test_find_queries_pair(self):
        self.likes.find.return_value = [
            {'_id': 'l1', 'user_id': 'u1', 'project_id': '3', 'created_at': '2024-05-01'},
        ]

        likes = self.repo.find('u1', '3')

        self.assertEqual(likes[0].id, 'l1')
        self.likes.find.assert_called_once_with({'user_id': 'u1', 'project_id': '3'})

    def test_ensure_indexes_creates_unique_pair_index(self):
        self.assertTrue(self.repo.ensure_indexes())
        self.likes.create_index.assert_any_call(
            [('user_id', 1), ('project_id', 1)], name='idx_likes_user_project', unique=True,
        )

    def test_ensure_indexes_reports_existing_duplicates(self):
        def create_index(keys, name, **kwargs):
            if kwargs.get('unique'):
                raise OperationFailure('E11000 duplicate key error', code=DUPLICATE_KEY_CODE)
            return name
        self.likes.create_index.side_effect = create_index

        self.assertFalse(self.repo.ensure_indexes())


class TestCreateUniqueIndex(unittest.TestCase):

    def setUp(self):
        self.collection = MagicMock()
        self.collection.name = LIKES_COLLECTION_NAME

    def test_creates_unique_index(self):
        self.assertTrue(create_unique_index(self.collection, [('email', 1)], 'idx_users_email'))
        self.collection.create_index.assert_called_once_with([('email', 1)], name='idx_users_email', unique=True)

    def test_duplicates_return_false(self):
        self.collection.create_index.side_effect = OperationFailure('E11000', code=DUPLICATE_KEY_CODE)

        with self.assertLogs('adapter.mongodb.indexes', level='ERROR'):
            self.assertFalse(create_unique_index(self.collection, [('email', 1)], 'idx_users_email'))

    def test_other_server_errors_propagate(self):
        self.collection.create_index.side_effect = OperationFailure('not authorized', code=13)

        with self.assertRaises(OperationFailure):
            create_unique_index(self.collection, [('email', 1)], 'idx_users_email')

    def test_ensure_all_indexes(self):
        db, collections = make_db()

        self.assertTrue(ensure_all_indexes(db))
        for collection in collections.values():
            self.assertTrue(collection.create_index.called)


if __name__ == '__main__':
    unittest.main()
