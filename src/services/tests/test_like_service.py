"""Unit tests for like_service (like/unlike invariant and annotation)."""

import threading
import time
import unittest
from datetime import datetime, timezone

from adapter.fake.like_repository import FakeLikeRepository
from domain.model.errors import AlreadyLikedError, LikeNotFoundError
from domain.model.project import Project
from services import like_service
from services.like_service import KeyedLocks


class TestLikeToggle(unittest.TestCase):

    def setUp(self):
        self.repo = FakeLikeRepository()

    def test_add_like_then_has_liked(self):
        result = like_service.add_like(self.repo, 'user-1', '7')

        self.assertTrue(result.success)
        self.assertIn(result.like_id, self.repo.store)
        self.assertTrue(like_service.has_liked(self.repo, 'user-1', '7'))

    def test_like_created_at_is_today(self):
        result = like_service.add_like(self.repo, 'user-1', '7')

        today = datetime.now(timezone.utc).date().isoformat()
        self.assertEqual(self.repo.store[result.like_id].created_at, today)

    def test_add_like_twice_raises_already_liked(self):
        like_service.add_like(self.repo, 'user-1', '7')

        with self.assertRaises(AlreadyLikedError):
            like_service.add_like(self.repo, 'user-1', '7')
        self.assertEqual(len(self.repo.store), 1)

    def test_full_state_cycle(self):
        like_service.add_like(self.repo, 'user-1', '7')
        like_service.remove_like(self.repo, 'user-1', '7')

        self.assertFalse(like_service.has_liked(self.repo, 'user-1', '7'))
        with self.assertRaises(LikeNotFoundError):
            like_service.remove_like(self.repo, 'user-1', '7')

        # Liking again after unliking is allowed
        like_service.add_like(self.repo, 'user-1', '7')
        self.assertTrue(like_service.has_liked(self.repo, 'user-1', '7'))

    def test_likes_are_per_user_and_per_project(self):
        like_service.add_like(self.repo, 'user-1', '7')
        like_service.add_like(self.repo, 'user-2', '7')
        like_service.add_like(self.repo, 'user-1', '8')

        self.assertEqual(len(self.repo.store), 3)

    def test_remove_like_deletes_first_match_only(self):
        # Duplicates can exist in stores without a uniqueness constraint
        first = self.repo.create('user-1', '7', '2024-01-01')
        self.repo.create('user-1', '7', '2024-01-02')

        like_service.remove_like(self.repo, 'user-1', '7')

        self.assertNotIn(first.id, self.repo.store)
        self.assertEqual(len(self.repo.store), 1)

    def test_has_liked_anonymous_is_false(self):
        like_service.add_like(self.repo, 'user-1', '7')
        self.assertFalse(like_service.has_liked(self.repo, None, '7'))


class TestAnnotateLiked(unittest.TestCase):

    def setUp(self):
        self.repo = FakeLikeRepository()
        self.projects = [
            Project(id='recA', external_id=1, title='A'),
            Project(id='recB', external_id=2, title='B'),
        ]

    def test_annotates_for_authenticated_user(self):
        like_service.add_like(self.repo, 'user-1', '2')

        result = like_service.annotate_liked(self.repo, 'user-1', self.projects)

        self.assertEqual([p.is_liked for p in result], [False, True])

    def test_anonymous_leaves_projects_untouched(self):
        result = like_service.annotate_liked(self.repo, None, self.projects)
        self.assertEqual([p.is_liked for p in result], [None, None])


class SlowLikeRepository(FakeLikeRepository):
    """Widens the check-then-act window to expose races."""

    def find(self, user_id, project_id):
        found = super().find(user_id, project_id)
        time.sleep(0.05)
        return found


class TestKeyedLocks(unittest.TestCase):

    def _race(self, locks):
        repo = SlowLikeRepository()
        errors = []

        def like():
            try:
                like_service.add_like(repo, 'user-1', '7', locks=locks)
            except AlreadyLikedError as e:
                errors.append(e)

        threads = [threading.Thread(target=like) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        return repo, errors

    def test_locks_serialize_concurrent_likes(self):
        locks = KeyedLocks()
        repo, errors = self._race(locks)

        self.assertEqual(len(repo.store), 1)
        self.assertEqual(len(errors), 3)
        self.assertEqual(len(locks), 0)

    def test_without_locks_duplicates_can_slip_through(self):
        repo, _ = self._race(None)
        self.assertGreater(len(repo.store), 1)

    def test_different_pairs_do_not_block_each_other(self):
        locks = KeyedLocks()
        with locks.hold('user-1', '7'):
            acquired = threading.Event()

            def other():
                with locks.hold('user-1', '8'):
                    acquired.set()

            t = threading.Thread(target=other)
            t.start()
            self.assertTrue(acquired.wait(timeout=1))
            t.join()


if __name__ == '__main__':
    unittest.main()
