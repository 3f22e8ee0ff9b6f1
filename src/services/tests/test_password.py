"""Unit tests for bcrypt password hashing."""

import unittest

from services.password import hash_password, verify_password


class TestPasswordHashing(unittest.TestCase):

    def test_hash_then_verify(self):
        hashed = hash_password("secret1", rounds=4)

        self.assertNotEqual(hashed, "secret1")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(verify_password("secret1", hashed))

    def test_wrong_password_does_not_verify(self):
        hashed = hash_password("secret1", rounds=4)
        self.assertFalse(verify_password("secret2", hashed))

    def test_hashes_are_salted(self):
        self.assertNotEqual(hash_password("secret1", rounds=4), hash_password("secret1", rounds=4))

    def test_default_cost_is_ten_rounds(self):
        hashed = hash_password("secret1")
        self.assertEqual(hashed.split("$")[2], "10")

    def test_malformed_hash_returns_false(self):
        self.assertFalse(verify_password("secret1", "not-a-bcrypt-hash"))
        self.assertFalse(verify_password("secret1", ""))
        self.assertFalse(verify_password("secret1", None))

    def test_empty_password_never_verifies(self):
        hashed = hash_password("secret1", rounds=4)
        self.assertFalse(verify_password("", hashed))


if __name__ == '__main__':
    unittest.main()
