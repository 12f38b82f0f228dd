"""
CarLookup Backend: Password Service Unit Tests
===============================================

What we test:
    ✅ Salts are random, base64 and 32 bytes
    ✅ Hashing is deterministic per (password, salt) and salt-sensitive
    ✅ Verification accepts the right password and rejects everything else
    ✅ Malformed input never raises from verify_password
"""

import base64

import pytest

from carlookup.services.password_service import PasswordService


class TestPasswordService:
    def setup_method(self):
        self.service = PasswordService()

    def test_salt_is_32_random_bytes(self):
        salt = self.service.generate_salt()
        assert len(base64.b64decode(salt)) == 32
        assert salt != self.service.generate_salt()

    def test_hash_is_deterministic(self):
        salt = self.service.generate_salt()
        assert self.service.hash_password("secret", salt) == self.service.hash_password("secret", salt)

    def test_hash_depends_on_salt(self):
        first = self.service.hash_password("secret", self.service.generate_salt())
        second = self.service.hash_password("secret", self.service.generate_salt())
        assert first != second

    def test_hash_is_32_bytes(self):
        digest = self.service.hash_password("secret", self.service.generate_salt())
        assert len(base64.b64decode(digest)) == 32

    @pytest.mark.parametrize("password", ["", "   "])
    def test_blank_password_rejected(self, password):
        with pytest.raises(ValueError):
            self.service.hash_password(password, self.service.generate_salt())

    def test_blank_salt_rejected(self):
        with pytest.raises(ValueError):
            self.service.hash_password("secret", "")

    def test_verify_correct_password(self):
        salt = self.service.generate_salt()
        stored = self.service.hash_password("admin123", salt)
        assert self.service.verify_password("admin123", salt, stored) is True

    def test_verify_wrong_password(self):
        salt = self.service.generate_salt()
        stored = self.service.hash_password("admin123", salt)
        assert self.service.verify_password("admin124", salt, stored) is False

    def test_verify_blank_inputs(self):
        salt = self.service.generate_salt()
        stored = self.service.hash_password("admin123", salt)
        assert self.service.verify_password("", salt, stored) is False
        assert self.service.verify_password("admin123", "", stored) is False
        assert self.service.verify_password("admin123", salt, "") is False

    def test_verify_malformed_salt_returns_false(self):
        assert self.service.verify_password("admin123", "not base64!!", "abc") is False

    def test_verify_non_ascii_stored_hash_returns_false(self):
        salt = self.service.generate_salt()
        assert self.service.verify_password("admin123", salt, "hásh") is False

    def test_verify_unexpected_error_returns_false(self, monkeypatch):
        def broken_hash(password, salt):
            raise RuntimeError("digest backend unavailable")

        monkeypatch.setattr(self.service, "hash_password", broken_hash)
        salt = self.service.generate_salt()
        assert self.service.verify_password("admin123", salt, "abc") is False
