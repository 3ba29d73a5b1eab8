"""
TASKNEST API - Password Hashing Tests
"""

import pytest

from tasknest.auth.passwords import DUMMY_HASH, hash_password, verify_password


class TestHashPassword:

    @pytest.mark.parametrize("password", ["testpassword123", "pässwörd-ünïcode", "x" * 72])
    def test_round_trip(self, password):
        assert verify_password(password, hash_password(password)) is True

    def test_different_password_does_not_verify(self):
        hashed = hash_password("correct horse battery")
        assert verify_password("correct horse battery staple", hashed) is False
        assert verify_password("Correct horse battery", hashed) is False

    def test_hash_is_salted(self):
        assert hash_password("same-password") != hash_password("same-password")

    def test_hash_is_bcrypt_not_plaintext(self):
        hashed = hash_password("plaintextpassword123")
        assert hashed != "plaintextpassword123"
        assert hashed.startswith("$2")

    def test_explicit_rounds_are_encoded_in_hash(self):
        assert hash_password("cost-check", rounds=5).startswith("$2b$05$")


class TestVerifyPassword:

    @pytest.mark.parametrize("bad_hash", ["", "not-a-hash", "$2b$04$tooshort"])
    def test_malformed_hash_is_a_mismatch(self, bad_hash):
        assert verify_password("anything", bad_hash) is False

    def test_dummy_hash_is_valid_bcrypt(self):
        assert verify_password("some user input", DUMMY_HASH) is False
        assert DUMMY_HASH.startswith("$2")
