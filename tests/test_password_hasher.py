import re

from portfolio_api.services.passwords import PasswordHasher


def test_hash_format_is_salt_and_digest_hex(hasher: PasswordHasher):
    stored = hasher.hash("secret123")
    assert re.fullmatch(r"[0-9a-f]{32}:[0-9a-f]{128}", stored)


def test_verify_roundtrip(hasher: PasswordHasher):
    stored = hasher.hash("secret123")
    assert hasher.verify("secret123", stored) is True
    assert hasher.verify("secret124", stored) is False


def test_same_password_gets_fresh_salt(hasher: PasswordHasher):
    assert hasher.hash("secret123") != hasher.hash("secret123")


def test_verify_rejects_hash_of_other_password(hasher: PasswordHasher):
    assert hasher.verify("one", hasher.hash("two")) is False


def test_malformed_stored_hash_is_false(hasher: PasswordHasher):
    for stored in ("", "nocolon", ":", "abc:", ":abc", "zz:zz", "00ff:00ff", "not-hex:" + "0" * 128):
        assert hasher.verify("secret123", stored) is False


def test_hash_from_other_parameters_does_not_verify(hasher: PasswordHasher):
    other = PasswordHasher(time_cost=2, memory_cost=1024, parallelism=1)
    assert hasher.verify("secret123", other.hash("secret123")) is False
