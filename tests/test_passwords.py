"""Tests for password hashing."""

from minicms.services.passwords import hash_password, verify_password


def test_hash_verifies():
    """A password verifies against its own hash."""
    digest = hash_password("pw123")
    assert digest != "pw123"
    assert verify_password("pw123", digest)


def test_hashes_are_salted():
    """Hashing the same password twice gives different digests."""
    assert hash_password("pw123") != hash_password("pw123")


def test_wrong_password_rejected():
    digest = hash_password("pw123")
    assert not verify_password("pw124", digest)
    assert not verify_password("", digest)
    assert not verify_password("PW123", digest)


def test_malformed_hash_returns_false():
    """Garbage digests are a mismatch, not an error."""
    assert not verify_password("pw123", "not-a-hash")
    assert not verify_password("pw123", "$2b$12$tooshort")
    assert not verify_password("pw123", "")
