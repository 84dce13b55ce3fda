from datetime import timedelta

from components.core.security import (
    account_id_from_token,
    create_access_token,
    hash_password,
    verify_password,
)


def test_password_hash_is_salted_and_verifiable():
    first = hash_password("secret123")
    second = hash_password("secret123")

    assert first != second
    assert verify_password("secret123", first)
    assert not verify_password("secret124", first)


def test_malformed_stored_hash_never_verifies():
    assert not verify_password("secret123", "no-separator")
    assert not verify_password("secret123", "")


def test_token_round_trip_and_expiry():
    assert account_id_from_token(create_access_token(42)) == 42
    assert account_id_from_token(create_access_token(42, timedelta(minutes=-1))) is None
    assert account_id_from_token("not-a-token") is None
