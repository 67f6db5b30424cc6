from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from tableorder.core.exceptions import InvalidToken, TokenExpired
from tableorder.core.security import CredentialService, hash_password, verify_password


@pytest.fixture
def credentials():
    return CredentialService("unit-test-key", expire_delta=timedelta(hours=24))


def test_hash_is_salted_and_not_plaintext():
    first = hash_password("admin123")
    second = hash_password("admin123")

    assert first != "admin123"
    assert first != second
    assert verify_password("admin123", first)
    assert verify_password("admin123", second)


def test_verify_rejects_wrong_password():
    assert not verify_password("wrong", hash_password("admin123"))


@pytest.mark.parametrize("bad_hash", ["", None, "not-a-hash", "$2b$12$truncated"])
def test_verify_fails_closed_on_malformed_hash(bad_hash):
    assert verify_password("admin123", bad_hash) is False


def test_issued_token_round_trips_subject(credentials):
    token = credentials.issue_token("admin")

    assert credentials.verify_token(token) == "admin"


def test_token_expires_24_hours_after_issuance(credentials):
    issued = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
    token = credentials.issue_token("admin", now=issued)

    claims = jwt.get_unverified_claims(token)
    assert claims["exp"] - claims["iat"] == 24 * 3600
    assert claims["sub"] == "admin"


def test_expired_token_is_rejected(credentials):
    token = credentials.issue_token(
        "admin", now=datetime.now(timezone.utc) - timedelta(hours=25)
    )

    with pytest.raises(TokenExpired):
        credentials.verify_token(token)


def test_token_signed_with_other_key_is_invalid(credentials):
    forged = CredentialService("some-other-key").issue_token("admin")

    with pytest.raises(InvalidToken):
        credentials.verify_token(forged)


@pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c"])
def test_absent_or_malformed_token_is_invalid(credentials, token):
    with pytest.raises(InvalidToken):
        credentials.verify_token(token)


def test_token_without_subject_is_invalid(credentials):
    token = jwt.encode(
        {"exp": int((datetime.now(timezone.utc) + timedelta(hours=1)).timestamp())},
        "unit-test-key",
        algorithm="HS256",
    )

    with pytest.raises(InvalidToken):
        credentials.verify_token(token)


def test_expired_is_a_kind_of_unauthorized():
    assert TokenExpired().status_code == 401
    assert InvalidToken().status_code == 401
