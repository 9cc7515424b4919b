"""Unit tests for bearer token issuing, subject extraction, and expiry."""

from datetime import datetime, timedelta, timezone

from jose import jwt

from app.auth.jwt import (
    create_access_token,
    extract_subject,
    is_token_expired,
    is_token_valid,
    token_lifetime,
)
from app.config import settings

EMAIL = "guest@hotel-test.com"
ISSUED = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestCreateAccessToken:
    """Test token creation."""

    def test_subject_round_trips(self):
        token = create_access_token(EMAIL)
        assert extract_subject(token) == EMAIL

    def test_expiry_is_seven_days_after_issue(self):
        token = create_access_token(EMAIL, issued_at=ISSUED)
        claims = jwt.get_unverified_claims(token)
        assert claims["iat"] == int(ISSUED.timestamp())
        assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())
        assert token_lifetime() == timedelta(days=7)

    def test_same_inputs_produce_same_token(self):
        assert create_access_token(EMAIL, issued_at=ISSUED) == create_access_token(EMAIL, issued_at=ISSUED)

    def test_different_subjects_produce_different_tokens(self):
        other = create_access_token("other@hotel-test.com", issued_at=ISSUED)
        assert create_access_token(EMAIL, issued_at=ISSUED) != other


class TestExtractSubject:
    """Subject extraction never raises."""

    def test_garbage_returns_none(self):
        assert extract_subject("not.a.valid.token") is None

    def test_empty_string_returns_none(self):
        assert extract_subject("") is None

    def test_wrong_signing_key_returns_none(self):
        forged = jwt.encode({"sub": EMAIL, "exp": 4102444800}, "some-other-key", algorithm="HS256")
        assert extract_subject(forged) is None

    def test_expired_token_still_yields_subject(self):
        token = create_access_token(EMAIL, issued_at=ISSUED - timedelta(days=30))
        assert extract_subject(token) == EMAIL

    def test_missing_subject_returns_none(self):
        token = jwt.encode({"exp": 4102444800}, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
        assert extract_subject(token) is None


class TestExpiry:
    """Expiry is evaluated against an explicit clock."""

    def test_fresh_token_not_expired(self):
        token = create_access_token(EMAIL, issued_at=ISSUED)
        assert is_token_expired(token, now=ISSUED + timedelta(days=6)) is False

    def test_token_expired_after_lifetime(self):
        token = create_access_token(EMAIL, issued_at=ISSUED)
        assert is_token_expired(token, now=ISSUED + timedelta(days=7, seconds=1)) is True

    def test_unreadable_token_counts_as_expired(self):
        assert is_token_expired("garbage") is True


class TestIsTokenValid:
    """Validity combines subject match and expiry."""

    def test_valid_for_matching_email(self):
        token = create_access_token(EMAIL, issued_at=ISSUED)
        assert is_token_valid(token, EMAIL, now=ISSUED + timedelta(hours=1)) is True

    def test_invalid_for_other_email(self):
        token = create_access_token(EMAIL, issued_at=ISSUED)
        assert is_token_valid(token, "someone@hotel-test.com", now=ISSUED) is False

    def test_invalid_once_expired(self):
        token = create_access_token(EMAIL, issued_at=ISSUED)
        assert is_token_valid(token, EMAIL, now=ISSUED + timedelta(days=8)) is False

    def test_invalid_for_forged_token(self):
        forged = jwt.encode({"sub": EMAIL, "exp": 4102444800}, "some-other-key", algorithm="HS256")
        assert is_token_valid(forged, EMAIL) is False
