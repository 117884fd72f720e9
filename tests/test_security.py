"""
Tests for security-critical paths.

Tests:
- Password hashing
- JWT creation and decoding
- Bearer token handling in the auth dependencies
"""

from datetime import timedelta

import pytest

from app.core.deps import get_admin_user, get_correct_user_or_admin, get_logged_in_user
from app.core.exceptions import UnauthorizedError
from app.core.security import (
    JWTError,
    create_access_token,
    decode_token,
    get_password_hash,
    verify_password,
)
from app.schemas.user import CurrentUser


class TestPasswords:
    """Test bcrypt hashing helpers"""

    def test_hash_verifies(self):
        hashed = get_password_hash("password1")

        assert hashed != "password1"
        assert verify_password("password1", hashed)
        assert not verify_password("password2", hashed)

    def test_long_password_truncated_to_72_bytes(self):
        """bcrypt only looks at the first 72 bytes"""
        hashed = get_password_hash("a" * 72 + "tail")

        assert verify_password("a" * 72, hashed)


class TestTokens:
    """Test JWT helpers"""

    def test_claims(self):
        payload = decode_token(create_access_token("u1", is_admin=True))

        assert payload["sub"] == "u1"
        assert payload["is_admin"] is True
        assert "exp" in payload

    def test_default_is_not_admin(self):
        assert decode_token(create_access_token("u1"))["is_admin"] is False

    def test_expired_token_rejected(self):
        token = create_access_token("u1", expires_delta=timedelta(seconds=-10))

        with pytest.raises(JWTError):
            decode_token(token)

    def test_tampered_token_rejected(self):
        """A u1 payload carrying the signature of another token"""
        header, payload, _ = create_access_token("u1").split(".")
        other_signature = create_access_token("u2", is_admin=True).split(".")[2]

        with pytest.raises(JWTError):
            decode_token(f"{header}.{payload}.{other_signature}")


class TestDependencies:
    """Test authorization dependencies directly"""

    user = CurrentUser(username="u1", is_admin=False)
    admin = CurrentUser(username="u2", is_admin=True)

    def test_logged_in_requires_user(self):
        with pytest.raises(UnauthorizedError):
            get_logged_in_user(None)

        assert get_logged_in_user(self.user) is self.user

    def test_admin_rejects_regular_user(self):
        with pytest.raises(UnauthorizedError):
            get_admin_user(self.user)

        with pytest.raises(UnauthorizedError):
            get_admin_user(None)

        assert get_admin_user(self.admin) is self.admin

    def test_correct_user_or_admin(self):
        assert get_correct_user_or_admin("u1", self.user) is self.user
        assert get_correct_user_or_admin("u1", self.admin) is self.admin

        with pytest.raises(UnauthorizedError):
            get_correct_user_or_admin("u3", self.user)


class TestBearerHandling:
    """Test how tokens on requests are interpreted"""

    def test_expired_token_is_anonymous(self, client, seeded):
        token = create_access_token("u2", is_admin=True, expires_delta=timedelta(seconds=-10))

        response = client.get("/api/v1/users/", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_token_from_other_key_rejected(self, client, seeded):
        from jose import jwt

        forged = jwt.encode({"sub": "u2", "is_admin": True}, "not-the-secret", algorithm="HS256")

        response = client.get("/api/v1/users/", headers={"Authorization": f"Bearer {forged}"})

        assert response.status_code == 401

    def test_non_bearer_scheme_is_anonymous(self, client, seeded):
        response = client.get("/api/v1/users/", headers={"Authorization": "Basic dTI6cGFzc3dvcmQy"})

        assert response.status_code == 401

    def test_token_without_subject_is_anonymous(self, client, seeded):
        from jose import jwt
        from app.core.config import settings

        token = jwt.encode({"is_admin": True}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

        response = client.get("/api/v1/users/", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
