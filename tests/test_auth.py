"""Tests for authentication endpoints and services."""

import uuid
from datetime import timedelta

import pytest
from fastapi import HTTPException

from app.models.enums import Role
from app.models.profile import Profile
from app.schemas.user import UserCreate
from app.services.auth import (
    authenticate_user,
    create_access_token,
    create_user,
    decode_token,
    get_password_hash,
    get_user_by_email,
    verify_password,
)


@pytest.fixture
def test_user(test_db):
    """Register a seeker through the service."""
    return create_user(
        test_db,
        UserCreate(email="test@example.com", password="testpassword123", name="Test User"),
    )


# =============================================================================
# Unit Tests: Password Hashing
# =============================================================================


class TestPasswordHashing:
    """Tests for password hashing functions."""

    def test_get_password_hash_returns_bcrypt_format(self):
        """Test that hash is in bcrypt format."""
        hashed = get_password_hash("password123")
        assert isinstance(hashed, str)
        # bcrypt hashes start with $2b$ or $2a$
        assert hashed.startswith("$2")

    def test_get_password_hash_different_for_same_input(self):
        """Test that same password produces different hashes (due to salt)."""
        assert get_password_hash("password123") != get_password_hash("password123")

    def test_verify_password_correct(self):
        """Test verify_password returns True for correct password."""
        hashed = get_password_hash("mysecretpassword")
        assert verify_password("mysecretpassword", hashed) is True

    def test_verify_password_incorrect(self):
        """Test verify_password returns False for wrong password."""
        hashed = get_password_hash("correctpassword")
        assert verify_password("wrongpassword", hashed) is False

    def test_verify_password_empty_password(self):
        """Test verify_password with empty password."""
        hashed = get_password_hash("somepassword")
        assert verify_password("", hashed) is False

    def test_verify_password_malformed_hash(self):
        """Test verify_password with a value that is not a bcrypt hash."""
        assert verify_password("password", "not-a-hash") is False

    def test_long_password(self):
        """Test passwords longer than bcrypt's 72 byte window still hash."""
        password = "x" * 100
        assert verify_password(password, get_password_hash(password)) is True


# =============================================================================
# Unit Tests: JWT Tokens
# =============================================================================


class TestJWTTokens:
    """Tests for JWT token functions."""

    def test_decode_token_valid(self):
        """Test decode_token returns the user id from the subject."""
        user_id = uuid.uuid4()
        token = create_access_token(data={"sub": str(user_id)})
        assert decode_token(token).user_id == user_id

    def test_create_access_token_with_expiry(self):
        """Test create_access_token with custom expiry."""
        user_id = uuid.uuid4()
        token = create_access_token(data={"sub": str(user_id)}, expires_delta=timedelta(hours=1))
        assert decode_token(token).user_id == user_id

    def test_decode_token_expired(self):
        """Test decode_token rejects expired tokens."""
        token = create_access_token(
            data={"sub": str(uuid.uuid4())},
            expires_delta=timedelta(seconds=-1),
        )
        with pytest.raises(HTTPException) as exc_info:
            decode_token(token)
        assert exc_info.value.status_code == 401

    def test_decode_token_invalid(self):
        """Test decode_token with invalid token."""
        with pytest.raises(HTTPException) as exc_info:
            decode_token("invalid.token.here")
        assert exc_info.value.status_code == 401
        assert "Could not validate credentials" in exc_info.value.detail

    def test_decode_token_missing_subject(self):
        """Test decode_token with token missing subject."""
        token = create_access_token(data={"other": "data"})
        with pytest.raises(HTTPException) as exc_info:
            decode_token(token)
        assert exc_info.value.status_code == 401

    def test_decode_token_non_uuid_subject(self):
        """Test decode_token with a subject that is not a user id."""
        token = create_access_token(data={"sub": "testuser"})
        with pytest.raises(HTTPException) as exc_info:
            decode_token(token)
        assert exc_info.value.status_code == 401


# =============================================================================
# Unit Tests: User Database Operations
# =============================================================================


class TestUserDatabaseOperations:
    """Tests for user database operations."""

    def test_get_user_by_email_exists(self, test_db, test_user):
        """Test get_user_by_email when user exists, ignoring case."""
        user = get_user_by_email(test_db, "Test@Example.com")
        assert user is not None
        assert user.id == test_user.id

    def test_get_user_by_email_not_exists(self, test_db):
        """Test get_user_by_email when user doesn't exist."""
        assert get_user_by_email(test_db, "nonexistent@example.com") is None

    def test_authenticate_user_valid(self, test_db, test_user):
        """Test authenticate_user with valid credentials."""
        user = authenticate_user(test_db, "test@example.com", "testpassword123")
        assert user is not None
        assert user.id == test_user.id

    def test_authenticate_user_wrong_password(self, test_db, test_user):
        """Test authenticate_user with wrong password."""
        assert authenticate_user(test_db, "test@example.com", "wrongpassword") is None

    def test_authenticate_user_inactive(self, test_db, test_user):
        """Test authenticate_user refuses deactivated accounts."""
        test_user.is_active = False
        test_db.commit()
        assert authenticate_user(test_db, "test@example.com", "testpassword123") is None

    def test_create_user_creates_profile(self, test_db):
        """Test create_user creates the profile with the same id."""
        user = create_user(
            test_db,
            UserCreate(
                email="agent@example.com",
                password="newpassword123",
                name="New Agent",
                role="agent",
            ),
        )
        assert user.hashed_password != "newpassword123"
        profile = test_db.get(Profile, user.id)
        assert profile is not None
        assert profile.email == "agent@example.com"
        assert profile.role == Role.AGENT
        assert profile.name == "New Agent"
        assert profile.verified is False

    def test_create_user_defaults_to_seeker(self, test_db, test_user):
        """Test the default role is seeker."""
        assert test_db.get(Profile, test_user.id).role == Role.SEEKER

    def test_create_user_duplicate_email(self, test_db, test_user):
        """Test create_user with duplicate email."""
        with pytest.raises(HTTPException) as exc_info:
            create_user(
                test_db,
                UserCreate(email="test@example.com", password="password123"),
            )
        assert exc_info.value.status_code == 400
        assert "Email already registered" in exc_info.value.detail


# =============================================================================
# Integration Tests: Register Endpoint
# =============================================================================


class TestRegisterEndpoint:
    """Tests for POST /api/auth/register endpoint."""

    def test_register_success(self, client):
        """Test successful user registration."""
        response = client.post(
            "/api/auth/register",
            json={
                "email": "newuser@example.com",
                "password": "password123",
                "name": "New User",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "newuser@example.com"
        assert data["is_active"] is True
        assert "id" in data
        assert "password" not in data
        assert "hashed_password" not in data

    def test_register_admin_role_rejected(self, client):
        """Test admins cannot be self-registered."""
        response = client.post(
            "/api/auth/register",
            json={
                "email": "root@example.com",
                "password": "password123",
                "role": "admin",
            },
        )
        assert response.status_code == 422

    def test_register_duplicate_email(self, client, test_user):
        """Test registration with duplicate email."""
        response = client.post(
            "/api/auth/register",
            json={"email": "test@example.com", "password": "password123"},
        )
        assert response.status_code == 400
        assert "Email already registered" in response.json()["detail"]

    def test_register_invalid_email(self, client):
        """Test registration with invalid email format."""
        response = client.post(
            "/api/auth/register",
            json={"email": "not-an-email", "password": "password123"},
        )
        assert response.status_code == 422

    def test_register_short_password(self, client):
        """Test registration with a password under eight characters."""
        response = client.post(
            "/api/auth/register",
            json={"email": "short@example.com", "password": "short"},
        )
        assert response.status_code == 422


# =============================================================================
# Integration Tests: Login Endpoint
# =============================================================================


class TestLoginEndpoint:
    """Tests for POST /api/auth/login endpoint."""

    def test_login_success(self, client, test_user):
        """Test successful login and use of the token."""
        response = client.post(
            "/api/auth/login",
            json={"email": "test@example.com", "password": "testpassword123"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"

        me = client.get(
            "/api/profiles/me",
            headers={"Authorization": f"Bearer {data['access_token']}"},
        )
        assert me.status_code == 200
        assert me.json()["email"] == "test@example.com"

    def test_login_wrong_password(self, client, test_user):
        """Test login with wrong password."""
        response = client.post(
            "/api/auth/login",
            json={"email": "test@example.com", "password": "wrongpassword"},
        )
        assert response.status_code == 401
        assert "Incorrect email or password" in response.json()["detail"]

    def test_login_nonexistent_user(self, client):
        """Test login with non-existent user."""
        response = client.post(
            "/api/auth/login",
            json={"email": "nonexistent@example.com", "password": "password123"},
        )
        assert response.status_code == 401

    def test_invalid_bearer_token(self, client):
        """Test a garbage bearer token is rejected rather than treated as anonymous."""
        response = client.get(
            "/api/properties",
            headers={"Authorization": "Bearer invalid.token.here"},
        )
        assert response.status_code == 401

    def test_profile_me_requires_auth(self, client):
        """Test /profiles/me without a token."""
        assert client.get("/api/profiles/me").status_code == 401
