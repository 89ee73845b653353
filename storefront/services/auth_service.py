import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import bcrypt
import jwt
import pymongo
from flask import current_app
from pymongo.errors import DuplicateKeyError

from storefront.errors import (
    AuthenticationError,
    ConflictError,
    HashingError,
    InvalidTokenError,
    SigningError,
)
from storefront.models.database import db, utcnow
from storefront.models.documents import new_user, role_for_email

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True)
class Claims:
    """Identity carried by a validated session token."""

    user_id: str
    role: str
    issued_at: datetime
    expires_at: datetime


class AuthService:
    """Handles authentication and password management."""

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password using bcrypt."""
        encoded = password.encode("utf-8")
        # bcrypt only looks at the first 72 bytes
        if len(encoded) > BCRYPT_MAX_BYTES:
            raise HashingError("Password is too long")
        try:
            salt = bcrypt.gensalt(rounds=current_app.config["BCRYPT_ROUNDS"])
            return bcrypt.hashpw(encoded, salt).decode("utf-8")
        except ValueError as e:
            raise HashingError("Failed to hash password") from e

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        """Verify a password against its hash."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False

    @staticmethod
    def generate_token(user_id: str, role: str, now: Optional[datetime] = None) -> str:
        """Generate a signed JWT for a user."""
        secret = current_app.config.get("JWT_SECRET")
        if not secret:
            raise SigningError("Token signing key is not configured")

        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "user_id": str(user_id),
            "role": role,
            "iat": issued_at,
            "exp": issued_at + timedelta(hours=current_app.config["JWT_EXPIRY_HOURS"]),
            "iss": current_app.config["JWT_ISSUER"],
        }
        return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)

    @staticmethod
    def decode_token(token: str) -> Claims:
        """Decode and validate a JWT token."""
        secret = current_app.config.get("JWT_SECRET")
        if not secret:
            raise InvalidTokenError("Invalid or expired token")
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[JWT_ALGORITHM],
                issuer=current_app.config["JWT_ISSUER"],
                options={"require": ["exp", "iat", "iss"]},
            )
            return Claims(
                user_id=payload["user_id"],
                role=payload["role"],
                issued_at=datetime.fromtimestamp(payload["iat"], timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], timezone.utc),
            )
        except (jwt.InvalidTokenError, KeyError) as e:
            raise InvalidTokenError("Invalid or expired token") from e

    @staticmethod
    def register_user(name: str, email: str, password: str) -> dict:
        """Register a new user."""
        email = email.strip().lower()
        timeout = current_app.config["DB_TIMEOUT_SECONDS"]
        with pymongo.timeout(timeout):
            if db.users.count_documents({"email": email}):
                raise ConflictError("Email already registered")

        user = new_user(
            name=name,
            email=email,
            password_hash=AuthService.hash_password(password),
            role=role_for_email(email),
            now=utcnow(),
        )
        with pymongo.timeout(timeout):
            try:
                user["_id"] = db.users.insert_one(user).inserted_id
            except DuplicateKeyError:
                raise ConflictError("Email already registered")

        logger.info("Registered user %s with role %s", user["_id"], user["role"])
        return user

    @staticmethod
    def authenticate(email: str, password: str) -> Tuple[str, str]:
        """Authenticate a user and return a JWT token and the user's role."""
        email = email.strip().lower()
        with pymongo.timeout(current_app.config["DB_TIMEOUT_SECONDS"]):
            user = db.users.find_one({"email": email})

        if not user or not AuthService.verify_password(password, user["password_hash"]):
            logger.info("Failed login for %s", email)
            raise AuthenticationError("Invalid email or password")

        return AuthService.generate_token(str(user["_id"]), user["role"]), user["role"]
