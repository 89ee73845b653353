import logging
from typing import Optional

import pymongo
from flask import current_app

from storefront.errors import NotFoundError, ValidationError
from storefront.models.database import db, parse_object_id, utcnow
from storefront.services.auth_service import AuthService

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 6


class UserService:
    """User listing and self-service profile changes."""

    @staticmethod
    def list_users() -> list:
        with pymongo.timeout(current_app.config["DB_TIMEOUT_SECONDS"]):
            return list(db.users.find({}, {"password_hash": 0}))

    @staticmethod
    def update_profile(user_id, name: Optional[str] = None, password: Optional[str] = None) -> None:
        """Change the caller's name and/or password."""
        uid = parse_object_id(user_id, "user ID")

        fields = {}
        if name:
            fields["name"] = name
        if password:
            if len(password) < PASSWORD_MIN_LENGTH:
                raise ValidationError(
                    f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
                )
            fields["password_hash"] = AuthService.hash_password(password)
        if not fields:
            raise ValidationError("No fields to update provided")
        fields["updated_at"] = utcnow()

        with pymongo.timeout(current_app.config["DB_TIMEOUT_SECONDS"]):
            result = db.users.update_one({"_id": uid}, {"$set": fields})
        if result.matched_count == 0:
            raise NotFoundError("User not found")
        logger.info("Updated profile for user %s", uid)
