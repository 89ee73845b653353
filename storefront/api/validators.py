from marshmallow import ValidationError, validate

from storefront.services.auth_service import BCRYPT_MAX_BYTES
from storefront.services.user_service import PASSWORD_MIN_LENGTH


def password_bytes(value: str) -> None:
    """bcrypt only hashes the first 72 bytes, so longer passwords are refused."""
    if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValidationError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes long")


password_rules = [validate.Length(min=PASSWORD_MIN_LENGTH), password_bytes]
