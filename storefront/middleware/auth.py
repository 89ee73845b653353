from functools import wraps
from flask import request, jsonify, g

from storefront.errors import InvalidTokenError
from storefront.models.documents import ROLE_ADMIN, ROLE_CUSTOMER
from storefront.services.auth_service import AuthService

BEARER_PREFIX = "Bearer "


def require_auth(f):
    """Middleware to require JWT authentication."""
    @wraps(f)
    def decorated(*args, **kwargs):
        header = request.headers.get("Authorization", "")
        if not header:
            return jsonify({"error": "Authorization header is required"}), 401
        if not header.startswith(BEARER_PREFIX):
            return jsonify({"error": "Invalid token format, 'Bearer' prefix not found"}), 401

        try:
            g.claims = AuthService.decode_token(header[len(BEARER_PREFIX):].strip())
        except InvalidTokenError:
            return jsonify({"error": "Invalid or expired token"}), 401

        return f(*args, **kwargs)
    return decorated


def require_role(role):
    """Middleware to require a role. Must be applied inside require_auth."""
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            claims = g.get("claims")
            if claims is None:
                return jsonify({"error": "User role not found in request context"}), 403
            if claims.role != role:
                return jsonify({"error": "You do not have permission to access this resource"}), 403
            return f(*args, **kwargs)
        return decorated
    return decorator


def require_admin(f):
    """Middleware to require admin role."""
    return require_auth(require_role(ROLE_ADMIN)(f))


def require_customer(f):
    """Middleware to require customer role."""
    return require_auth(require_role(ROLE_CUSTOMER)(f))
