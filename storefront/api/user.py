from flask import Blueprint, jsonify, request, g
from marshmallow import Schema, fields

from storefront.api.validators import password_bytes
from storefront.middleware.auth import require_auth
from storefront.services.user_service import UserService

user_bp = Blueprint("user", __name__, url_prefix="/api/v1/user")


class ProfileSchema(Schema):
    name = fields.String(load_default=None)
    password = fields.String(load_default=None, validate=password_bytes)


@user_bp.route("/profile", methods=["PUT"])
@require_auth
def update_profile():
    """Update the caller's own name or password."""
    schema = ProfileSchema()
    payload = request.get_json(silent=True) or {}
    errors = schema.validate(payload)
    if errors:
        return jsonify({"errors": errors}), 400

    data = schema.load(payload)
    UserService.update_profile(g.claims.user_id, name=data["name"], password=data["password"])
    return jsonify({"message": "User profile updated successfully"})
