from flask import Blueprint, request, jsonify
from marshmallow import Schema, fields, validate

from storefront.api.validators import password_rules
from storefront.models.documents import serialize_user
from storefront.services.auth_service import AuthService

auth_bp = Blueprint("auth", __name__, url_prefix="/api/v1/auth")


class RegisterSchema(Schema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    email = fields.Email(required=True)
    password = fields.String(required=True, validate=password_rules)


class LoginSchema(Schema):
    email = fields.Email(required=True)
    password = fields.String(required=True)


@auth_bp.route("/register", methods=["POST"])
def register():
    """Register a new user account."""
    schema = RegisterSchema()
    payload = request.get_json(silent=True) or {}
    errors = schema.validate(payload)
    if errors:
        return jsonify({"errors": errors}), 400

    data = schema.load(payload)
    user = AuthService.register_user(data["name"], data["email"], data["password"])
    return jsonify(serialize_user(user)), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    """Authenticate and receive a JWT token."""
    schema = LoginSchema()
    payload = request.get_json(silent=True) or {}
    errors = schema.validate(payload)
    if errors:
        return jsonify({"errors": errors}), 400

    data = schema.load(payload)
    token, role = AuthService.authenticate(data["email"], data["password"])
    return jsonify({"token": token, "role": role}), 200
