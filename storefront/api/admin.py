from flask import Blueprint, jsonify, request
from marshmallow import Schema, fields

from storefront.middleware.auth import require_admin
from storefront.models.documents import serialize_order, serialize_user
from storefront.services.order_service import OrderService
from storefront.services.user_service import UserService

admin_bp = Blueprint("admin", __name__, url_prefix="/api/v1/admin")


class OrderStatusSchema(Schema):
    status = fields.String(required=True)


@admin_bp.route("/users", methods=["GET"])
@require_admin
def list_users():
    """List all users (admin only)."""
    return jsonify([serialize_user(u) for u in UserService.list_users()])


@admin_bp.route("/orders", methods=["GET"])
@require_admin
def list_orders():
    """List every order (admin only)."""
    return jsonify([serialize_order(o) for o in OrderService.list_orders()])


@admin_bp.route("/orders/<order_id>", methods=["PATCH"])
@require_admin
def update_order_status(order_id):
    """Move an order to another status (admin only)."""
    schema = OrderStatusSchema()
    payload = request.get_json(silent=True) or {}
    errors = schema.validate(payload)
    if errors:
        return jsonify({"errors": errors}), 400

    data = schema.load(payload)
    OrderService.update_status(order_id, data["status"])
    return jsonify({"message": "Order status updated successfully"})
