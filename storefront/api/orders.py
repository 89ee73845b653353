from flask import Blueprint, jsonify, g

from storefront.middleware.auth import require_customer
from storefront.models.documents import serialize_order
from storefront.services.order_service import OrderService

orders_bp = Blueprint("orders", __name__, url_prefix="/api/v1/orders")


@orders_bp.route("/checkout", methods=["POST"])
@require_customer
def checkout():
    """Create an order from the caller's cart."""
    order = OrderService.checkout(g.claims.user_id)
    return jsonify({
        "message": "Checkout successful",
        "order": serialize_order(order),
    }), 201


@orders_bp.route("", methods=["GET"])
@require_customer
def list_orders():
    """List orders for the authenticated user."""
    orders = OrderService.get_user_orders(g.claims.user_id)
    return jsonify([serialize_order(o) for o in orders])


@orders_bp.route("/<order_id>", methods=["GET"])
@require_customer
def get_order(order_id):
    """Get a specific order."""
    order = OrderService.get_order(order_id, g.claims.user_id)
    return jsonify(serialize_order(order))
