from flask import Blueprint, request, jsonify, g
from marshmallow import Schema, fields, validate

from storefront.middleware.auth import require_customer
from storefront.models.documents import serialize_cart
from storefront.services.cart_service import CartService

cart_bp = Blueprint("cart", __name__, url_prefix="/api/v1/cart")


class AddItemSchema(Schema):
    product_id = fields.String(required=True, data_key="productId")
    quantity = fields.Integer(required=True, validate=validate.Range(min=1))


class UpdateItemSchema(Schema):
    product_id = fields.String(required=True, data_key="productId")
    quantity = fields.Integer(required=True, validate=validate.Range(min=0))


@cart_bp.route("", methods=["GET"])
@require_customer
def get_cart():
    """Get the caller's cart; an empty cart if none exists yet."""
    return jsonify(serialize_cart(CartService.get_cart(g.claims.user_id)))


@cart_bp.route("", methods=["POST"])
@require_customer
def add_item():
    """Add a product to the cart."""
    schema = AddItemSchema()
    payload = request.get_json(silent=True) or {}
    errors = schema.validate(payload)
    if errors:
        return jsonify({"errors": errors}), 400

    data = schema.load(payload)
    cart, created = CartService.add_item(g.claims.user_id, data["product_id"], data["quantity"])
    return jsonify(serialize_cart(cart)), 201 if created else 200


@cart_bp.route("", methods=["PUT"])
@require_customer
def update_item():
    """Change an item's quantity; a quantity of 0 removes it."""
    schema = UpdateItemSchema()
    payload = request.get_json(silent=True) or {}
    errors = schema.validate(payload)
    if errors:
        return jsonify({"errors": errors}), 400

    data = schema.load(payload)
    CartService.update_item(g.claims.user_id, data["product_id"], data["quantity"])
    return jsonify({"message": "Cart updated successfully"})


@cart_bp.route("/<product_id>", methods=["DELETE"])
@require_customer
def remove_item(product_id):
    CartService.remove_item(g.claims.user_id, product_id)
    return jsonify({"message": "Item removed from cart"})
