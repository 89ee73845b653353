from flask import Blueprint, request, jsonify
from marshmallow import Schema, fields, validate

from storefront.middleware.auth import require_admin
from storefront.models.documents import serialize_product
from storefront.services.product_service import ProductService

products_bp = Blueprint("products", __name__, url_prefix="/api/v1/products")


class ProductSchema(Schema):
    name = fields.String(required=True, validate=validate.Length(min=1))
    description = fields.String(required=True)
    price = fields.Float(required=True, validate=validate.Range(min=0, min_inclusive=False))
    stock = fields.Integer(required=True, validate=validate.Range(min=0))
    category = fields.String(required=True, validate=validate.Length(min=1))
    image_url = fields.String(load_default="")


MAX_PAGE = 100_000
MAX_LIMIT = 100


def _positive_int(value, default: int, maximum: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if number < 1:
        return default
    return min(number, maximum)


@products_bp.route("", methods=["GET"])
def list_products():
    """List products with optional name/category filters and pagination."""
    products, meta = ProductService.list_products(
        name=request.args.get("name") or None,
        category=request.args.get("category") or None,
        page=_positive_int(request.args.get("page"), 1, MAX_PAGE),
        limit=_positive_int(request.args.get("limit"), 10, MAX_LIMIT),
    )
    return jsonify({
        "data": [serialize_product(p) for p in products],
        "meta": meta,
    })


@products_bp.route("/<product_id>", methods=["GET"])
def get_product(product_id):
    return jsonify(serialize_product(ProductService.get_product(product_id)))


@products_bp.route("", methods=["POST"])
@require_admin
def create_product():
    """Create a product (admin only)."""
    schema = ProductSchema()
    payload = request.get_json(silent=True) or {}
    errors = schema.validate(payload)
    if errors:
        return jsonify({"errors": errors}), 400

    data = schema.load(payload)
    product = ProductService.create_product(data)
    return jsonify(serialize_product(product)), 201


@products_bp.route("/<product_id>", methods=["PUT"])
@require_admin
def update_product(product_id):
    """Replace a product's fields (admin only)."""
    schema = ProductSchema()
    payload = request.get_json(silent=True) or {}
    errors = schema.validate(payload)
    if errors:
        return jsonify({"errors": errors}), 400

    data = schema.load(payload)
    ProductService.update_product(product_id, data)
    return jsonify({"message": "Product updated successfully"})


@products_bp.route("/<product_id>", methods=["DELETE"])
@require_admin
def delete_product(product_id):
    ProductService.delete_product(product_id)
    return jsonify({"message": "Product deleted successfully"})
