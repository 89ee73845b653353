import logging
from typing import Optional, Tuple

import pymongo
from bson import ObjectId
from flask import current_app
from pymongo.errors import DuplicateKeyError

from storefront.errors import ConflictError, InsufficientStockError, NotFoundError
from storefront.models.database import db, parse_object_id, utcnow
from storefront.models.documents import cart_item

logger = logging.getLogger(__name__)


def _load_product(product_id: ObjectId, quantity: int) -> dict:
    product = db.products.find_one({"_id": product_id})
    if not product:
        raise NotFoundError("Product not found")
    if product["stock"] < quantity:
        raise InsufficientStockError(f"Insufficient stock for {product['name']}")
    return product


class CartService:
    """Keeps a single active cart per user.

    Stock is checked whenever the cart changes, but nothing is reserved:
    checkout re-validates every line item against the live stock.
    """

    @staticmethod
    def _find_cart(user_id: ObjectId) -> Optional[dict]:
        return db.carts.find_one({"user_id": user_id})

    @staticmethod
    def get_cart(user_id) -> dict:
        """Return the user's cart, or an unsaved empty cart if there is none."""
        uid = parse_object_id(user_id, "user ID")
        with pymongo.timeout(current_app.config["DB_TIMEOUT_SECONDS"]):
            cart = CartService._find_cart(uid)
        return cart or {"user_id": uid, "items": []}

    @staticmethod
    def add_item(user_id, product_id, quantity: int) -> Tuple[dict, bool]:
        """Add ``quantity`` units of a product. Returns the cart and whether it was created."""
        uid = parse_object_id(user_id, "user ID")
        pid = parse_object_id(product_id, "product ID")

        with pymongo.timeout(current_app.config["DB_TIMEOUT_SECONDS"]):
            product = _load_product(pid, quantity)

            cart = CartService._find_cart(uid)
            if cart is None:
                now = utcnow()
                new_cart = {
                    "user_id": uid,
                    "items": [cart_item(product, quantity)],
                    "created_at": now,
                    "updated_at": now,
                }
                try:
                    db.carts.insert_one(new_cart)
                    return new_cart, True
                except DuplicateKeyError:
                    logger.info("Cart for user %s created concurrently, merging", uid)
                    cart = CartService._find_cart(uid)
                    if cart is None:
                        raise ConflictError("Cart changed during the request, please retry")

            existing = next((item for item in cart["items"] if item["product_id"] == pid), None)
            now = utcnow()
            if existing is not None:
                new_quantity = existing["quantity"] + quantity
                if product["stock"] < new_quantity:
                    raise InsufficientStockError("Insufficient stock for updated quantity")
                result = db.carts.update_one(
                    {"_id": cart["_id"], "items.product_id": pid},
                    {"$set": {"items.$.quantity": new_quantity, "updated_at": now}},
                )
            else:
                result = db.carts.update_one(
                    {"_id": cart["_id"], "items.product_id": {"$ne": pid}},
                    {"$push": {"items": cart_item(product, quantity)}, "$set": {"updated_at": now}},
                )
            if result.matched_count == 0:
                raise ConflictError("Cart changed during the request, please retry")

            return db.carts.find_one({"_id": cart["_id"]}), False

    @staticmethod
    def update_item(user_id, product_id, quantity: int) -> None:
        """Set an item's quantity; zero removes the item."""
        uid = parse_object_id(user_id, "user ID")
        pid = parse_object_id(product_id, "product ID")

        with pymongo.timeout(current_app.config["DB_TIMEOUT_SECONDS"]):
            if quantity > 0:
                _load_product(pid, quantity)
                update = {"$set": {"items.$.quantity": quantity, "updated_at": utcnow()}}
            else:
                update = {
                    "$pull": {"items": {"product_id": pid}},
                    "$set": {"updated_at": utcnow()},
                }
            result = db.carts.update_one({"user_id": uid, "items.product_id": pid}, update)

        if result.matched_count == 0:
            raise NotFoundError("Cart or item not found")

    @staticmethod
    def remove_item(user_id, product_id) -> None:
        uid = parse_object_id(user_id, "user ID")
        pid = parse_object_id(product_id, "product ID")

        with pymongo.timeout(current_app.config["DB_TIMEOUT_SECONDS"]):
            result = db.carts.update_one(
                {"user_id": uid, "items.product_id": pid},
                {"$pull": {"items": {"product_id": pid}}, "$set": {"updated_at": utcnow()}},
            )
        if result.modified_count == 0:
            raise NotFoundError("Item not found in cart")
