import logging
import time

import pymongo
from flask import current_app
from pymongo.errors import PyMongoError

from storefront.errors import InsufficientStockError, NotFoundError, ValidationError
from storefront.models.database import db, parse_object_id, utcnow
from storefront.models.documents import ORDER_STATUSES

logger = logging.getLogger(__name__)


def generate_order_code() -> str:
    return f"{current_app.config['ORDER_CODE_PREFIX']}-{time.time_ns()}"


class OrderService:
    """Handles checkout and order business logic."""

    @staticmethod
    def checkout(user_id) -> dict:
        """Turn the user's cart into an order.

        Stock is decremented item by item as the cart is walked. The walk is
        not transactional: when an item fails, the decrements already applied
        to earlier items stay in place and no order is written.
        """
        uid = parse_object_id(user_id, "user ID")

        with pymongo.timeout(current_app.config["CHECKOUT_TIMEOUT_SECONDS"]):
            cart = db.carts.find_one({"user_id": uid})
            if not cart or not cart.get("items"):
                raise ValidationError("Cart is empty")

            total = 0.0
            order_items = []

            for item in cart["items"]:
                product = db.products.find_one({"_id": item["product_id"]})
                if not product:
                    raise NotFoundError(f"Product {item['product_id']} not found")
                if product["stock"] < item["quantity"]:
                    raise InsufficientStockError(f"Insufficient stock for {product['name']}")

                # Guarded decrement: stock never drops below zero, even if
                # another checkout took units since the read above.
                result = db.products.update_one(
                    {"_id": product["_id"], "stock": {"$gte": item["quantity"]}},
                    {"$inc": {"stock": -item["quantity"]}, "$set": {"updated_at": utcnow()}},
                )
                if result.modified_count == 0:
                    raise InsufficientStockError(f"Insufficient stock for {product['name']}")

                order_items.append({
                    "product_id": product["_id"],
                    "quantity": item["quantity"],
                    "price": product["price"],
                })
                total += product["price"] * item["quantity"]

            now = utcnow()
            order = {
                "order_code": generate_order_code(),
                "user_id": uid,
                "items": order_items,
                "total": total,
                "status": "new",
                "created_at": now,
                "updated_at": now,
            }
            db.orders.insert_one(order)

            try:
                db.carts.delete_one({"_id": cart["_id"]})
            except PyMongoError:
                logger.warning("Failed to delete cart %s for user %s after checkout", cart["_id"], uid)

        logger.info("Order %s created for user %s, total %.2f", order["order_code"], uid, total)
        return order

    @staticmethod
    def get_user_orders(user_id) -> list:
        """Get all orders for a specific user, newest first."""
        uid = parse_object_id(user_id, "user ID")
        with pymongo.timeout(current_app.config["DB_TIMEOUT_SECONDS"]):
            return list(db.orders.find({"user_id": uid}).sort("created_at", pymongo.DESCENDING))

    @staticmethod
    def get_order(order_id, user_id) -> dict:
        """Get a specific order, ensuring it belongs to the requesting user."""
        oid = parse_object_id(order_id, "order ID")
        uid = parse_object_id(user_id, "user ID")
        with pymongo.timeout(current_app.config["DB_TIMEOUT_SECONDS"]):
            order = db.orders.find_one({"_id": oid, "user_id": uid})
        if not order:
            raise NotFoundError("Order not found")
        return order

    @staticmethod
    def list_orders() -> list:
        with pymongo.timeout(current_app.config["DB_TIMEOUT_SECONDS"]):
            return list(db.orders.find({}).sort("created_at", pymongo.DESCENDING))

    @staticmethod
    def update_status(order_id, status: str) -> None:
        oid = parse_object_id(order_id, "order ID")
        if status not in ORDER_STATUSES:
            raise ValidationError("Invalid status value")
        with pymongo.timeout(current_app.config["DB_TIMEOUT_SECONDS"]):
            result = db.orders.update_one(
                {"_id": oid},
                {"$set": {"status": status, "updated_at": utcnow()}},
            )
        if result.matched_count == 0:
            raise NotFoundError("Order not found")
        logger.info("Order %s status set to %s", oid, status)
