"""Document shapes stored in MongoDB and their JSON representations."""
from datetime import datetime
from typing import Optional

ORDER_STATUSES = ("new", "processing", "shipped", "completed", "cancelled")

ROLE_ADMIN = "admin"
ROLE_CUSTOMER = "customer"


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _id(value) -> Optional[str]:
    return str(value) if value is not None else None


def role_for_email(email: str) -> str:
    """Any address containing "admin" is provisioned as an administrator."""
    return ROLE_ADMIN if "admin" in email.lower() else ROLE_CUSTOMER


def new_user(name: str, email: str, password_hash: str, role: str, now: datetime) -> dict:
    return {
        "name": name,
        "email": email,
        "password_hash": password_hash,
        "role": role,
        "created_at": now,
        "updated_at": now,
    }


def new_product(fields: dict, now: datetime) -> dict:
    return {
        "name": fields["name"],
        "description": fields.get("description", ""),
        "price": float(fields["price"]),
        "stock": int(fields["stock"]),
        "category": fields["category"],
        "image_url": fields.get("image_url") or "",
        "created_at": now,
        "updated_at": now,
    }


def cart_item(product: dict, quantity: int) -> dict:
    """Line item with a snapshot of the product as it was when added."""
    return {
        "product_id": product["_id"],
        "quantity": quantity,
        "name": product["name"],
        "price": product["price"],
        "image_url": product.get("image_url", ""),
    }


def serialize_user(doc: dict) -> dict:
    return {
        "id": _id(doc["_id"]),
        "name": doc.get("name", ""),
        "email": doc["email"],
        "role": doc["role"],
        "created_at": _iso(doc.get("created_at")),
        "updated_at": _iso(doc.get("updated_at")),
    }


def serialize_product(doc: dict) -> dict:
    return {
        "id": _id(doc["_id"]),
        "name": doc["name"],
        "description": doc.get("description", ""),
        "price": doc["price"],
        "stock": doc["stock"],
        "category": doc.get("category", ""),
        "image_url": doc.get("image_url", ""),
        "created_at": _iso(doc.get("created_at")),
        "updated_at": _iso(doc.get("updated_at")),
    }


def serialize_cart(doc: dict) -> dict:
    items = [{
        "product_id": _id(item["product_id"]),
        "quantity": item["quantity"],
        "name": item.get("name", ""),
        "price": item.get("price", 0),
        "image_url": item.get("image_url", ""),
    } for item in doc.get("items", [])]
    return {
        "id": _id(doc.get("_id")),
        "user_id": _id(doc.get("user_id")),
        "items": items,
        "total": sum(item["price"] * item["quantity"] for item in items),
        "created_at": _iso(doc.get("created_at")),
        "updated_at": _iso(doc.get("updated_at")),
    }


def serialize_order(doc: dict) -> dict:
    return {
        "id": _id(doc["_id"]),
        "order_code": doc["order_code"],
        "user_id": _id(doc["user_id"]),
        "items": [{
            "product_id": _id(item["product_id"]),
            "quantity": item["quantity"],
            "price": item["price"],
        } for item in doc["items"]],
        "total": doc["total"],
        "status": doc["status"],
        "created_at": _iso(doc.get("created_at")),
        "updated_at": _iso(doc.get("updated_at")),
    }
