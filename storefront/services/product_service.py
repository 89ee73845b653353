import logging
import math
import re
from typing import Optional, Tuple

import pymongo
from flask import current_app

from storefront.errors import NotFoundError, ValidationError
from storefront.models.database import db, parse_object_id, utcnow
from storefront.models.documents import new_product

logger = logging.getLogger(__name__)


def _check_product_fields(fields: dict) -> None:
    if fields["price"] <= 0:
        raise ValidationError("Price must be greater than 0")
    if fields["stock"] < 0:
        raise ValidationError("Stock must not be negative")


class ProductService:
    """Catalog access over the products collection."""

    @staticmethod
    def create_product(fields: dict) -> dict:
        _check_product_fields(fields)
        product = new_product(fields, utcnow())
        with pymongo.timeout(current_app.config["DB_TIMEOUT_SECONDS"]):
            product["_id"] = db.products.insert_one(product).inserted_id
        logger.info("Created product %s (%s)", product["_id"], product["name"])
        return product

    @staticmethod
    def list_products(
        name: Optional[str] = None,
        category: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[list, dict]:
        """Return one page of products matching the filters, plus paging metadata."""
        query = {}
        if name:
            query["name"] = {"$regex": re.escape(name), "$options": "i"}
        if category:
            query["category"] = category

        with pymongo.timeout(current_app.config["DB_TIMEOUT_SECONDS"]):
            cursor = db.products.find(query).skip((page - 1) * limit).limit(limit)
            products = list(cursor)
            total = db.products.count_documents(query)

        meta = {
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": math.ceil(total / limit),
        }
        return products, meta

    @staticmethod
    def get_product(product_id) -> dict:
        oid = parse_object_id(product_id, "product ID")
        with pymongo.timeout(current_app.config["DB_TIMEOUT_SECONDS"]):
            product = db.products.find_one({"_id": oid})
        if not product:
            raise NotFoundError("Product not found")
        return product

    @staticmethod
    def update_product(product_id, fields: dict) -> None:
        """Overwrite every editable field of a product."""
        oid = parse_object_id(product_id, "product ID")
        _check_product_fields(fields)
        update = {
            "name": fields["name"],
            "description": fields.get("description", ""),
            "price": float(fields["price"]),
            "stock": int(fields["stock"]),
            "category": fields["category"],
            "image_url": fields.get("image_url") or "",
            "updated_at": utcnow(),
        }
        with pymongo.timeout(current_app.config["DB_TIMEOUT_SECONDS"]):
            result = db.products.update_one({"_id": oid}, {"$set": update})
        if result.matched_count == 0:
            raise NotFoundError("Product not found")
        logger.info("Updated product %s", oid)

    @staticmethod
    def delete_product(product_id) -> None:
        oid = parse_object_id(product_id, "product ID")
        with pymongo.timeout(current_app.config["DB_TIMEOUT_SECONDS"]):
            result = db.products.delete_one({"_id": oid})
        if result.deleted_count == 0:
            raise NotFoundError("Product not found")
        logger.info("Deleted product %s", oid)

    @staticmethod
    def all_products() -> list:
        with pymongo.timeout(current_app.config["DB_TIMEOUT_SECONDS"]):
            return list(db.products.find({}))
