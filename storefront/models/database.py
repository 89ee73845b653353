from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId
from flask import Flask, current_app
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

from storefront.errors import ValidationError

USERS = "users"
PRODUCTS = "products"
CARTS = "carts"
ORDERS = "orders"


class MongoDB:
    """Binds a shared MongoClient connection pool to a Flask app."""

    def __init__(self, app: Flask = None, client: MongoClient = None):
        if app is not None:
            self.init_app(app, client)

    def init_app(self, app: Flask, client: MongoClient = None) -> None:
        if client is None:
            client = MongoClient(app.config["MONGO_URI"], tz_aware=True)
        database = client[app.config["MONGO_DATABASE"]]
        app.extensions["mongo_client"] = client
        app.extensions["mongo_db"] = database
        ensure_indexes(database)

    @property
    def database(self) -> Database:
        return current_app.extensions["mongo_db"]

    @property
    def users(self):
        return self.database[USERS]

    @property
    def products(self):
        return self.database[PRODUCTS]

    @property
    def carts(self):
        return self.database[CARTS]

    @property
    def orders(self):
        return self.database[ORDERS]


def ensure_indexes(database: Database) -> None:
    """Create the indexes the data model relies on for its invariants."""
    database[USERS].create_index([("email", ASCENDING)], unique=True)
    # One cart per user, even when two first add-to-cart calls race.
    database[CARTS].create_index([("user_id", ASCENDING)], unique=True)
    database[ORDERS].create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])
    database[PRODUCTS].create_index([("category", ASCENDING)])


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_object_id(value, label: str = "ID") -> ObjectId:
    """Parse a 24-hex identifier, raising ValidationError when malformed."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise ValidationError(f"Invalid {label}")


db = MongoDB()
