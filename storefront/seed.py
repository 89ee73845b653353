"""Sample data for local development: ``flask --app storefront.app seed``."""
import logging

import click
from flask import Flask

from storefront.models.database import db, utcnow
from storefront.models.documents import ROLE_ADMIN, ROLE_CUSTOMER, new_product, new_user
from storefront.services.auth_service import AuthService

logger = logging.getLogger(__name__)

SEED_USERS = [
    ("Admin User", "admin@storefront.local", "admin123", ROLE_ADMIN),
    ("First Customer", "customer1@storefront.local", "customer123", ROLE_CUSTOMER),
]

SEED_PRODUCTS = [
    {
        "name": "Navy Blue Plain T-Shirt",
        "description": "Combed cotton tee, soft and breathable.",
        "price": 85000,
        "stock": 100,
        "category": "Clothing",
        "image_url": "https://placehold.co/600x400/1E3A8A/FFFFFF?text=T-Shirt",
    },
    {
        "name": "Plaid Flannel Shirt",
        "description": "Long-sleeve flannel shirt for a casual look.",
        "price": 175000,
        "stock": 50,
        "category": "Clothing",
        "image_url": "https://placehold.co/600x400/9CA3AF/FFFFFF?text=Flannel",
    },
    {
        "name": "Slim Fit Jeans",
        "description": "Stretch denim jeans.",
        "price": 250000,
        "stock": 75,
        "category": "Trousers",
        "image_url": "https://placehold.co/600x400/374151/FFFFFF?text=Jeans",
    },
    {
        "name": "Blue Baseball Cap",
        "description": "Baseball cap with the store logo.",
        "price": 60000,
        "stock": 200,
        "category": "Accessories",
        "image_url": "https://placehold.co/600x400/3B82F6/FFFFFF?text=Cap",
    },
]


def seed_users() -> int:
    if db.users.count_documents({}):
        logger.info("Users already seeded. Skipping.")
        return 0
    now = utcnow()
    db.users.insert_many([
        new_user(name, email, AuthService.hash_password(password), role, now)
        for name, email, password, role in SEED_USERS
    ])
    return len(SEED_USERS)


def seed_products() -> int:
    if db.products.count_documents({}):
        logger.info("Products already seeded. Skipping.")
        return 0
    now = utcnow()
    db.products.insert_many([new_product(fields, now) for fields in SEED_PRODUCTS])
    return len(SEED_PRODUCTS)


def register_seed_command(app: Flask) -> None:
    @app.cli.command("seed")
    def seed():
        """Insert sample users and products into an empty database."""
        users = seed_users()
        products = seed_products()
        click.echo(f"Seeded {users} users and {products} products.")
