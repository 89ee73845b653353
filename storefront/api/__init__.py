from storefront.api.auth import auth_bp
from storefront.api.products import products_bp
from storefront.api.cart import cart_bp
from storefront.api.orders import orders_bp
from storefront.api.admin import admin_bp
from storefront.api.user import user_bp
from storefront.api.chatbot import chatbot_bp

__all__ = [
    "auth_bp",
    "products_bp",
    "cart_bp",
    "orders_bp",
    "admin_bp",
    "user_bp",
    "chatbot_bp",
]
