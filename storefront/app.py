import logging

from flask import Flask
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from storefront.config.settings import Config
from storefront.models.database import db
from storefront.api import (
    auth_bp,
    products_bp,
    cart_bp,
    orders_bp,
    admin_bp,
    user_bp,
    chatbot_bp,
)
from storefront.middleware.error_handler import register_error_handlers
from storefront.services.assistant_service import AssistantService
from storefront.seed import register_seed_command


def create_app(config_object=Config, mongo_client=None, assistant_client=None) -> Flask:
    """Application factory."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize extensions
    db.init_app(app, mongo_client)
    AssistantService.init_app(app, assistant_client)

    CORS(
        app,
        origins=app.config["CORS_ORIGINS"],
        allow_headers=["Origin", "Content-Type", "Authorization"],
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        max_age=12 * 60 * 60,
    )

    Limiter(
        app=app,
        key_func=get_remote_address,
        default_limits=[app.config["RATE_LIMIT_DEFAULT"]],
        storage_uri=app.config["RATELIMIT_STORAGE_URI"],
    )

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(chatbot_bp)

    # Register error handlers
    register_error_handlers(app)

    register_seed_command(app)

    return app
