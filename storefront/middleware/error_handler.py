import logging

import marshmallow
from flask import Flask, jsonify
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException

from storefront.errors import AppError

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Render every failure as a JSON body with a single error field."""

    @app.errorhandler(AppError)
    def handle_app_error(error):
        if error.status_code >= 500:
            logger.error("%s: %s", type(error).__name__, error.message, exc_info=error)
        return jsonify({"error": error.message}), error.status_code

    @app.errorhandler(marshmallow.ValidationError)
    def handle_schema_error(error):
        return jsonify({"errors": error.messages}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(PyMongoError)
    def handle_database_error(error):
        logger.exception("Database error")
        return jsonify({"error": "Internal server error"}), 500

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error"}), 500
