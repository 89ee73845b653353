from flask import Blueprint, jsonify, request
from marshmallow import Schema, fields, validate

from storefront.services.assistant_service import AssistantService

chatbot_bp = Blueprint("chatbot", __name__, url_prefix="/api/v1/chatbot")


class ChatSchema(Schema):
    prompt = fields.String(required=True, validate=validate.Length(min=1, max=2000))


@chatbot_bp.route("/ask", methods=["POST"])
def ask():
    """Answer a customer question about the catalog."""
    schema = ChatSchema()
    payload = request.get_json(silent=True) or {}
    errors = schema.validate(payload)
    if errors:
        return jsonify({"errors": errors}), 400

    data = schema.load(payload)
    reply = AssistantService.current().answer(data["prompt"])
    return jsonify({"reply": reply})
