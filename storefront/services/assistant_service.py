import json
import logging

from flask import Flask, current_app
from openai import OpenAI, OpenAIError
from pymongo.errors import PyMongoError

from storefront.errors import UpstreamError
from storefront.services.product_service import ProductService

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """\
You are the shopping assistant of the online store '{store_name}'.
Answer the customer's question in a friendly, helpful and informative way,
using only the product data below.

Our products, as JSON:
{catalog}

Based on the data above, answer this customer question: "{question}"
"""

FALLBACK_REPLY = "Sorry, I can't give you an answer right now."


def catalog_context(products: list) -> str:
    return json.dumps([{
        "id": str(p["_id"]),
        "name": p["name"],
        "description": p.get("description", ""),
        "price": p["price"],
        "stock": p["stock"],
        "category": p.get("category", ""),
    } for p in products])


def first_choice_text(response) -> str:
    """Concatenate the text segments of the first returned choice."""
    if not response.choices:
        return ""
    content = response.choices[0].message.content
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    return "".join(getattr(part, "text", "") or "" for part in content)


class AssistantService:
    """Answers customer questions with a language model, grounded on the catalog."""

    def __init__(self, client, model: str, store_name: str):
        self.client = client
        self.model = model
        self.store_name = store_name

    @classmethod
    def init_app(cls, app: Flask, client=None) -> "AssistantService":
        if client is None and app.config.get("OPENAI_API_KEY"):
            client = OpenAI(
                api_key=app.config["OPENAI_API_KEY"],
                base_url=app.config.get("ASSISTANT_BASE_URL") or None,
            )
        service = cls(client, app.config["ASSISTANT_MODEL"], app.config["STORE_NAME"])
        app.extensions["assistant"] = service
        return service

    @staticmethod
    def current() -> "AssistantService":
        return current_app.extensions["assistant"]

    def build_prompt(self, question: str, products: list) -> str:
        return PROMPT_TEMPLATE.format(
            store_name=self.store_name,
            catalog=catalog_context(products),
            question=question,
        )

    def answer(self, question: str) -> str:
        try:
            products = ProductService.all_products()
        except PyMongoError:
            logger.warning("Could not load products for assistant context", exc_info=True)
            products = []

        if self.client is None:
            raise UpstreamError("Assistant is not configured")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": self.build_prompt(question, products)}],
            )
        except OpenAIError as e:
            raise UpstreamError("Failed to process your request") from e

        return first_choice_text(response) or FALLBACK_REPLY
