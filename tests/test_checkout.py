from bson import ObjectId
from pymongo.errors import PyMongoError


def add(client, headers, product_id, quantity):
    response = client.post(
        "/api/v1/cart", headers=headers, json={"productId": product_id, "quantity": quantity}
    )
    assert response.status_code in (200, 201)


def stock_of(mongo, product_id):
    return mongo.products.find_one({"_id": ObjectId(product_id)})["stock"]


def checkout(client, headers):
    return client.post("/api/v1/orders/checkout", headers=headers)


def test_checkout_creates_order_decrements_stock_and_deletes_cart(client, customer, make_product, mongo):
    user_id, headers = customer
    p1 = make_product(name="P1", price=12.5, stock=2)
    p2 = make_product(name="P2", price=4.0, stock=5)
    add(client, headers, p1, 2)
    add(client, headers, p2, 1)

    response = checkout(client, headers)

    assert response.status_code == 201
    order = response.get_json()["order"]
    assert order["total"] == 12.5 * 2 + 4.0 * 1
    assert order["status"] == "new"
    assert order["user_id"] == user_id
    assert order["order_code"].startswith("SF-")
    assert order["items"] == [
        {"product_id": p1, "quantity": 2, "price": 12.5},
        {"product_id": p2, "quantity": 1, "price": 4.0},
    ]
    assert stock_of(mongo, p1) == 0
    assert stock_of(mongo, p2) == 4
    assert mongo.carts.count_documents({"user_id": ObjectId(user_id)}) == 0


def test_order_price_is_the_price_at_checkout(client, customer, make_product, mongo):
    _, headers = customer
    product_id = make_product(price=10.0, stock=3)
    add(client, headers, product_id, 1)
    mongo.products.update_one({"_id": ObjectId(product_id)}, {"$set": {"price": 11.0}})

    order = checkout(client, headers).get_json()["order"]

    assert order["items"][0]["price"] == 11.0
    assert order["total"] == 11.0


def test_checkout_without_cart_or_with_empty_cart(client, customer, make_product):
    _, headers = customer

    response = checkout(client, headers)
    assert response.status_code == 400
    assert response.get_json() == {"error": "Cart is empty"}

    product_id = make_product()
    add(client, headers, product_id, 1)
    client.delete(f"/api/v1/cart/{product_id}", headers=headers)
    assert checkout(client, headers).status_code == 400


def test_failed_checkout_keeps_earlier_decrements(client, customer, make_product, mongo):
    user_id, headers = customer
    p1 = make_product(name="P1", stock=5)
    p2 = make_product(name="P2", stock=5)
    p3 = make_product(name="P3", stock=5)
    add(client, headers, p1, 2)
    add(client, headers, p2, 3)
    add(client, headers, p3, 1)
    # Stock of the second item drops after it was put in the cart.
    mongo.products.update_one({"_id": ObjectId(p2)}, {"$set": {"stock": 1}})

    response = checkout(client, headers)

    assert response.status_code == 400
    assert response.get_json() == {"error": "Insufficient stock for P2"}
    assert mongo.orders.count_documents({}) == 0
    # Not transactional: the first item's decrement is not rolled back.
    assert stock_of(mongo, p1) == 3
    assert stock_of(mongo, p2) == 1
    assert stock_of(mongo, p3) == 5
    assert mongo.carts.count_documents({"user_id": ObjectId(user_id)}) == 1


def test_checkout_with_deleted_product_fails(client, customer, admin, make_product, mongo):
    _, headers = customer
    _, admin_headers = admin
    product_id = make_product()
    add(client, headers, product_id, 1)
    client.delete(f"/api/v1/products/{product_id}", headers=admin_headers)

    response = checkout(client, headers)

    assert response.status_code == 404
    assert mongo.orders.count_documents({}) == 0


def test_cart_delete_failure_does_not_fail_checkout(app, client, customer, make_product, mongo, monkeypatch):
    user_id, headers = customer
    product_id = make_product(stock=2)
    add(client, headers, product_id, 1)

    carts = type(mongo.carts)

    def broken_delete(self, *args, **kwargs):
        raise PyMongoError("connection reset")

    monkeypatch.setattr(carts, "delete_one", broken_delete)

    response = checkout(client, headers)

    assert response.status_code == 201
    assert mongo.orders.count_documents({}) == 1
    assert mongo.carts.count_documents({"user_id": ObjectId(user_id)}) == 1


def test_orders_listing_and_ownership(client, make_user, make_product):
    _, alice = make_user("alice@test.com")
    _, bob = make_user("bob@test.com")
    product_id = make_product(stock=10)

    add(client, alice, product_id, 1)
    first = checkout(client, alice).get_json()["order"]
    add(client, alice, product_id, 2)
    second = checkout(client, alice).get_json()["order"]

    listed = client.get("/api/v1/orders", headers=alice).get_json()
    assert {o["id"] for o in listed} == {first["id"], second["id"]}
    assert client.get("/api/v1/orders", headers=bob).get_json() == []

    assert client.get(f"/api/v1/orders/{first['id']}", headers=alice).get_json()["id"] == first["id"]
    assert client.get(f"/api/v1/orders/{first['id']}", headers=bob).status_code == 404
    assert client.get("/api/v1/orders/not-an-id", headers=alice).status_code == 400
