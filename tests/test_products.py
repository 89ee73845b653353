from bson import ObjectId

PRODUCT = {
    "name": "Plaid Flannel Shirt",
    "description": "Long-sleeve flannel",
    "price": 17.5,
    "stock": 50,
    "category": "Clothing",
    "image_url": "https://example.com/flannel.png",
}


def test_create_then_fetch_round_trip(client, admin):
    _, headers = admin

    created = client.post("/api/v1/products", headers=headers, json=PRODUCT)
    assert created.status_code == 201
    product_id = created.get_json()["id"]

    fetched = client.get(f"/api/v1/products/{product_id}").get_json()
    for field, value in PRODUCT.items():
        assert fetched[field] == value
    assert fetched["created_at"]


def test_create_rejects_non_positive_price_and_negative_stock(client, admin):
    _, headers = admin

    response = client.post(
        "/api/v1/products", headers=headers, json={**PRODUCT, "price": 0, "stock": -1}
    )

    assert response.status_code == 400
    assert {"price", "stock"} <= set(response.get_json()["errors"])


def test_create_requires_admin(client, customer):
    _, headers = customer

    assert client.post("/api/v1/products", headers=headers, json=PRODUCT).status_code == 403
    assert client.post("/api/v1/products", json=PRODUCT).status_code == 401


def test_list_filters_by_name_substring_and_category(client, make_product):
    make_product(name="Blue Baseball Cap", category="Accessories")
    make_product(name="Navy BLUE T-Shirt", category="Clothing")
    make_product(name="Slim Jeans", category="Trousers")

    by_name = client.get("/api/v1/products?name=blue").get_json()
    assert sorted(p["name"] for p in by_name["data"]) == ["Blue Baseball Cap", "Navy BLUE T-Shirt"]

    both = client.get("/api/v1/products?name=blue&category=Clothing").get_json()
    assert [p["name"] for p in both["data"]] == ["Navy BLUE T-Shirt"]


def test_name_filter_is_literal_not_regex(client, make_product):
    make_product(name="Cap (XL)")
    make_product(name="Cap XL")

    result = client.get("/api/v1/products?name=(XL)").get_json()

    assert [p["name"] for p in result["data"]] == ["Cap (XL)"]


def test_pagination_meta(client, make_product):
    for i in range(7):
        make_product(name=f"Item {i}")

    page = client.get("/api/v1/products?page=2&limit=3").get_json()

    assert len(page["data"]) == 3
    assert page["meta"] == {"total": 7, "page": 2, "limit": 3, "total_pages": 3}


def test_pagination_defaults_when_params_are_not_numbers(client, make_product):
    for i in range(12):
        make_product(name=f"Item {i}")

    page = client.get("/api/v1/products?page=abc&limit=zero").get_json()

    assert len(page["data"]) == 10
    assert page["meta"]["page"] == 1
    assert page["meta"]["limit"] == 10
    assert page["meta"]["total_pages"] == 2


def test_get_unknown_or_malformed_id(client):
    assert client.get(f"/api/v1/products/{ObjectId()}").status_code == 404
    response = client.get("/api/v1/products/not-an-id")
    assert response.status_code == 400
    assert response.get_json() == {"error": "Invalid product ID"}


def test_update_overwrites_all_fields(client, admin, make_product):
    _, headers = admin
    product_id = make_product()
    replacement = {**PRODUCT, "name": "Renamed", "price": 99.0, "stock": 1, "image_url": ""}

    response = client.put(f"/api/v1/products/{product_id}", headers=headers, json=replacement)
    assert response.status_code == 200

    fetched = client.get(f"/api/v1/products/{product_id}").get_json()
    for field, value in replacement.items():
        assert fetched[field] == value


def test_update_and_delete_unknown_product(client, admin):
    _, headers = admin
    missing = str(ObjectId())

    assert client.put(f"/api/v1/products/{missing}", headers=headers, json=PRODUCT).status_code == 404
    assert client.delete(f"/api/v1/products/{missing}", headers=headers).status_code == 404


def test_delete_product(client, admin, make_product):
    _, headers = admin
    product_id = make_product()

    assert client.delete(f"/api/v1/products/{product_id}", headers=headers).status_code == 200
    assert client.get(f"/api/v1/products/{product_id}").status_code == 404


def test_pagination_clamps_huge_page_and_limit(client, make_product):
    make_product(name="Only one")

    response = client.get(f"/api/v1/products?page={10**20}&limit={10**9}")

    assert response.status_code == 200
    meta = response.get_json()["meta"]
    assert meta["page"] == 100_000
    assert meta["limit"] == 100
    assert response.get_json()["data"] == []


def test_invalid_product_body_reports_errors(client, admin, make_product):
    _, headers = admin
    product_id = make_product()

    response = client.put(f"/api/v1/products/{product_id}", headers=headers, json={"name": "x"})

    assert response.status_code == 400
    assert {"price", "stock", "category", "description"} <= set(response.get_json()["errors"])
