# tests/test_products_write.py

def _count(client):
    return client.get("/api/products").json()["pagination"]["totalProducts"]


def test_create_product(client, auth, new_product):
    r = client.post("/api/products", json=new_product, headers=auth)
    assert r.status_code == 201
    body = r.json()
    assert body["id"] not in ("1", "2", "3")
    assert body["inStock"] is True
    assert {k: body[k] for k in new_product} == new_product

    fetched = client.get(f"/api/products/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == body
    assert _count(client) == 4


def test_create_keeps_explicit_in_stock(client, auth, new_product):
    body = client.post("/api/products", json={**new_product, "inStock": False}, headers=auth).json()
    assert body["inStock"] is False


def test_create_ignores_client_supplied_id(client, auth, new_product):
    body = client.post("/api/products", json={**new_product, "id": "1"}, headers=auth).json()
    assert body["id"] != "1"
    assert client.get("/api/products/1").json()["name"] == "Laptop"


def test_create_accepts_bearer_authorization(client, api_key, new_product):
    r = client.post("/api/products", json=new_product, headers={"Authorization": f"Bearer {api_key}"})
    assert r.status_code == 201


def test_create_accepts_raw_authorization(client, api_key, new_product):
    r = client.post("/api/products", json=new_product, headers={"Authorization": api_key})
    assert r.status_code == 201


def test_create_without_key_is_rejected(client, new_product):
    r = client.post("/api/products", json=new_product)
    assert r.status_code == 401
    assert r.json()["success"] is False
    assert r.json()["error"]["message"].startswith("API key is required")
    assert _count(client) == 3


def test_create_with_wrong_key_is_rejected(client, new_product):
    r = client.post("/api/products", json=new_product, headers={"x-api-key": "nope"})
    assert r.status_code == 401
    assert r.json()["error"]["message"] == "Invalid API key provided."
    assert _count(client) == 3


def test_authentication_runs_before_validation(client):
    r = client.post("/api/products", json={"price": -1})
    assert r.status_code == 401


def test_create_negative_price(client, auth, new_product):
    r = client.post("/api/products", json={**new_product, "price": -1}, headers=auth)
    assert r.status_code == 400
    assert "non-negative" in r.json()["error"]["message"]
    assert _count(client) == 3


def test_create_reports_every_violation(client, auth):
    r = client.post("/api/products", json={"name": "", "price": "cheap"}, headers=auth)
    assert r.status_code == 400
    assert r.json()["error"]["message"] == (
        "Validation failed: Name is required and must be a non-empty string, "
        "Description is required and must be a non-empty string, "
        "Price must be a non-negative number, "
        "Category is required and must be a non-empty string"
    )


def test_create_with_malformed_json(client, auth):
    r = client.post(
        "/api/products",
        content=b'{"name": "Lamp",',
        headers={**auth, "content-type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Invalid JSON format in request body"


def test_create_with_non_object_json(client, auth):
    r = client.post("/api/products", json=["Lamp"], headers=auth)
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Request body must be a JSON object"


def test_update_merges_fields(client, auth):
    r = client.put("/api/products/1", json={"price": 999.5, "inStock": False}, headers=auth)
    assert r.status_code == 200
    assert r.json() == {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 999.5,
        "category": "electronics",
        "inStock": False,
    }
    assert client.get("/api/products/1").json()["price"] == 999.5


def test_update_never_changes_id(client, auth):
    r = client.put("/api/products/2", json={"id": "99", "name": "Phone"}, headers=auth)
    assert r.status_code == 200
    assert r.json()["id"] == "2"
    assert r.json()["name"] == "Phone"
    assert client.get("/api/products/99").status_code == 404


def test_update_empty_body(client, auth):
    r = client.put("/api/products/1", json={}, headers=auth)
    assert r.status_code == 400
    assert r.json()["error"]["message"] == (
        "Validation failed: At least one field must be provided for update"
    )


def test_update_missing_body_counts_as_empty(client, auth):
    r = client.put("/api/products/1", headers=auth)
    assert r.status_code == 400
    assert "At least one field" in r.json()["error"]["message"]


def test_update_invalid_fields(client, auth):
    r = client.put("/api/products/1", json={"name": "   ", "inStock": "yes"}, headers=auth)
    assert r.status_code == 400
    assert r.json()["error"]["message"] == (
        "Validation failed: Name must be a non-empty string, inStock must be a boolean value"
    )


def test_update_unknown_product(client, auth):
    r = client.put("/api/products/nope", json={"name": "X"}, headers=auth)
    assert r.status_code == 404
    assert r.json()["error"]["message"] == "Product not found"


def test_update_requires_key(client):
    assert client.put("/api/products/1", json={"name": "X"}).status_code == 401
    assert client.get("/api/products/1").json()["name"] == "Laptop"


def test_delete_twice(client, auth):
    first = client.delete("/api/products/3", headers=auth)
    assert first.status_code == 200
    assert first.json()["message"] == "Product deleted successfully"
    assert first.json()["product"]["name"] == "Coffee Maker"

    second = client.delete("/api/products/3", headers=auth)
    assert second.status_code == 404
    assert client.get("/api/products/3").status_code == 404
    assert _count(client) == 2


def test_delete_requires_key(client):
    assert client.delete("/api/products/1").status_code == 401
    assert client.get("/api/products/1").status_code == 200


def test_huge_integer_price_is_a_validation_error(client, auth):
    body = '{"price": 1%s}' % ("0" * 400)
    headers = {**auth, "content-type": "application/json"}

    created = client.post(
        "/api/products",
        content=body[:-1] + ', "name": "Lamp", "description": "Desk", "category": "home"}',
        headers=headers,
    )
    assert created.status_code == 400
    assert created.json()["error"]["message"] == "Validation failed: Price must be less than $999,999.99"

    updated = client.put("/api/products/1", content=body, headers=headers)
    assert updated.status_code == 400
    assert updated.json()["error"]["message"] == "Validation failed: Price must be less than $999,999.99"
    assert _count(client) == 3
