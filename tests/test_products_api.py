"""HTTP contract for the /products endpoints."""

import pytest_asyncio


@pytest_asyncio.fixture
async def product_id(client, auth_headers, product_payload):
    resp = await client.post("/products", json=product_payload, headers=auth_headers)
    return resp.json()["product"]["productId"]


async def test_create_product(client, auth_headers, product_payload):
    resp = await client.post("/products", json=product_payload, headers=auth_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "SUCCESS"
    assert body["message"] == "Product created successfully"
    assert body["product"]["productId"]


async def test_create_product_requires_token(client, product_payload):
    resp = await client.post("/products", json=product_payload)
    assert resp.status_code == 401
    assert resp.json() == {"status": "ERROR", "message": "Access denied"}


async def test_create_product_missing_category(client, auth_headers, product_payload):
    del product_payload["category"]
    resp = await client.post("/products", json=product_payload, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json() == {"status": "ERROR", "message": "Name, price, and category are required"}

    listing = await client.get("/products", headers=auth_headers)
    assert listing.json()["products"] == []


async def test_create_product_rejects_unknown_category(client, auth_headers, product_payload):
    product_payload["category"] = "Toys"
    resp = await client.post("/products", json=product_payload, headers=auth_headers)
    assert resp.status_code == 422
    assert resp.json()["status"] == "ERROR"


async def test_create_product_rejects_unknown_fields(client, auth_headers, product_payload):
    product_payload["id"] = "client-chosen"
    resp = await client.post("/products", json=product_payload, headers=auth_headers)
    assert resp.status_code == 422
    assert "id" in resp.json()["message"]


async def test_create_product_requires_campaign(client, auth_headers, product_payload):
    del product_payload["campaign"]
    resp = await client.post("/products", json=product_payload, headers=auth_headers)
    assert resp.status_code == 422
    assert "campaign" in resp.json()["message"]


async def test_get_product(client, auth_headers, product_id):
    resp = await client.get(f"/products/{product_id}", headers=auth_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "SUCCESS"
    product = body["product"]
    assert product["id"] == product_id
    assert product["category"] == "Clothing"
    assert product["price"] == 20
    assert product["deleted"] is False
    assert product["campaign"]["name"] == "Sale"
    assert product["campaign"]["productId"] == product_id
    assert product["campaignId"] == product["campaign"]["id"]


async def test_get_unknown_product(client, auth_headers):
    resp = await client.get("/products/nope", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json() == {"status": "ERROR", "message": "Product not found"}


async def test_list_products(client, auth_headers, product_id):
    resp = await client.get("/products", headers=auth_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "SUCCESS"
    assert [p["id"] for p in body["products"]] == [product_id]
    assert body["products"][0]["campaign"]["percentage"] == "10"


async def test_update_product(client, auth_headers, product_payload, product_id):
    update = dict(product_payload, name="Shirt v2", campaign={"name": "Clearance", "amount": 9, "percentage": 25})
    resp = await client.put(f"/products/{product_id}", json=update, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"status": "SUCCESS", "message": "Product updated successfully"}

    product = (await client.get(f"/products/{product_id}", headers=auth_headers)).json()["product"]
    assert product["name"] == "Shirt v2"
    assert product["campaign"]["name"] == "Clearance"
    assert product["campaign"]["percentage"] == "25"


async def test_update_unknown_product(client, auth_headers, product_payload):
    resp = await client.put("/products/nope", json=product_payload, headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json()["status"] == "ERROR"


async def test_update_requires_core_fields(client, auth_headers, product_payload, product_id):
    del product_payload["price"]
    resp = await client.put(f"/products/{product_id}", json=product_payload, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Name, price, and category are required"


async def test_delete_product(client, auth_headers, product_id):
    for _ in range(2):
        resp = await client.delete(f"/products/{product_id}", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json() == {"status": "SUCCESS", "message": "Product deleted successfully"}

    resp = await client.get(f"/products/{product_id}", headers=auth_headers)
    assert resp.status_code == 404
    listing = await client.get("/products", headers=auth_headers)
    assert listing.json()["products"] == []


async def test_delete_unknown_product(client, auth_headers):
    resp = await client.delete("/products/nope", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == "SUCCESS"


async def test_unauthenticated_request_never_opens_a_session(app, client, monkeypatch):
    opened = []

    def tracking_sessionmaker():
        opened.append(True)
        raise AssertionError("session opened before the token was checked")

    monkeypatch.setattr(app.state, "sessionmaker", tracking_sessionmaker)

    resp = await client.get("/products")
    assert resp.status_code == 401
    assert resp.json() == {"status": "ERROR", "message": "Access denied"}
    assert opened == []
