from routers.products.helpers import CatalogHelpers
from utils.errors import ValidationFailed, ProductNotFound
import pytest


def test_first_category_is_dairy(client):
    response = client.get("/categories")
    assert response.status_code == 200
    categories = response.json()
    assert len(categories) == 8
    assert categories[0]["name"] == "Dairy"


def test_created_category_can_be_fetched(client):
    response = client.post("/categories", json={"name": "Frozen", "image": "frozen.png"})
    assert response.status_code == 201
    created = response.json()
    assert created["id"] == 9

    fetched = client.get(f"/categories/{created['id']}").json()
    assert fetched == created


def test_unknown_category_is_404(client):
    response = client.get("/categories/99")
    assert response.status_code == 404
    assert response.json()["message"] == "Category with id 99 not found"


def test_products_by_category(client):
    products = client.get("/products", params={"categoryId": 2}).json()
    assert [p["id"] for p in products] == [4, 5, 6]
    assert all(p["categoryId"] == 2 for p in products)


def test_search_is_case_insensitive_over_name_and_description(client):
    assert [p["name"] for p in client.get("/products", params={"search": "MILK"}).json()] == ["Organic Milk"]
    assert [p["id"] for p in client.get("/products", params={"search": "juicy"}).json()] == [6]


def test_category_filter_wins_over_search(client):
    products = client.get("/products", params={"categoryId": 3, "search": "milk"}).json()
    assert [p["name"] for p in products] == ["Cherry Tomatoes"]


def test_popular_and_new_arrivals(client):
    assert [p["id"] for p in client.get("/products/popular").json()] == [1, 2, 3, 4]
    assert [p["id"] for p in client.get("/products/new").json()] == [5, 6, 7, 8]


def test_product_wire_format_is_camel_case(client):
    product = client.get("/products/3").json()
    assert product["unitValue"] == 400
    assert product["isPopular"] is True
    assert product["discount"] == 12
    assert "unit_value" not in product


def test_unknown_product_is_404(client):
    assert client.get("/products/42").status_code == 404


def test_create_product_starts_at_given_stock(client):
    response = client.post("/products", json={
        "name": "Paneer", "price": 90, "mrp": 100, "image": "paneer.png",
        "unitValue": 200, "unitType": "g", "categoryId": 1, "stock": 10,
    })
    assert response.status_code == 201
    assert response.json()["id"] == 9
    assert client.get("/products/9").json()["stock"] == 10


def test_create_product_rejects_negative_price(client):
    response = client.post("/products", json={
        "name": "Paneer", "price": -1, "mrp": 100, "image": "paneer.png",
        "unitValue": 200, "unitType": "g", "categoryId": 1,
    })
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request data"


def test_update_stock_replaces_value(client):
    response = client.patch("/products/1/stock", json={"stock": 7})
    assert response.status_code == 200
    assert response.json()["stock"] == 7
    assert client.get("/products/1").json()["stock"] == 7


def test_update_stock_rejects_negative(client):
    response = client.patch("/products/1/stock", json={"stock": -1})
    assert response.status_code == 400
    assert client.get("/products/1").json()["stock"] == 50


def test_update_stock_unknown_product(client):
    assert client.patch("/products/99/stock", json={"stock": 1}).status_code == 404


def test_helper_stock_validation(store):
    catalog = CatalogHelpers(store)
    with pytest.raises(ValidationFailed):
        catalog.update_stock(1, -5)
    with pytest.raises(ValidationFailed):
        catalog.update_stock(1, True)
    with pytest.raises(ProductNotFound):
        catalog.update_stock(99, 1)
    assert catalog.update_stock(1, 0).stock == 0
