import pytest
from fastapi.testclient import TestClient

from main import create_app
from storage import MemStorage


@pytest.fixture
def store():
    return MemStorage(seed=True)


@pytest.fixture
def client(store):
    return TestClient(create_app(store))


@pytest.fixture
def milk_item():
    return {
        "productId": 1, "quantity": 1, "price": 45, "name": "Organic Milk",
        "image": "milk.jpg", "unitValue": 500, "unitType": "ml",
    }


@pytest.fixture
def banana_item():
    return {
        "productId": 4, "quantity": 1, "price": 70, "name": "Fresh Bananas",
        "image": "bananas.jpg", "unitValue": 12, "unitType": "pcs",
    }


@pytest.fixture
def registered_user(client):
    response = client.post("/users/register", json={
        "username": "alice", "password": "secret", "name": "Alice", "email": "alice@example.com",
    })
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def retailer_payload(registered_user):
    return {
        "userId": registered_user["id"],
        "businessName": "Alice Grocers",
        "businessType": "grocery",
        "businessAddress": "12 Market Road",
        "businessCity": "Pune",
        "businessPincode": "411001",
        "businessPhone": "9800000000",
    }


@pytest.fixture
def verified_retailer(client, retailer_payload):
    retailer = client.post("/retailers/register", json=retailer_payload).json()
    response = client.patch(f"/retailers/{retailer['id']}/verification", json={"status": "verified"})
    assert response.status_code == 200
    return response.json()
