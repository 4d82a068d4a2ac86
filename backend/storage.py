"""
In-memory entity store.

One ``EntityTable`` per entity type keeps records in insertion order and hands out
strictly increasing integer ids starting at 1. ``MemStorage`` owns the six tables
and the lock that serialises multi-record writes (order placement, retailer
registration). It is created once per application and injected into handlers.
"""
from typing import Callable, Dict, Generic, List, Optional, Type, TypeVar
from datetime import datetime, timezone
import threading
import logging

from pydantic import BaseModel

from models import User, Retailer, Category, Product, Order, RetailerOrder

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class RecordNotFound(LookupError):
    """Raised by ``EntityTable.update`` when the id does not resolve"""

    def __init__(self, entity: str, record_id: int):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} not found")


class EntityTable(Generic[T]):
    def __init__(self, model: Type[T]):
        self.model = model
        self._records: Dict[int, T] = {}
        self._next_id = 1
        self._id_lock = threading.Lock()

    def _allocate_id(self) -> int:
        with self._id_lock:
            record_id = self._next_id
            self._next_id += 1
        return record_id

    def create(self, **fields) -> T:
        """Assign the next id, store the record and return it"""
        record = self.model(id=self._allocate_id(), **fields)
        self._records[record.id] = record
        return record

    def get(self, record_id: int) -> Optional[T]:
        return self._records.get(record_id)

    def update(self, record_id: int, **fields) -> T:
        """
        Shallow-merge ``fields`` into the stored record.
        Fields not passed keep their current value.
        """
        current = self._records.get(record_id)
        if current is None:
            raise RecordNotFound(self.model.__name__, record_id)

        updated = current.model_copy(update=fields)
        self._records[record_id] = updated
        return updated

    def list(self) -> List[T]:
        return list(self._records.values())

    def list_where(self, predicate: Callable[[T], bool]) -> List[T]:
        return [record for record in self._records.values() if predicate(record)]

    def find_one(self, predicate: Callable[[T], bool]) -> Optional[T]:
        for record in self._records.values():
            if predicate(record):
                return record
        return None

    def __len__(self) -> int:
        return len(self._records)


class MemStorage:
    def __init__(self, seed: bool = False):
        self.users: EntityTable[User] = EntityTable(User)
        self.retailers: EntityTable[Retailer] = EntityTable(Retailer)
        self.categories: EntityTable[Category] = EntityTable(Category)
        self.products: EntityTable[Product] = EntityTable(Product)
        self.orders: EntityTable[Order] = EntityTable(Order)
        self.retailer_orders: EntityTable[RetailerOrder] = EntityTable(RetailerOrder)

        # Held for any sequence that reads then writes more than one record
        self.lock = threading.RLock()

        if seed:
            self.seed_data()

    def seed_data(self):
        """Demo catalogue used in development"""
        categories = [
            {
                "name": "Dairy",
                "image": "https://cdn-icons-png.flaticon.com/512/2153/2153788.png",
                "description": "Fresh dairy products",
            },
            {
                "name": "Fruits",
                "image": "https://cdn-icons-png.flaticon.com/512/3082/3082025.png",
                "description": "Fresh fruits",
            },
            {
                "name": "Vegetables",
                "image": "https://cdn-icons-png.flaticon.com/512/2153/2153786.png",
                "description": "Fresh vegetables",
            },
            {
                "name": "Bakery",
                "image": "https://cdn-icons-png.flaticon.com/512/2716/2716467.png",
                "description": "Fresh bakery products",
            },
            {
                "name": "Snacks",
                "image": "https://cdn-icons-png.flaticon.com/512/2553/2553691.png",
                "description": "Tasty snacks",
            },
            {
                "name": "Beverages",
                "image": "https://cdn-icons-png.flaticon.com/512/3050/3050153.png",
                "description": "Refreshing beverages",
            },
            {
                "name": "Household",
                "image": "https://cdn-icons-png.flaticon.com/512/3082/3082054.png",
                "description": "Household essentials",
            },
            {
                "name": "Personal Care",
                "image": "https://cdn-icons-png.flaticon.com/512/6134/6134187.png",
                "description": "Personal care products",
            },
        ]
        for category in categories:
            self.categories.create(**category)

        image_base = "https://images.unsplash.com"
        image_query = "?auto=format&fit=crop&w=300&q=80"
        products = [
            {
                "name": "Organic Milk",
                "description": "Fresh organic milk from grass-fed cows",
                "price": 45, "mrp": 55,
                "image": f"{image_base}/photo-1633575331244-ef7a8ebe6338{image_query}",
                "unit_value": 500, "unit_type": "ml",
                "category_id": 1, "stock": 50,
                "is_popular": True, "is_new_arrival": False, "is_best_seller": True,
                "discount": 18,
            },
            {
                "name": "Free Range Eggs",
                "description": "Farm fresh free-range eggs",
                "price": 60, "mrp": 60,
                "image": f"{image_base}/photo-1615485290382-441e4d049cb5{image_query}",
                "unit_value": 6, "unit_type": "pcs",
                "category_id": 1, "stock": 40,
                "is_popular": True, "is_new_arrival": False, "is_best_seller": False,
                "discount": 0,
            },
            {
                "name": "Whole Wheat Bread",
                "description": "Freshly baked whole wheat bread",
                "price": 35, "mrp": 40,
                "image": f"{image_base}/photo-1598170845058-32b9d6a5da37{image_query}",
                "unit_value": 400, "unit_type": "g",
                "category_id": 4, "stock": 30,
                "is_popular": True, "is_new_arrival": False, "is_best_seller": False,
                "discount": 12,
            },
            {
                "name": "Fresh Bananas",
                "description": "Sweet and ripe bananas",
                "price": 70, "mrp": 70,
                "image": f"{image_base}/photo-1550989460-0adf9ea622e2{image_query}",
                "unit_value": 12, "unit_type": "pcs",
                "category_id": 2, "stock": 2,
                "is_popular": True, "is_new_arrival": False, "is_best_seller": False,
                "discount": 0,
            },
            {
                "name": "Ripe Avocado",
                "description": "Perfectly ripe avocados",
                "price": 80, "mrp": 80,
                "image": f"{image_base}/photo-1596591606975-97ee5cef3a1e{image_query}",
                "unit_value": 1, "unit_type": "pc",
                "category_id": 2, "stock": 20,
                "is_popular": False, "is_new_arrival": True, "is_best_seller": False,
                "discount": 0,
            },
            {
                "name": "Fresh Blueberries",
                "description": "Sweet and juicy blueberries",
                "price": 120, "mrp": 150,
                "image": f"{image_base}/photo-1579636858710-2a22e5e4b957{image_query}",
                "unit_value": 125, "unit_type": "g",
                "category_id": 2, "stock": 15,
                "is_popular": False, "is_new_arrival": True, "is_best_seller": False,
                "discount": 20,
            },
            {
                "name": "Cherry Tomatoes",
                "description": "Sweet and tangy cherry tomatoes",
                "price": 60, "mrp": 60,
                "image": f"{image_base}/photo-1578281644399-8ba21beeb8a2{image_query}",
                "unit_value": 500, "unit_type": "g",
                "category_id": 3, "stock": 25,
                "is_popular": False, "is_new_arrival": True, "is_best_seller": False,
                "discount": 0,
            },
            {
                "name": "Greek Yogurt",
                "description": "Creamy Greek yogurt",
                "price": 90, "mrp": 110,
                "image": f"{image_base}/photo-1546630392-db5b1f8277fb{image_query}",
                "unit_value": 400, "unit_type": "g",
                "category_id": 1, "stock": 35,
                "is_popular": False, "is_new_arrival": True, "is_best_seller": False,
                "discount": 18,
            },
        ]
        for product in products:
            self.products.create(**product)

        logger.info(f"Seeded {len(self.categories)} categories and {len(self.products)} products")

    @staticmethod
    def now() -> datetime:
        return datetime.now(timezone.utc)
