from fastapi import Depends
from config import get_store
from storage import MemStorage
from models import Category, Product
from utils.errors import CategoryNotFound, ProductNotFound, ValidationFailed
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class CatalogHelpers:
    """Read-mostly views over categories and products"""

    def __init__(self, store: MemStorage):
        self.store = store

    # Categories

    def list_categories(self) -> List[Category]:
        return self.store.categories.list()

    def get_category(self, category_id: int) -> Category:
        category = self.store.categories.get(category_id)
        if category is None:
            raise CategoryNotFound(category_id)
        return category

    def create_category(self, **fields) -> Category:
        category = self.store.categories.create(**fields)
        logger.info(f"Created category {category.id} ({category.name})")
        return category

    # Products

    def get_product(self, product_id: int) -> Product:
        product = self.store.products.get(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return product

    def create_product(self, **fields) -> Product:
        # category_id is not checked against existing categories
        product = self.store.products.create(**fields)
        logger.info(f"Created product {product.id} ({product.name}) with stock {product.stock}")
        return product

    def list_products(self, category_id: Optional[int] = None, search: Optional[str] = None) -> List[Product]:
        """
        All products, or those of one category, or those matching a search term.
        category_id wins when both filters are given.
        """
        if category_id is not None:
            return self.store.products.list_where(lambda p: p.category_id == category_id)
        if search:
            return self.search_products(search)
        return self.store.products.list()

    def search_products(self, term: str) -> List[Product]:
        """
        Case-insensitive substring match on name or description.
        Callers are expected to skip terms shorter than 2 characters.
        """
        needle = term.lower()

        def matches(product: Product) -> bool:
            if needle in product.name.lower():
                return True
            return bool(product.description) and needle in product.description.lower()

        return self.store.products.list_where(matches)

    def list_popular(self) -> List[Product]:
        return self.store.products.list_where(lambda p: p.is_popular)

    def list_new_arrivals(self) -> List[Product]:
        return self.store.products.list_where(lambda p: p.is_new_arrival)

    def update_stock(self, product_id: int, new_stock: int) -> Product:
        """Overwrite stock with ``new_stock`` (not a delta)"""
        if isinstance(new_stock, bool) or not isinstance(new_stock, int) or new_stock < 0:
            raise ValidationFailed(
                "Invalid stock data",
                errors=[{"field": "stock", "msg": "stock must be a non-negative integer"}],
            )

        with self.store.lock:
            product = self.get_product(product_id)
            updated = self.store.products.update(product.id, stock=new_stock)

        logger.info(f"Stock for product {product_id} set from {product.stock} to {new_stock}")
        return updated


def get_catalog_helpers(store: MemStorage = Depends(get_store)) -> CatalogHelpers:
    return CatalogHelpers(store)
