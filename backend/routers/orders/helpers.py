from fastapi import Depends
from config import get_store, DELIVERY_FEE, PLATFORM_FEE, DELIVERY_WINDOW_MINUTES
from storage import MemStorage
from models import Order, OrderItem, OrderStatus
from utils.errors import InsufficientStock, OrderNotFound, ProductNotFound, ValidationFailed
from utils.transitions import ORDER_TRANSITIONS, validate_transition
from typing import Dict, List, Optional, Sequence
from datetime import datetime, timedelta
import logging

logger = logging.getLogger(__name__)


def reserve_inventory(store: MemStorage, items: Sequence[OrderItem]) -> Dict[int, int]:
    """
    Check every line against live stock, then decrement.

    Quantities of repeated product ids are summed before the check. Nothing is
    written unless every product exists and has enough stock, so a failure
    leaves all stock untouched. Caller must hold ``store.lock``.

    Returns the quantity taken per product id.
    """
    if not items:
        raise ValidationFailed("Order must contain at least one item")

    requested: Dict[int, int] = {}
    for item in items:
        requested[item.product_id] = requested.get(item.product_id, 0) + item.quantity

    products = {}
    for product_id, quantity in requested.items():
        product = store.products.get(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        if product.stock < quantity:
            logger.warning(
                f"Insufficient stock for product {product_id}: requested {quantity}, available {product.stock}"
            )
            raise InsufficientStock(product.id, product.name, product.stock, quantity)
        products[product_id] = product

    for product_id, quantity in requested.items():
        product = products[product_id]
        store.products.update(product_id, stock=product.stock - quantity)

    return requested


def items_subtotal(items: Sequence[OrderItem]) -> float:
    return sum(item.price * item.quantity for item in items)


def default_expected_delivery(now: Optional[datetime] = None) -> str:
    now = now or MemStorage.now()
    return (now + timedelta(minutes=DELIVERY_WINDOW_MINUTES)).strftime("%H:%M")


class OrderHelpers:
    """Consumer order placement and lifecycle"""

    def __init__(self, store: MemStorage):
        self.store = store

    def get_order(self, order_id: int) -> Order:
        order = self.store.orders.get(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        return order

    def list_user_orders(self, user_id: int) -> List[Order]:
        return self.store.orders.list_where(lambda o: o.user_id == user_id)

    def place_order(
        self,
        user_id: int,
        items: Sequence[OrderItem],
        address: str,
        payment_method: str,
        delivery_fee: Optional[float] = None,
        platform_fee: Optional[float] = None,
        expected_delivery: Optional[str] = None,
    ) -> Order:
        """
        Reserve stock for every item and record a pending order.
        Totals use the prices captured on the items.
        """
        delivery_fee = DELIVERY_FEE if delivery_fee is None else delivery_fee
        platform_fee = PLATFORM_FEE if platform_fee is None else platform_fee
        total_amount = round(items_subtotal(items) + delivery_fee + platform_fee, 2)

        with self.store.lock:
            reserved = reserve_inventory(self.store, items)
            order_date = self.store.now()
            order = self.store.orders.create(
                user_id=user_id,
                items=list(items),
                total_amount=total_amount,
                status=OrderStatus.PENDING,
                address=address,
                payment_method=payment_method,
                delivery_fee=delivery_fee,
                platform_fee=platform_fee,
                order_date=order_date,
                expected_delivery=expected_delivery or default_expected_delivery(order_date),
            )

        logger.info(
            f"Order {order.id} placed by user {user_id}: {sum(reserved.values())} units "
            f"across {len(reserved)} products, total {total_amount}"
        )
        return order

    def update_status(self, order_id: int, new_status: str) -> Order:
        with self.store.lock:
            order = self.get_order(order_id)
            validate_transition(ORDER_TRANSITIONS, "status", order.status, new_status)
            updated = self.store.orders.update(order.id, status=new_status)

        logger.info(f"Order {order_id} status {order.status} -> {updated.status}")
        return updated


def get_order_helpers(store: MemStorage = Depends(get_store)) -> OrderHelpers:
    return OrderHelpers(store)
