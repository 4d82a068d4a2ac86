from fastapi import Depends
from config import get_store
from storage import MemStorage
from models import OrderItem, OrderStatus, PaymentStatus, RetailerOrder, VerificationStatus
from routers.orders.helpers import reserve_inventory, items_subtotal
from utils.errors import NotVerified, OrderNotFound, RetailerNotFound, ValidationFailed
from utils.transitions import ORDER_TRANSITIONS, PAYMENT_TRANSITIONS, validate_transition
from typing import List, Optional, Sequence
import logging

logger = logging.getLogger(__name__)


class RetailerOrderHelpers:
    """Bulk orders placed by verified retailers"""

    def __init__(self, store: MemStorage):
        self.store = store

    def get_order(self, order_id: int) -> RetailerOrder:
        order = self.store.retailer_orders.get(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        return order

    def list_retailer_orders(self, retailer_id: int) -> List[RetailerOrder]:
        return self.store.retailer_orders.list_where(lambda o: o.retailer_id == retailer_id)

    def place_retailer_order(
        self,
        retailer_id: int,
        items: Sequence[OrderItem],
        delivery_address: str,
        payment_method: str,
        notes: Optional[str] = None,
        expected_delivery: Optional[str] = None,
        bulk_order_discount: float = 0.0,
    ) -> RetailerOrder:
        """
        Same stock reservation as consumer orders, open only to verified
        retailers. The bulk discount is an amount taken off the item subtotal.
        """
        with self.store.lock:
            retailer = self.store.retailers.get(retailer_id)
            if retailer is None:
                raise RetailerNotFound(retailer_id)
            if retailer.verification_status != VerificationStatus.VERIFIED:
                logger.warning(f"Bulk order refused for retailer {retailer_id}: {retailer.verification_status}")
                raise NotVerified(retailer.verification_status)

            subtotal = items_subtotal(items)
            if bulk_order_discount < 0 or bulk_order_discount > subtotal:
                raise ValidationFailed(
                    "Invalid bulk order discount",
                    errors=[{"field": "bulkOrderDiscount", "msg": f"must be between 0 and {round(subtotal, 2)}"}],
                )

            reserved = reserve_inventory(self.store, items)
            order = self.store.retailer_orders.create(
                retailer_id=retailer_id,
                items=list(items),
                total_amount=round(subtotal - bulk_order_discount, 2),
                status=OrderStatus.PENDING,
                delivery_address=delivery_address,
                payment_method=payment_method,
                payment_status=PaymentStatus.PENDING,
                notes=notes,
                order_date=self.store.now(),
                expected_delivery=expected_delivery,
                bulk_order_discount=bulk_order_discount,
            )

        logger.info(
            f"Retailer order {order.id} placed by retailer {retailer_id}: {sum(reserved.values())} units, "
            f"discount {bulk_order_discount}, total {order.total_amount}"
        )
        return order

    def update_status(self, order_id: int, new_status: str) -> RetailerOrder:
        with self.store.lock:
            order = self.get_order(order_id)
            validate_transition(ORDER_TRANSITIONS, "status", order.status, new_status)
            updated = self.store.retailer_orders.update(order.id, status=new_status)
        logger.info(f"Retailer order {order_id} status {order.status} -> {updated.status}")
        return updated

    def update_payment_status(self, order_id: int, new_status: str) -> RetailerOrder:
        with self.store.lock:
            order = self.get_order(order_id)
            validate_transition(PAYMENT_TRANSITIONS, "paymentStatus", order.payment_status, new_status)
            updated = self.store.retailer_orders.update(order.id, payment_status=new_status)
        logger.info(f"Retailer order {order_id} payment {order.payment_status} -> {updated.payment_status}")
        return updated


def get_retailer_order_helpers(store: MemStorage = Depends(get_store)) -> RetailerOrderHelpers:
    return RetailerOrderHelpers(store)
