from pydantic import Field
from typing import Optional, List
from datetime import datetime
from models import CamelModel, OrderItem, OrderStatus, PaymentStatus
from routers.orders.schemas import OrderItemResponse


class RetailerOrderCreate(CamelModel):
    retailer_id: int
    items: List[OrderItem] = Field(..., min_length=1)
    delivery_address: str = Field(..., min_length=1)
    payment_method: str = Field(..., min_length=1, max_length=50)
    notes: Optional[str] = None
    expected_delivery: Optional[str] = None
    bulk_order_discount: float = Field(0.0, ge=0)


class RetailerOrderStatusUpdate(CamelModel):
    status: OrderStatus


class PaymentStatusUpdate(CamelModel):
    status: PaymentStatus


class RetailerOrderResponse(CamelModel):
    id: int
    retailer_id: int
    items: List[OrderItemResponse]
    total_amount: float
    status: str
    delivery_address: str
    payment_method: str
    payment_status: str
    notes: Optional[str] = None
    order_date: datetime
    expected_delivery: Optional[str] = None
    bulk_order_discount: float = 0.0
