from pydantic import Field
from typing import Optional, List
from datetime import datetime
from models import CamelModel, OrderItem, OrderStatus


class OrderCreate(CamelModel):
    user_id: int
    items: List[OrderItem] = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    payment_method: str = Field(..., min_length=1, max_length=50)
    delivery_fee: Optional[float] = Field(None, ge=0)
    platform_fee: Optional[float] = Field(None, ge=0)
    expected_delivery: Optional[str] = None


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


class OrderItemResponse(CamelModel):
    product_id: int
    quantity: int
    price: float
    name: str
    image: str
    unit_value: float
    unit_type: str


class OrderResponse(CamelModel):
    id: int
    user_id: int
    items: List[OrderItemResponse]
    total_amount: float
    status: str
    address: str
    payment_method: str
    delivery_fee: float
    platform_fee: float
    order_date: datetime
    expected_delivery: str
