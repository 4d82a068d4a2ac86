from fastapi import APIRouter, Depends, HTTPException, status
from utils.response_helpers import safe_model_validate, safe_model_validate_list
from .schemas import OrderCreate, OrderStatusUpdate, OrderResponse
from .helpers import OrderHelpers, get_order_helpers
from typing import List
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["Orders"])
user_orders_router = APIRouter(prefix="/users", tags=["Orders"])


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order_data: OrderCreate,
    orders: OrderHelpers = Depends(get_order_helpers)
):
    """
    Place an order for the items in a cart.

    Every item is checked against current stock before any stock is taken:
    - 404 if a product does not exist
    - 400 if a product does not have enough stock
    On failure no stock changes and no order is created.
    """
    try:
        order = orders.place_order(
            user_id=order_data.user_id,
            items=order_data.items,
            address=order_data.address,
            payment_method=order_data.payment_method,
            delivery_fee=order_data.delivery_fee,
            platform_fee=order_data.platform_fee,
            expected_delivery=order_data.expected_delivery,
        )
        return safe_model_validate(OrderResponse, order)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating order: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create order"
        )


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    orders: OrderHelpers = Depends(get_order_helpers)
):
    try:
        return safe_model_validate(OrderResponse, orders.get_order(order_id))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting order {order_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch order"
        )


@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: int,
    status_update: OrderStatusUpdate,
    orders: OrderHelpers = Depends(get_order_helpers)
):
    """
    Move an order along pending -> processing -> shipped -> delivered.
    Pending and processing orders may be cancelled. Other moves get 409.
    """
    try:
        order = orders.update_status(order_id, status_update.status)
        return safe_model_validate(OrderResponse, order)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating status of order {order_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update order status"
        )


@user_orders_router.get("/{user_id}/orders", response_model=List[OrderResponse])
async def get_user_orders(
    user_id: int,
    orders: OrderHelpers = Depends(get_order_helpers)
):
    """All orders placed by a user, oldest first"""
    try:
        return safe_model_validate_list(OrderResponse, orders.list_user_orders(user_id))
    except Exception as e:
        logger.error(f"Error getting orders for user {user_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch orders"
        )
