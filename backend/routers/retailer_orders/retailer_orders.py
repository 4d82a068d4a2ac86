from fastapi import APIRouter, Depends, HTTPException, status
from utils.response_helpers import safe_model_validate, safe_model_validate_list
from .schemas import (
    RetailerOrderCreate, RetailerOrderStatusUpdate, PaymentStatusUpdate, RetailerOrderResponse
)
from .helpers import RetailerOrderHelpers, get_retailer_order_helpers
from typing import List
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/retailer-orders", tags=["Retailer Orders"])
retailer_history_router = APIRouter(prefix="/retailers", tags=["Retailer Orders"])


@router.post("", response_model=RetailerOrderResponse, status_code=status.HTTP_201_CREATED)
async def create_retailer_order(
    order_data: RetailerOrderCreate,
    retailer_orders: RetailerOrderHelpers = Depends(get_retailer_order_helpers)
):
    """
    Place a bulk order.

    - 404 if the retailer or a product does not exist
    - 403 unless the retailer is verified
    - 400 if any product is short of stock (nothing is reserved)
    """
    try:
        order = retailer_orders.place_retailer_order(
            retailer_id=order_data.retailer_id,
            items=order_data.items,
            delivery_address=order_data.delivery_address,
            payment_method=order_data.payment_method,
            notes=order_data.notes,
            expected_delivery=order_data.expected_delivery,
            bulk_order_discount=order_data.bulk_order_discount,
        )
        return safe_model_validate(RetailerOrderResponse, order)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating retailer order: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create retailer order"
        )


@router.get("/{order_id}", response_model=RetailerOrderResponse)
async def get_retailer_order(
    order_id: int,
    retailer_orders: RetailerOrderHelpers = Depends(get_retailer_order_helpers)
):
    try:
        return safe_model_validate(RetailerOrderResponse, retailer_orders.get_order(order_id))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting retailer order {order_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch retailer order"
        )


@router.patch("/{order_id}/status", response_model=RetailerOrderResponse)
async def update_retailer_order_status(
    order_id: int,
    status_update: RetailerOrderStatusUpdate,
    retailer_orders: RetailerOrderHelpers = Depends(get_retailer_order_helpers)
):
    try:
        order = retailer_orders.update_status(order_id, status_update.status)
        return safe_model_validate(RetailerOrderResponse, order)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating status of retailer order {order_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update order status"
        )


@router.patch("/{order_id}/payment-status", response_model=RetailerOrderResponse)
async def update_retailer_order_payment_status(
    order_id: int,
    status_update: PaymentStatusUpdate,
    retailer_orders: RetailerOrderHelpers = Depends(get_retailer_order_helpers)
):
    """
    Payment status moves independently of the order status.

    Body: {"status": "paid"}  // or "failed", "partial", "refunded", "pending"
    """
    try:
        order = retailer_orders.update_payment_status(order_id, status_update.status)
        return safe_model_validate(RetailerOrderResponse, order)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating payment status of retailer order {order_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update payment status"
        )


@retailer_history_router.get("/{retailer_id}/orders", response_model=List[RetailerOrderResponse])
async def get_orders_for_retailer(
    retailer_id: int,
    retailer_orders: RetailerOrderHelpers = Depends(get_retailer_order_helpers)
):
    try:
        return safe_model_validate_list(RetailerOrderResponse, retailer_orders.list_retailer_orders(retailer_id))
    except Exception as e:
        logger.error(f"Error getting orders for retailer {retailer_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch retailer orders"
        )
