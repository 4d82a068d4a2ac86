"""
Domain errors raised by the helpers and routers.

Each one is an HTTPException so it can be raised anywhere a route runs and is
rendered by the handlers in main.py as ``{"message": ..., "errors": [...]}``.
"""
from fastapi import HTTPException, status
from typing import Any, Dict, List, Optional


class APIError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(status_code=self.status_code, detail=message)
        self.message = message
        self.errors = errors


class ValidationFailed(APIError):
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidCredentials(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(APIError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    entity = "Resource"

    def __init__(self, entity_id: Any = None, message: Optional[str] = None):
        self.entity_id = entity_id
        if message is None:
            if entity_id is None:
                message = f"{self.entity} not found"
            else:
                message = f"{self.entity} with id {entity_id} not found"
        super().__init__(message)


class CategoryNotFound(NotFound):
    entity = "Category"


class ProductNotFound(NotFound):
    entity = "Product"


class UserNotFound(NotFound):
    entity = "User"


class RetailerNotFound(NotFound):
    entity = "Retailer"


class OrderNotFound(NotFound):
    entity = "Order"


class Conflict(APIError):
    status_code = status.HTTP_409_CONFLICT


class NotVerified(Forbidden):
    def __init__(self, current_status: str):
        self.current_status = current_status
        super().__init__(f"Retailer account is not verified. Current status: {current_status}")


class InsufficientStock(ValidationFailed):
    def __init__(self, product_id: int, product_name: str, available: int, requested: int):
        self.product_id = product_id
        self.available = available
        self.requested = requested
        super().__init__(
            f"Not enough stock for {product_name}. Available: {available}",
            errors=[{"productId": product_id, "available": available, "requested": requested}],
        )


class InvalidTransition(Conflict):
    def __init__(self, field: str, current: str, requested: str, allowed: List[str]):
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot change {field} from {current} to {requested}",
            errors=[{"field": field, "current": current, "requested": requested, "allowed": allowed}],
        )
