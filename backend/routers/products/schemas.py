from pydantic import Field
from typing import Optional
from models import CamelModel


# Category Schemas
class CategoryCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    image: str = Field(..., min_length=1)
    description: Optional[str] = None


class CategoryResponse(CamelModel):
    id: int
    name: str
    image: str
    description: Optional[str] = None


# Product Schemas
class ProductCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    price: float = Field(..., ge=0)
    mrp: float = Field(..., ge=0)
    image: str = Field(..., min_length=1)
    unit_value: float = Field(..., gt=0)
    unit_type: str = Field(..., min_length=1, max_length=20)
    category_id: int
    stock: int = Field(0, ge=0)
    is_popular: bool = False
    is_new_arrival: bool = False
    is_best_seller: bool = False
    discount: Optional[int] = Field(None, ge=0, le=100)


class ProductResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    mrp: float
    image: str
    unit_value: float
    unit_type: str
    category_id: int
    stock: int
    is_popular: bool = False
    is_new_arrival: bool = False
    is_best_seller: bool = False
    discount: Optional[int] = None


class StockUpdate(CamelModel):
    """Full replacement of a product's stock"""
    stock: int = Field(..., ge=0, strict=True)
