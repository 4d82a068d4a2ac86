from fastapi import APIRouter, Depends, HTTPException, status, Query
from utils.response_helpers import safe_model_validate, safe_model_validate_list
from routers.products.schemas import ProductCreate, ProductResponse, StockUpdate
from routers.products.helpers import CatalogHelpers, get_catalog_helpers
from typing import Optional, List
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])


# =================
# PRODUCT LISTINGS (PUBLIC)
# =================

@router.get("", response_model=List[ProductResponse])
async def get_products(
    category_id: Optional[int] = Query(None, alias="categoryId"),
    search: Optional[str] = Query(None),
    catalog: CatalogHelpers = Depends(get_catalog_helpers)
):
    """
    List products, filtered by category or by a search term.
    When both are given the category filter is used.
    """
    try:
        products = catalog.list_products(category_id=category_id, search=search)
        return safe_model_validate_list(ProductResponse, products)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting products: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch products"
        )


@router.get("/popular", response_model=List[ProductResponse])
async def get_popular_products(
    catalog: CatalogHelpers = Depends(get_catalog_helpers)
):
    """Products flagged as popular"""
    try:
        return safe_model_validate_list(ProductResponse, catalog.list_popular())
    except Exception as e:
        logger.error(f"Error getting popular products: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch popular products"
        )


@router.get("/new", response_model=List[ProductResponse])
async def get_new_arrivals(
    catalog: CatalogHelpers = Depends(get_catalog_helpers)
):
    """Products flagged as new arrivals"""
    try:
        return safe_model_validate_list(ProductResponse, catalog.list_new_arrivals())
    except Exception as e:
        logger.error(f"Error getting new arrivals: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch new arrivals"
        )


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    catalog: CatalogHelpers = Depends(get_catalog_helpers)
):
    try:
        return safe_model_validate(ProductResponse, catalog.get_product(product_id))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting product {product_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch product"
        )


# =================
# PRODUCT MANAGEMENT
# =================

@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_data: ProductCreate,
    catalog: CatalogHelpers = Depends(get_catalog_helpers)
):
    """Create a new product"""
    try:
        product = catalog.create_product(**product_data.model_dump())
        return safe_model_validate(ProductResponse, product)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating product: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create product"
        )


@router.patch("/{product_id}/stock", response_model=ProductResponse)
async def update_product_stock(
    product_id: int,
    stock_data: StockUpdate,
    catalog: CatalogHelpers = Depends(get_catalog_helpers)
):
    """
    Set a product's stock to an absolute value.

    Body: {"stock": 25}
    """
    try:
        product = catalog.update_stock(product_id, stock_data.stock)
        return safe_model_validate(ProductResponse, product)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating stock for product {product_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update product stock"
        )
