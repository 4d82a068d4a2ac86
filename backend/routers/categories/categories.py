from fastapi import APIRouter, Depends, HTTPException, status
from utils.response_helpers import safe_model_validate, safe_model_validate_list
from routers.products.schemas import CategoryCreate, CategoryResponse
from routers.products.helpers import CatalogHelpers, get_catalog_helpers
from typing import List
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=List[CategoryResponse])
async def get_categories(
    catalog: CatalogHelpers = Depends(get_catalog_helpers)
):
    """All categories in creation order"""
    try:
        return safe_model_validate_list(CategoryResponse, catalog.list_categories())
    except Exception as e:
        logger.error(f"Error getting categories: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch categories"
        )


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int,
    catalog: CatalogHelpers = Depends(get_catalog_helpers)
):
    try:
        return safe_model_validate(CategoryResponse, catalog.get_category(category_id))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting category {category_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch category"
        )


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    catalog: CatalogHelpers = Depends(get_catalog_helpers)
):
    try:
        category = catalog.create_category(**category_data.model_dump())
        return safe_model_validate(CategoryResponse, category)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating category: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create category"
        )
