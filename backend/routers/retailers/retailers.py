from fastapi import APIRouter, Depends, HTTPException, status
from models import VerificationDocument
from utils.errors import NotFound
from utils.response_helpers import safe_model_validate, safe_model_validate_list
from .schemas import RetailerRegister, RetailerUpdate, RetailerResponse, VerificationStatusUpdate
from .helpers import RetailerHelpers, get_retailer_helpers
from typing import List
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/retailers", tags=["Retailers"])
user_retailer_router = APIRouter(prefix="/users", tags=["Retailers"])


@router.post("/register", response_model=RetailerResponse, status_code=status.HTTP_201_CREATED)
async def register_retailer(
    retailer_data: RetailerRegister,
    retailers: RetailerHelpers = Depends(get_retailer_helpers)
):
    """
    Open a retailer account for an existing user.

    The account starts as pending verification and the user's role becomes
    "retailer". 404 if the user does not exist, 409 if they already have one.
    """
    try:
        fields = retailer_data.model_dump(exclude={"verification_documents"})
        retailer = retailers.register_retailer(
            verification_documents=retailer_data.verification_documents,
            **fields
        )
        return safe_model_validate(RetailerResponse, retailer)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error registering retailer: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to register retailer"
        )


@router.get("/pending", response_model=List[RetailerResponse])
async def get_pending_retailers(
    retailers: RetailerHelpers = Depends(get_retailer_helpers)
):
    """Retailers waiting for verification"""
    try:
        return safe_model_validate_list(RetailerResponse, retailers.list_pending())
    except Exception as e:
        logger.error(f"Error getting pending retailers: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch pending retailers"
        )


@router.get("/verified", response_model=List[RetailerResponse])
async def get_verified_retailers(
    retailers: RetailerHelpers = Depends(get_retailer_helpers)
):
    try:
        return safe_model_validate_list(RetailerResponse, retailers.list_verified())
    except Exception as e:
        logger.error(f"Error getting verified retailers: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch verified retailers"
        )


@router.get("/{retailer_id}", response_model=RetailerResponse)
async def get_retailer(
    retailer_id: int,
    retailers: RetailerHelpers = Depends(get_retailer_helpers)
):
    try:
        return safe_model_validate(RetailerResponse, retailers.get_retailer(retailer_id))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting retailer {retailer_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch retailer"
        )


@router.patch("/{retailer_id}", response_model=RetailerResponse)
async def update_retailer(
    retailer_id: int,
    retailer_update: RetailerUpdate,
    retailers: RetailerHelpers = Depends(get_retailer_helpers)
):
    try:
        update_data = {
            field: value
            for field, value in retailer_update.model_dump(exclude_unset=True).items()
            if value is not None or field in ("gst_number", "pan_number")
        }
        retailer = retailers.update_retailer(retailer_id, **update_data)
        return safe_model_validate(RetailerResponse, retailer)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating retailer {retailer_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update retailer"
        )


@router.post("/{retailer_id}/documents", response_model=RetailerResponse, status_code=status.HTTP_201_CREATED)
async def add_verification_document(
    retailer_id: int,
    document: VerificationDocument,
    retailers: RetailerHelpers = Depends(get_retailer_helpers)
):
    """
    Attach a verification document (GST certificate, PAN card, ...).
    The retailer's verification status is not changed.
    """
    try:
        retailer = retailers.add_verification_document(retailer_id, document)
        return safe_model_validate(RetailerResponse, retailer)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error adding document for retailer {retailer_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add verification document"
        )


@router.patch("/{retailer_id}/verification", response_model=RetailerResponse)
async def update_verification_status(
    retailer_id: int,
    status_update: VerificationStatusUpdate,
    retailers: RetailerHelpers = Depends(get_retailer_helpers)
):
    """
    Record a review decision.

    Body: {"status": "verified"}  // or "rejected", "pending"
    """
    try:
        retailer = retailers.set_verification_status(retailer_id, status_update.status)
        return safe_model_validate(RetailerResponse, retailer)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating verification for retailer {retailer_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update verification status"
        )


@user_retailer_router.get("/{user_id}/retailer", response_model=RetailerResponse)
async def get_retailer_for_user(
    user_id: int,
    retailers: RetailerHelpers = Depends(get_retailer_helpers)
):
    """The retailer account owned by a user"""
    try:
        retailer = retailers.get_retailer_by_user(user_id)
        if retailer is None:
            raise NotFound(message="Retailer account not found for this user")
        return safe_model_validate(RetailerResponse, retailer)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting retailer for user {user_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch retailer"
        )
