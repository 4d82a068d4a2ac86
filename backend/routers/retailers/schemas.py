from pydantic import Field
from typing import Optional, List
from datetime import datetime
from models import CamelModel, VerificationDocument, VerificationStatus


class RetailerRegister(CamelModel):
    user_id: int
    business_name: str = Field(..., min_length=1, max_length=200)
    business_type: str = Field(..., min_length=1, max_length=100)
    gst_number: Optional[str] = Field(None, max_length=50)
    pan_number: Optional[str] = Field(None, max_length=50)
    business_address: str = Field(..., min_length=1, max_length=255)
    business_city: str = Field(..., min_length=1, max_length=100)
    business_pincode: str = Field(..., min_length=1, max_length=20)
    business_phone: str = Field(..., min_length=1, max_length=20)
    verification_documents: List[VerificationDocument] = []


class RetailerUpdate(CamelModel):
    """Business details a retailer may edit. Verification is changed separately."""
    business_name: Optional[str] = Field(None, min_length=1, max_length=200)
    business_type: Optional[str] = Field(None, min_length=1, max_length=100)
    gst_number: Optional[str] = Field(None, max_length=50)
    pan_number: Optional[str] = Field(None, max_length=50)
    business_address: Optional[str] = Field(None, min_length=1, max_length=255)
    business_city: Optional[str] = Field(None, min_length=1, max_length=100)
    business_pincode: Optional[str] = Field(None, min_length=1, max_length=20)
    business_phone: Optional[str] = Field(None, min_length=1, max_length=20)


class VerificationStatusUpdate(CamelModel):
    status: VerificationStatus


class VerificationDocumentResponse(CamelModel):
    document_type: str
    document_name: str
    document_url: str
    upload_date: Optional[datetime] = None
    verification_status: str = "pending"
    rejection_reason: Optional[str] = None


class RetailerResponse(CamelModel):
    id: int
    user_id: int
    business_name: str
    business_type: str
    gst_number: Optional[str] = None
    pan_number: Optional[str] = None
    business_address: str
    business_city: str
    business_pincode: str
    business_phone: str
    verification_status: str
    verification_documents: List[VerificationDocumentResponse] = []
    registration_date: datetime
