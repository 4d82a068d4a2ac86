"""
Entity records held by the in-memory store.

Every stored record carries an integer ``id`` assigned by the store. Records are
treated as immutable values: updates produce a new copy that replaces the old one.
Field names are snake_case in Python and camelCase on the wire.
"""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime
from enum import Enum


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )


class UserRole(str, Enum):
    CUSTOMER = "customer"
    RETAILER = "retailer"


class VerificationStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class DocumentType(str, Enum):
    GST_CERTIFICATE = "gst_certificate"
    PAN_CARD = "pan_card"
    BUSINESS_LICENSE = "business_license"
    OWNER_ID = "owner_id"
    OTHER = "other"


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"
    PARTIAL = "partial"


class OrderItem(CamelModel):
    """
    Snapshot of a cart line at the time it was added.
    The price is never re-read from the product.
    """
    product_id: int
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)
    name: str
    image: str
    unit_value: float
    unit_type: str


class VerificationDocument(CamelModel):
    document_type: DocumentType
    document_name: str = Field(..., min_length=1)
    document_url: str = Field(..., min_length=1)
    upload_date: Optional[datetime] = None
    verification_status: VerificationStatus = VerificationStatus.PENDING
    rejection_reason: Optional[str] = None


class User(CamelModel):
    id: int
    username: str
    password: str
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    pincode: Optional[str] = None
    role: UserRole = UserRole.CUSTOMER


class Retailer(CamelModel):
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
    verification_status: VerificationStatus = VerificationStatus.PENDING
    verification_documents: List[VerificationDocument] = []
    registration_date: datetime


class Category(CamelModel):
    id: int
    name: str
    image: str
    description: Optional[str] = None


class Product(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    mrp: float
    image: str
    unit_value: float
    unit_type: str
    category_id: int
    stock: int = 0
    is_popular: bool = False
    is_new_arrival: bool = False
    is_best_seller: bool = False
    discount: Optional[int] = None


class Order(CamelModel):
    id: int
    user_id: int
    items: List[OrderItem]
    total_amount: float
    status: OrderStatus = OrderStatus.PENDING
    address: str
    payment_method: str
    delivery_fee: float
    platform_fee: float
    order_date: datetime
    expected_delivery: str


class RetailerOrder(CamelModel):
    id: int
    retailer_id: int
    items: List[OrderItem]
    total_amount: float
    status: OrderStatus = OrderStatus.PENDING
    delivery_address: str
    payment_method: str
    payment_status: PaymentStatus = PaymentStatus.PENDING
    notes: Optional[str] = None
    order_date: datetime
    expected_delivery: Optional[str] = None
    bulk_order_discount: float = 0.0
