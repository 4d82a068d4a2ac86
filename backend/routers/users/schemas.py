from pydantic import EmailStr, Field
from typing import Optional
from models import CamelModel


# Request schemas
class UserRegister(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    pincode: Optional[str] = Field(None, max_length=20)


class UserLogin(CamelModel):
    username: str
    password: str


class UserUpdate(CamelModel):
    """Mutable user fields. Role changes only through retailer registration."""
    username: Optional[str] = Field(None, min_length=1, max_length=100)
    password: Optional[str] = Field(None, min_length=1)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    pincode: Optional[str] = Field(None, max_length=20)


# Response schemas
class UserResponse(CamelModel):
    id: int
    username: str
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    pincode: Optional[str] = None
    role: str = "customer"


class LoginResponse(CamelModel):
    user: UserResponse
