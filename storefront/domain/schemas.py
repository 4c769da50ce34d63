# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, AliasChoices
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal

from storefront.utils.settings import MAX_ITEM_QUANTITY


class ApiModel(BaseModel):
    """Baza: JSON w camelCase, w Pythonie snake_case."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class MessageOut(ApiModel):
    message: str


# =====================================================
# AUTH
# =====================================================
class SignupIn(ApiModel):
    """Schema dla rejestracji uzytkownika."""

    fullname: str = Field(..., min_length=1, max_length=200)
    handle: str = Field(
        ...,
        min_length=1,
        max_length=100,
        validation_alias=AliasChoices("handle", "username"),
        description="Unikalny login uzytkownika",
    )
    password: str = Field(..., min_length=1)
    mobile_number: str = Field(..., alias="mobileNumber", min_length=1, max_length=32)
    date_of_birth: date = Field(..., alias="dateOfBirth")


class SignupOut(ApiModel):
    message: str
    user_id: str = Field(..., alias="userId")


class LoginIn(ApiModel):
    """Login albo numer telefonu (10 cyfr) + haslo."""

    handle: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("handle", "username", "mobileNumber"),
    )
    password: str = Field(..., min_length=1)


class LoginOut(ApiModel):
    token: str
    user_id: str = Field(..., alias="userId")
    issued_at: datetime = Field(..., alias="issuedAt")


# =====================================================
# CATALOG
# =====================================================
class ProductIn(ApiModel):
    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("name", "productName"),
    )
    image: str = Field(..., min_length=1, max_length=1024, description="URL albo referencja obrazka")
    # Numeric(10, 2) w bazie
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, allow_inf_nan=False, description="Cena (>= 0)")
    title: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)


class ProductOut(ApiModel):
    id: str
    name: str
    image: str
    price: float
    title: str
    category: str
    description: str
    owner_id: Optional[str] = Field(None, alias="ownerId")
    created_at: Optional[datetime] = Field(None, alias="createdAt")


class ProductMessageOut(ApiModel):
    message: str
    product: ProductOut


# =====================================================
# CART
# =====================================================
class CartItemIn(ApiModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: str = Field(..., alias="productId", description="ID produktu")
    quantity: int = Field(1, ge=1, le=MAX_ITEM_QUANTITY, description="Ilosc, dodawana do istniejacej pozycji")


class QuantityIn(ApiModel):
    quantity: int = Field(..., ge=1, le=MAX_ITEM_QUANTITY)


class CartItemOut(ApiModel):
    product_id: str = Field(..., alias="productId")
    quantity: int


class CartOut(ApiModel):
    user_id: str = Field(..., alias="userId")
    items: List[CartItemOut]


class CartItemsOut(ApiModel):
    items: List[CartItemOut]


class CartCountOut(ApiModel):
    count: int


class CartMessageOut(ApiModel):
    message: str
    cart: CartOut
