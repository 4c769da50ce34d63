#storefront/api/routers/cart.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user_id
from storefront.data.database import get_db
from storefront.domain.schemas import (
    CartItemIn,
    QuantityIn,
    CartOut,
    CartItemsOut,
    CartCountOut,
    CartMessageOut,
)
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session = Depends(get_db)) -> CartService:
    return CartService(db)


@router.get("", response_model=CartItemsOut)
def list_items(
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_service),
):
    return {"items": svc.list_items(user_id)}


@router.post("/add", response_model=CartOut, responses={201: {"model": CartOut}})
def add_item(
    payload: CartItemIn,
    response: Response,
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_service),
):
    cart, created = svc.add_item(user_id, payload.product_id, payload.quantity)
    # 201 gdy koszyk powstal w tym requescie
    if created:
        response.status_code = 201
    return cart


@router.get("/totalItemInCart", response_model=CartCountOut)
def total_item_in_cart(
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_service),
):
    return {"count": svc.count_unique_items(user_id)}


@router.delete("/remove/{product_id}", response_model=CartMessageOut)
def remove_item(
    product_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_service),
):
    cart = svc.remove_item(user_id, product_id)
    return {"message": "Product removed from cart", "cart": cart}


@router.put("/updateQuantity/{product_id}", response_model=CartMessageOut)
def update_quantity(
    product_id: str,
    payload: QuantityIn,
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_service),
):
    cart = svc.set_quantity(user_id, product_id, payload.quantity)
    return {"message": "Product quantity updated", "cart": cart}
