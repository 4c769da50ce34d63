#storefront/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user_id
from storefront.data.database import get_db
from storefront.domain.schemas import ProductIn, ProductOut, ProductMessageOut, MessageOut
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/products", tags=["products"])


def get_service(db: Session = Depends(get_db)) -> CatalogService:
    return CatalogService(db)


@router.get("", response_model=List[ProductOut])
def list_products(svc: CatalogService = Depends(get_service)):
    return svc.list_products()


@router.get("/category/{category}", response_model=List[ProductOut])
def list_by_category(category: str, svc: CatalogService = Depends(get_service)):
    return svc.list_by_category(category)


@router.post("/add", response_model=ProductMessageOut, status_code=201)
def add_product(
    payload: ProductIn,
    user_id: str = Depends(get_current_user_id),
    svc: CatalogService = Depends(get_service),
):
    """Produkt z wlascicielem = zalogowany uzytkownik."""
    product = svc.add_product(payload, owner_id=user_id)
    return {"message": "Product added successfully", "product": product}


@router.post("/public/add", response_model=ProductMessageOut, status_code=201)
def add_public_product(payload: ProductIn, svc: CatalogService = Depends(get_service)):
    product = svc.add_product(payload)
    return {"message": "Product added successfully", "product": product}


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, svc: CatalogService = Depends(get_service)):
    return svc.get_product(product_id)


@router.delete("/{product_id}", response_model=MessageOut)
def delete_product(product_id: str, svc: CatalogService = Depends(get_service)):
    svc.delete_product(product_id)
    return {"message": "Product deleted successfully"}
