# storefront/api/__init__.py
from fastapi import APIRouter

from storefront.api.routers import auth, cart, health, products
from storefront.utils.settings import API_PREFIX

api_router = APIRouter(prefix=API_PREFIX)
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(products.router)
api_router.include_router(cart.router)
