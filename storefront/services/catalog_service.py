import uuid
from typing import List, Optional

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.errors import NotFoundError, ValidationError
from storefront.domain.schemas import ProductIn, ProductOut
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def ensure_product_id(product_id: str) -> str:
    try:
        return str(uuid.UUID(str(product_id)))
    except ValueError:
        raise ValidationError("Invalid product ID")


class CatalogService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def add_product(self, payload: ProductIn, owner_id: Optional[str] = None) -> ProductOut:
        if payload.price < 0:
            raise ValidationError("Price must not be negative")

        product = self.repo.create_product(
            ProductModel(
                owner_id=owner_id,
                name=payload.name,
                image=payload.image,
                price=payload.price,
                title=payload.title,
                category=payload.category,
                description=payload.description,
            )
        )
        logger.info(f"Product {product.id} added (owner: {owner_id or 'public'})")
        return ProductOut.model_validate(product)

    def list_products(self) -> List[ProductOut]:
        return [ProductOut.model_validate(p) for p in self.repo.list_products()]

    def list_by_category(self, category: str) -> List[ProductOut]:
        return [ProductOut.model_validate(p) for p in self.repo.list_by_category(category)]

    def get_product(self, product_id: str) -> ProductOut:
        product = self.repo.get_product(ensure_product_id(product_id))
        if not product:
            raise NotFoundError("Product not found")
        return ProductOut.model_validate(product)

    def delete_product(self, product_id: str) -> None:
        # pozycje w koszykach zostaja (brak kaskady)
        product = self.repo.get_product(ensure_product_id(product_id))
        if not product:
            raise NotFoundError("Product not found")
        self.repo.delete_product(product)
        logger.info(f"Product {product_id} deleted")
