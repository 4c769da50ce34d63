from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.repos.base import store_call


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    @store_call
    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    @store_call
    def list_products(self) -> list[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel).order_by(ProductModel.created_at, ProductModel.id)
            ).scalars()
        )

    @store_call
    def list_by_category(self, category: str) -> list[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel)
                .where(ProductModel.category == category)
                .order_by(ProductModel.created_at, ProductModel.id)
            ).scalars()
        )

    @store_call
    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    @store_call
    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.commit()
