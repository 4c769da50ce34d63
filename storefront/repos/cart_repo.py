# storefront/repos/cart_repo.py
from sqlalchemy import select, update, delete, func, distinct
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.repos.base import store_call


class CartRepo:
    """
    Dostep do carts / cart_items.
    Zmiany ilosci ida pojedynczym UPDATE po (cart_id, product_id),
    bez read-modify-write calego koszyka.
    """

    def __init__(self, db: Session):
        self.db = db

    @store_call
    def get_cart_by_user(self, user_id: str) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id)
        ).scalar_one_or_none()

    @store_call
    def create_cart(self, user_id: str) -> tuple[CartModel, bool]:
        """Zwraca (koszyk, created). Przegrany wyscig oddaje koszyk zwyciezcy."""
        cart = CartModel(user_id=user_id)
        self.db.add(cart)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            existing = self.get_cart_by_user(user_id)
            if existing is None:
                raise
            return existing, False
        self.db.refresh(cart)
        return cart, True

    @store_call
    def get_cart_items(self, cart_id: str) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .order_by(CartItemModel.added_at, CartItemModel.id)
            ).scalars()
        )

    @store_call
    def get_cart_item(self, cart_id: str, product_id: str) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    @store_call
    def count_unique_products(self, cart_id: str) -> int:
        return self.db.execute(
            select(func.count(distinct(CartItemModel.product_id))).where(
                CartItemModel.cart_id == cart_id
            )
        ).scalar_one()

    @store_call
    def increment_item(self, cart_id: str, product_id: str, quantity: int, limit: int) -> int:
        # UPDATE cart_items SET quantity = quantity + :n
        # WHERE cart_id = .. AND product_id = .. AND quantity <= :limit - :n
        result = self.db.execute(
            update(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
                CartItemModel.quantity <= limit - quantity,
            )
            .values(quantity=CartItemModel.quantity + quantity)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount

    @store_call
    def insert_item(self, cart_id: str, product_id: str, quantity: int) -> bool:
        """False gdy pozycja juz istnieje (unique cart_id + product_id)."""
        self.db.add(
            CartItemModel(
                cart_id=cart_id,
                product_id=product_id,
                quantity=quantity,
            )
        )
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return False
        return True

    @store_call
    def set_item_quantity(self, cart_id: str, product_id: str, quantity: int) -> int:
        result = self.db.execute(
            update(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .values(quantity=quantity)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount

    @store_call
    def delete_cart_item(self, cart_id: str, product_id: str) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount
