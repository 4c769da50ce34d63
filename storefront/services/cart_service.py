# storefront/services/cart_service.py
from typing import Dict, Any, List

from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.domain.errors import NotFoundError, ValidationError
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.catalog_service import ensure_product_id
from storefront.utils.settings import MAX_ITEM_QUANTITY
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _ensure_quantity(quantity: int) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError("Quantity must be greater than zero")
    if quantity > MAX_ITEM_QUANTITY:
        raise ValidationError(f"Quantity must not exceed {MAX_ITEM_QUANTITY}")
    return quantity


class CartService:
    """
    Use case'y koszyka, jeden koszyk na uzytkownika.
    commands (add, remove, set quantity) modyfikuja stan
    query (list, count) tylko odczyt

    Koszyk powstaje przy pierwszym add i nigdy nie jest usuwany,
    najwyzej zostaje pusty.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    def _serialize(self, cart: CartModel) -> Dict[str, Any]:
        return {
            "user_id": cart.user_id,
            "items": self._items(cart),
        }

    def _items(self, cart: CartModel) -> List[Dict[str, Any]]:
        return [
            {"product_id": i.product_id, "quantity": i.quantity}
            for i in self.repo.get_cart_items(cart.id)
        ]

    def _require_cart(self, user_id: str) -> CartModel:
        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            raise NotFoundError("Cart not found")
        return cart

    def _increment(self, cart_id: str, product_id: str, quantity: int) -> bool:
        """False gdy pozycji nie ma. Suma ponad limit to ValidationError."""
        if self.repo.increment_item(cart_id, product_id, quantity, MAX_ITEM_QUANTITY):
            return True
        if self.repo.get_cart_item(cart_id, product_id):
            raise ValidationError(f"Quantity in cart must not exceed {MAX_ITEM_QUANTITY}")
        return False

    #query
    def list_items(self, user_id: str) -> List[Dict[str, Any]]:
        return self._items(self._require_cart(user_id))

    def count_unique_items(self, user_id: str) -> int:
        # brak koszyka to 0, nie blad (w odroznieniu od list_items)
        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            return 0
        return self.repo.count_unique_products(cart.id)

    #commands
    def add_item(self, user_id: str, product_id: str, quantity: int) -> tuple[Dict[str, Any], bool]:
        """
        Dodaje produkt albo zwieksza ilosc istniejacej pozycji.
        Zwraca (koszyk, created) - created=True gdy koszyk powstal w tym wywolaniu.
        Nie jest idempotentne: dwa razy po 1 daje 2.
        """
        quantity = _ensure_quantity(quantity)
        product_id = ensure_product_id(product_id)

        if not self.products.get_product(product_id):
            raise NotFoundError("Product is not available")

        cart = self.repo.get_cart_by_user(user_id)
        created = False
        if not cart:
            cart, created = self.repo.create_cart(user_id)
            if created:
                logger.info(f"Created cart {cart.id} for user {user_id}")

        # najpierw atomowy increment, insert tylko gdy pozycji nie ma
        if self._increment(cart.id, product_id, quantity):
            logger.info(f"Cart {cart.id}: product {product_id} quantity +{quantity}")
        elif self.repo.insert_item(cart.id, product_id, quantity):
            logger.info(f"Cart {cart.id}: added product {product_id}")
        else:
            # ktos wstawil te pozycje miedzy UPDATE a INSERT
            self._increment(cart.id, product_id, quantity)
            logger.info(f"Cart {cart.id}: product {product_id} quantity +{quantity} (after insert conflict)")

        return self._serialize(cart), created

    def remove_item(self, user_id: str, product_id: str) -> Dict[str, Any]:
        cart = self._require_cart(user_id)

        if not self.repo.delete_cart_item(cart.id, product_id):
            raise NotFoundError("Product not found in cart")

        logger.info(f"Cart {cart.id}: removed product {product_id}")
        return self._serialize(cart)

    def set_quantity(self, user_id: str, product_id: str, quantity: int) -> Dict[str, Any]:
        quantity = _ensure_quantity(quantity)
        cart = self._require_cart(user_id)

        # nadpisanie, nie increment
        if not self.repo.set_item_quantity(cart.id, product_id, quantity):
            raise NotFoundError("Product not found in cart")

        logger.info(f"Cart {cart.id}: product {product_id} quantity = {quantity}")
        return self._serialize(cart)
