"""
Cart merge rules: add-or-increment, overwrite on set, order preservation,
and the store-level increment that keeps concurrent adds from losing updates.
"""
import uuid

import pytest

from storefront.data.database import SessionLocal
from storefront.domain.errors import NotFoundError, ValidationError
from storefront.repos.cart_repo import CartRepo
from storefront.services.cart_service import CartService
from storefront.services.catalog_service import CatalogService
from storefront.utils.settings import MAX_ITEM_QUANTITY


@pytest.fixture
def user_id(make_user):
    return make_user("alice")


@pytest.fixture
def svc(db):
    return CartService(db)


def quantities(items):
    return [(i["product_id"], i["quantity"]) for i in items]


class TestAddItem:
    def test_first_add_creates_cart(self, svc, user_id, make_product):
        p1 = make_product()

        cart, created = svc.add_item(user_id, p1.id, 1)

        assert created is True
        assert cart["user_id"] == user_id
        assert quantities(cart["items"]) == [(p1.id, 1)]

    def test_repeated_add_is_cumulative(self, svc, user_id, make_product):
        p1 = make_product()

        svc.add_item(user_id, p1.id, 2)
        cart, created = svc.add_item(user_id, p1.id, 3)

        assert created is False
        assert quantities(cart["items"]) == [(p1.id, 5)]

    def test_new_products_are_appended_in_order(self, svc, user_id, make_product):
        p1, p2, p3 = make_product(title="a"), make_product(title="b"), make_product(title="c")

        svc.add_item(user_id, p2.id, 1)
        svc.add_item(user_id, p1.id, 1)
        svc.add_item(user_id, p3.id, 1)
        cart, _ = svc.add_item(user_id, p2.id, 4)

        assert quantities(cart["items"]) == [(p2.id, 5), (p1.id, 1), (p3.id, 1)]

    def test_unknown_product(self, svc, user_id):
        with pytest.raises(NotFoundError):
            svc.add_item(user_id, str(uuid.uuid4()), 1)

        assert svc.count_unique_items(user_id) == 0

    def test_malformed_product_id(self, svc, user_id):
        with pytest.raises(ValidationError, match="Invalid product ID"):
            svc.add_item(user_id, "P1", 1)

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_non_positive_quantity(self, svc, user_id, make_product, quantity):
        p1 = make_product()

        with pytest.raises(ValidationError):
            svc.add_item(user_id, p1.id, quantity)

    def test_quantity_over_limit(self, svc, user_id, make_product):
        p1 = make_product()

        with pytest.raises(ValidationError, match="must not exceed"):
            svc.add_item(user_id, p1.id, MAX_ITEM_QUANTITY + 1)

    def test_cumulative_quantity_is_capped(self, svc, user_id, make_product):
        p1 = make_product()
        svc.add_item(user_id, p1.id, MAX_ITEM_QUANTITY - 1)

        with pytest.raises(ValidationError, match="Quantity in cart must not exceed"):
            svc.add_item(user_id, p1.id, 2)

        assert quantities(svc.list_items(user_id)) == [(p1.id, MAX_ITEM_QUANTITY - 1)]

    def test_carts_are_per_user(self, svc, make_user, make_product):
        alice = make_user("alice", "5551234567")
        bob = make_user("bob", "5557654321")
        p1 = make_product()

        svc.add_item(alice, p1.id, 2)
        svc.add_item(bob, p1.id, 7)

        assert quantities(svc.list_items(alice)) == [(p1.id, 2)]
        assert quantities(svc.list_items(bob)) == [(p1.id, 7)]

    def test_stale_reader_does_not_lose_concurrent_increment(self, db, user_id, make_product):
        p1 = make_product()
        CartService(db).add_item(user_id, p1.id, 2)

        other = SessionLocal()
        try:
            # sesja A trzyma stara wersje pozycji (quantity=2)
            repo_a = CartRepo(db)
            cart = repo_a.get_cart_by_user(user_id)
            stale = repo_a.get_cart_item(cart.id, p1.id)
            assert stale.quantity == 2

            # sesja B dodaje w miedzyczasie
            CartService(other).add_item(user_id, p1.id, 3)

            CartService(db).add_item(user_id, p1.id, 1)
        finally:
            other.close()

        assert quantities(CartService(db).list_items(user_id)) == [(p1.id, 6)]


class TestQueries:
    def test_list_items_without_cart(self, svc, user_id):
        with pytest.raises(NotFoundError, match="Cart not found"):
            svc.list_items(user_id)

    def test_count_without_cart_is_zero(self, svc, user_id):
        assert svc.count_unique_items(user_id) == 0

    def test_count_unique_products(self, svc, user_id, make_product):
        p1, p2 = make_product(), make_product()

        svc.add_item(user_id, p1.id, 3)
        svc.add_item(user_id, p2.id, 1)
        svc.add_item(user_id, p1.id, 1)

        assert svc.count_unique_items(user_id) == 2


class TestSetQuantity:
    def test_overwrites_cumulative_value(self, svc, user_id, make_product):
        p1 = make_product()
        svc.add_item(user_id, p1.id, 2)
        svc.add_item(user_id, p1.id, 3)

        cart = svc.set_quantity(user_id, p1.id, 5)

        assert quantities(cart["items"]) == [(p1.id, 5)]

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_rejects_non_positive(self, svc, user_id, make_product, quantity):
        p1 = make_product()
        svc.add_item(user_id, p1.id, 2)

        with pytest.raises(ValidationError, match="greater than zero"):
            svc.set_quantity(user_id, p1.id, quantity)

        assert quantities(svc.list_items(user_id)) == [(p1.id, 2)]

    def test_without_cart(self, svc, user_id, make_product):
        with pytest.raises(NotFoundError, match="Cart not found"):
            svc.set_quantity(user_id, make_product().id, 1)

    def test_product_not_in_cart(self, svc, user_id, make_product):
        svc.add_item(user_id, make_product().id, 1)

        with pytest.raises(NotFoundError, match="not found in cart"):
            svc.set_quantity(user_id, make_product().id, 1)


class TestRemoveItem:
    def test_removes_only_that_entry(self, svc, user_id, make_product):
        p1, p2, p3 = make_product(), make_product(), make_product()
        for p in (p1, p2, p3):
            svc.add_item(user_id, p.id, 1)

        cart = svc.remove_item(user_id, p2.id)

        assert quantities(cart["items"]) == [(p1.id, 1), (p3.id, 1)]

    def test_cart_survives_empty(self, svc, user_id, make_product):
        p1 = make_product()
        svc.add_item(user_id, p1.id, 1)

        cart = svc.remove_item(user_id, p1.id)

        assert cart["items"] == []
        assert svc.list_items(user_id) == []
        assert svc.count_unique_items(user_id) == 0

    def test_without_cart(self, svc, user_id, make_product):
        with pytest.raises(NotFoundError, match="Cart not found"):
            svc.remove_item(user_id, make_product().id)

    def test_product_not_in_cart(self, svc, user_id, make_product):
        svc.add_item(user_id, make_product().id, 1)

        with pytest.raises(NotFoundError, match="not found in cart"):
            svc.remove_item(user_id, str(uuid.uuid4()))


def test_deleting_product_leaves_cart_entries(db, svc, user_id, make_product):
    p1 = make_product()
    svc.add_item(user_id, p1.id, 2)

    CatalogService(db).delete_product(p1.id)

    # brak kaskady: pozycja zostaje, nowe dodanie juz nie przejdzie
    assert quantities(svc.list_items(user_id)) == [(p1.id, 2)]
    with pytest.raises(NotFoundError):
        svc.add_item(user_id, p1.id, 1)
