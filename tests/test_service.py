"""Order service paging over the join-fetched listing."""

from decimal import Decimal

import pytest

from order_service.exceptions import NotFound, ValidationError
from order_service.repository import OrderStore
from order_service.service import OrderService


@pytest.fixture(params=["memory", "window"])
def service(request, store):
    return OrderService(store, strategy=request.param)


class TestGetOrders:
    def test_single_order_page(self, service, product):
        saved = service.create_order(product.id, 5, Decimal("99.99"))

        page = service.get_orders(0, 10)

        assert page.total_elements == 1
        assert len(page.content) == 1
        assert page.content[0].id == saved.id

    def test_multiple_pages(self, service, make_orders):
        make_orders(15)

        first = service.get_orders(0, 10)
        second = service.get_orders(1, 10)

        assert first.total_elements == 15
        assert len(first.content) == 10
        assert len(second.content) == 5
        assert first.total_pages == 2
        assert first.is_first
        assert not first.is_last
        assert second.is_last

    def test_pages_follow_listing_order(self, service, store, make_orders):
        make_orders(15)
        ids = [o.id for o in store.list_all_orders_with_products()]

        first = service.get_orders(0, 10)
        second = service.get_orders(1, 10)

        assert [o.id for o in first.content + second.content] == ids

    def test_no_orders(self, service):
        page = service.get_orders(0, 10)
        assert page.content == []
        assert page.total_elements == 0
        assert page.total_pages == 0

    def test_page_past_the_end(self, service, make_orders):
        make_orders(3)
        page = service.get_orders(5, 10)
        assert page.content == []
        assert page.total_elements == 3

    def test_products_loaded(self, service, product):
        service.create_order(product.id, 5, Decimal("99.99"))
        order = service.get_orders(0, 10).content[0]
        assert order.product is not None
        assert order.product.name == "Test Product"

    @pytest.mark.parametrize("index, size", [(-1, 10), (0, 0), (0, -5)])
    def test_invalid_page_request(self, service, index, size):
        with pytest.raises(ValidationError):
            service.get_orders(index, size)


class TestRoundTrips:
    @pytest.mark.parametrize("count", [5, 40])
    def test_memory_strategy_uses_one_query(self, store, make_orders, queries, count):
        make_orders(count)
        queries.clear()
        page = OrderService(store, strategy="memory").get_orders(1, 3)
        [o.product.name for o in page.content]
        assert len(queries) == 1

    @pytest.mark.parametrize("count", [5, 40])
    def test_window_strategy_uses_one_query(self, store, make_orders, queries, count):
        make_orders(count)
        queries.clear()
        page = OrderService(store, strategy="window").get_orders(1, 3)
        [o.product.name for o in page.content]
        assert page.total_elements == count
        assert len(queries) == 1

    def test_window_past_the_end_adds_a_count_query(self, store, make_orders, queries):
        make_orders(2)
        queries.clear()
        page = OrderService(store, strategy="window").get_orders(4, 3)
        assert page.total_elements == 2
        assert len(queries) == 2


class InsertingAfterCountStore(OrderStore):
    """Commits a new order every time the orders are counted separately."""

    def __init__(self, session_factory, product_id):
        super().__init__(session_factory)
        self.product_id = product_id

    def count_orders(self):
        total = super().count_orders()
        self.insert_order(self.product_id, 1, Decimal("1.00"))
        return total


def test_window_total_agrees_with_content_under_concurrent_insert(
    session_factory, make_orders, product
):
    make_orders(15)
    store = InsertingAfterCountStore(session_factory, product.id)

    page = OrderService(store, strategy="window").get_orders(1, 10)

    expected = max(0, min(page.total_elements - 10, 10))
    assert len(page.content) == expected
    assert page.total_elements == 15
    assert len(page.content) == 5
    assert page.is_last


class TestCreateOrder:
    def test_create_order(self, service, product):
        order = service.create_order(product.id, 5, Decimal("99.99"))
        assert order.id > 0
        assert order.quantity == 5
        assert order.price == Decimal("99.99")
        assert order.created_at is not None
        assert order.updated_at is not None

    def test_unknown_product(self, service, store):
        with pytest.raises(NotFound):
            service.create_order(42, 1, Decimal("1.00"))
        assert store.count_orders() == 0

    def test_negative_price(self, service, store, product):
        with pytest.raises(ValidationError):
            service.create_order(product.id, 1, Decimal("-1.00"))
        assert store.count_orders() == 0


def test_unknown_strategy_rejected(store):
    with pytest.raises(ValueError):
        OrderService(store, strategy="cursor")
