import logging

from .exceptions import ValidationError
from .models import Order
from .pagination import Page
from .repository import OrderStore

logger = logging.getLogger(__name__)

STRATEGIES = ("memory", "window")


class OrderService:
    """Pages through the store's join-fetched order listing.

    ``memory`` loads the whole listing with one query and slices it here.
    ``window`` issues one OFFSET/LIMIT query carrying the total. Either way the
    number of round trips does not grow with the page size or order count.
    """

    def __init__(self, store: OrderStore, strategy: str = "window"):
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown pagination strategy: {strategy}")
        self.store = store
        self.strategy = strategy

    def get_orders(self, page_index: int, page_size: int) -> Page[Order]:
        if page_index < 0:
            raise ValidationError("Page index must not be negative")
        if page_size <= 0:
            raise ValidationError("Page size must be positive")

        if self.strategy == "memory":
            orders = self.store.list_all_orders_with_products()
            page = Page.from_sequence(orders, page_index, page_size)
        else:
            total, content = self.store.list_page(page_index * page_size, page_size)
            page = Page(content, page_index, page_size, total)

        logger.debug(
            f"Page {page_index} (size {page_size}): {page.number_of_elements} of {page.total_elements} orders"
        )
        return page

    def create_order(self, product_id: int, quantity: int, price) -> Order:
        return self.store.insert_order(product_id, quantity, price)
