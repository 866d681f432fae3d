"""Persistence for orders and the products they reference.

Every listing goes through :meth:`OrderStore._orders_with_products`, a single
``orders JOIN products`` statement that populates ``Order.product`` from the
joined columns. The relationship is mapped with ``lazy="raise_on_sql"``, so
touching ``order.product`` on an order loaded any other way raises instead of
issuing one extra SELECT per row.
"""

import logging
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
from typing import Iterator, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session, contains_eager, sessionmaker

from .exceptions import NotFound, StoreUnavailable, ValidationError
from .models import Order, Product, utcnow

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
# DECIMAL(10, 2) and INT column limits
MAX_PRICE = Decimal("99999999.99")
MAX_QUANTITY = 2**31 - 1


def normalize_price(price) -> Decimal:
    """Coerce ``price`` to a two-place Decimal or raise ValidationError."""
    if isinstance(price, bool) or price is None:
        raise ValidationError(f"Invalid price: {price!r}")
    if isinstance(price, float):
        price = str(price)
    try:
        value = Decimal(price)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"Invalid price: {price!r}") from None
    if not value.is_finite():
        raise ValidationError(f"Invalid price: {price!r}")
    if value < 0:
        raise ValidationError("Price must not be negative")
    if value != value.quantize(CENT):
        raise ValidationError("Price must have at most two decimal places")
    if value > MAX_PRICE:
        raise ValidationError(f"Price must not exceed {MAX_PRICE}")
    return value.quantize(CENT)


def validate_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(f"Quantity must be an integer, got {quantity!r}")
    if quantity <= 0:
        raise ValidationError("Quantity must be positive")
    if quantity > MAX_QUANTITY:
        raise ValidationError(f"Quantity must not exceed {MAX_QUANTITY}")
    return quantity


class OrderStore:
    """Reads and writes orders; listings always join-fetch the product."""

    def __init__(self, session_factory: sessionmaker):
        self.SessionLocal = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with self.SessionLocal() as session:
                yield session
        except (OperationalError, InterfaceError) as e:
            logger.error(f"Database unavailable: {e}")
            raise StoreUnavailable("Order database is unavailable") from e

    @staticmethod
    def _orders_with_products():
        return (
            select(Order)
            .join(Order.product)
            .options(contains_eager(Order.product))
            .order_by(Order.id.desc())
        )

    def list_all_orders_with_products(self) -> List[Order]:
        """Every order with its product, newest first, in one query."""
        with self._session() as session:
            orders = session.execute(self._orders_with_products()).scalars().unique().all()
        logger.debug(f"Loaded {len(orders)} orders with products")
        return list(orders)

    @staticmethod
    def _count_statement():
        return select(func.count(Order.id)).select_from(Order).join(Order.product)

    def list_page(self, offset: int, limit: int) -> Tuple[int, List[Order]]:
        """One window of the listing together with the total it was cut from.

        The total is a ``count(orders.id) OVER ()`` column on the windowed statement,
        so rows and total come from the same read. A window past the end
        returns no rows; the total is then counted in the same transaction.
        """
        total_col = func.count(Order.id).over().label("total")
        stmt = (
            self._orders_with_products()
            .add_columns(total_col)
            .offset(offset)
            .limit(limit)
        )
        with self._session() as session:
            rows = session.execute(stmt).unique().all()
            if rows:
                total = rows[0].total
            else:
                total = session.execute(self._count_statement()).scalar_one()
        orders = [row[0] for row in rows]
        logger.debug(f"Loaded {len(orders)} of {total} orders at offset {offset}")
        return total, orders

    def count_orders(self) -> int:
        with self._session() as session:
            return session.execute(self._count_statement()).scalar_one()

    def get_product(self, product_id: int) -> Product:
        with self._session() as session:
            product = session.get(Product, product_id)
        if product is None:
            raise NotFound(f"Product not found with id: {product_id}")
        return product

    def add_product(self, name: str, description: Optional[str] = None) -> Product:
        if not name or not name.strip():
            raise ValidationError("Product name must not be empty")
        product = Product(name=name, description=description)
        with self._session() as session:
            session.add(product)
            session.commit()
        logger.info(f"Created product {product.id} ({product.name})")
        return product

    def insert_order(self, product_id: int, quantity: int, price) -> Order:
        """Persist a new order for an existing product.

        Raises ValidationError for a non-positive quantity or an invalid
        price, and NotFound when the product does not exist. Nothing is
        written in either case.
        """
        quantity = validate_quantity(quantity)
        price = normalize_price(price)

        with self._session() as session:
            product = session.get(Product, product_id)
            if product is None:
                logger.warning(f"Rejected order for unknown product {product_id}")
                raise NotFound(f"Product not found with id: {product_id}")

            now = utcnow()
            order = Order(
                product=product,
                quantity=quantity,
                price=price,
                created_at=now,
                updated_at=now,
            )
            session.add(order)
            session.commit()

        logger.info(
            f"Created order {order.id} for product {product_id}: {quantity} x {price}"
        )
        return order
