from decimal import Decimal

import pytest
from sqlalchemy import event

from order_service.config import Settings
from order_service.database import create_db_engine, create_session_factory, init_db
from order_service.repository import OrderStore


@pytest.fixture()
def settings():
    return Settings(database_url="sqlite://", seed_sample_data=False)


@pytest.fixture()
def engine(settings):
    engine = create_db_engine(settings)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture()
def store(session_factory):
    return OrderStore(session_factory)


@pytest.fixture()
def queries(engine):
    """SELECT statements sent to the database while the test runs."""
    captured = []

    def record(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith("SELECT"):
            captured.append(statement)

    event.listen(engine, "before_cursor_execute", record)
    yield captured
    event.remove(engine, "before_cursor_execute", record)


@pytest.fixture()
def product(store):
    return store.add_product("Test Product", "A test product for unit tests")


@pytest.fixture()
def make_orders(store, product):
    def _make(count, product_id=None):
        return [
            store.insert_order(
                product_id or product.id, i + 1, Decimal("100.00") + i
            )
            for i in range(count)
        ]

    return _make
