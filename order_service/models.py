from datetime import datetime, timezone

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

# SQLite only autoincrements INTEGER PRIMARY KEY columns
Identifier = BigInteger().with_variant(Integer, "sqlite")


def utcnow() -> datetime:
    # Stored naive; all timestamps are UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Product(Base):
    __tablename__ = "products"

    id = Column(Identifier, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r}>"


class Order(Base):
    __tablename__ = "orders"

    id = Column(Identifier, primary_key=True, autoincrement=True)
    product_id = Column(Identifier, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2, asdecimal=True), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Products must arrive with the order query; a lazy SELECT per row raises.
    product = relationship("Product", lazy="raise_on_sql", innerjoin=True)

    def __repr__(self) -> str:
        return f"<Order id={self.id} product_id={self.product_id} quantity={self.quantity}>"


Index("idx_orders_product_id", Order.product_id)
