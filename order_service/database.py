"""Engine and session construction for the order database."""

import logging

import sqlalchemy
from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from .config import Settings, get_database_url
from .models import Base, Product

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS = [
    {"name": "Mechanical Keyboard", "description": "Tenkeyless, brown switches"},
    {"name": "USB-C Hub", "description": "7-in-1 with HDMI and card reader"},
    {"name": "27in Monitor", "description": None},
]


def is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def create_db_engine(config: Settings) -> Engine:
    url = get_database_url(config)
    if is_sqlite(url):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live as long as their single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return sqlalchemy.create_engine(url, echo=config.debug, **kwargs)

    # - pool_pre_ping: validate connections before using them, recycling dead ones
    # - pool_recycle: proactively recycle connections before MySQL wait_timeout
    return sqlalchemy.create_engine(
        url,
        echo=config.debug,
        pool_pre_ping=True,
        pool_recycle=config.db_pool_recycle,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    # Loaded orders are handed to the HTTP layer after the session closes.
    return sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
    )


def init_db(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready")


def init_sample_data(session_factory: sessionmaker) -> int:
    """Insert the sample products when the product table is empty.

    Returns the number of products inserted.
    """
    with session_factory() as session:
        existing = session.execute(select(func.count(Product.id))).scalar_one()
        if existing:
            return 0
        for p in SAMPLE_PRODUCTS:
            session.add(Product(**p))
        session.commit()
    logger.info(f"Seeded {len(SAMPLE_PRODUCTS)} sample products")
    return len(SAMPLE_PRODUCTS)
