from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Query, Request

from .config import Settings, get_database_url, settings as default_settings
from .database import (
    create_db_engine,
    create_session_factory,
    init_db,
    init_sample_data,
    is_sqlite,
)
from .errors import register_error_handlers
from .repository import OrderStore
from .schemas import (
    CreateOrderRequest,
    ErrorResponse,
    HealthResponse,
    OrderResponse,
    PageResponse,
)
from .service import OrderService
from .utils import setup_logging, wait_for_database

logger = setup_logging("order_service", default_settings.log_level)


def get_order_service(request: Request) -> OrderService:
    return request.app.state.order_service


router = APIRouter(prefix="/orders", tags=["orders"])


@router.get(
    "",
    response_model=PageResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def list_orders(
    request: Request,
    page: int = Query(0, description="Zero-based page index"),
    size: Optional[int] = Query(None, description="Page size"),
    service: OrderService = Depends(get_order_service),
):
    if size is None:
        size = request.app.state.settings.default_page_size
    result = service.get_orders(page, size)
    return PageResponse.from_page(result)


@router.post(
    "",
    status_code=201,
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def create_order(
    payload: CreateOrderRequest,
    service: OrderService = Depends(get_order_service),
):
    logger.info(f"Creating order for product {payload.product_id}")
    order = service.create_order(payload.product_id, payload.quantity, payload.price)
    return OrderResponse.model_validate(order)


def create_app(config: Optional[Settings] = None) -> FastAPI:
    config = config or default_settings
    engine = create_db_engine(config)
    session_factory = create_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Prepare the schema on startup and release the pool on shutdown"""
        logger.info(f"Starting {config.app_name}...")
        url = get_database_url(config)
        if not is_sqlite(url):
            wait_for_database(url, timeout=config.db_wait_timeout)
        init_db(engine)
        if config.seed_sample_data:
            init_sample_data(session_factory)
        logger.info(f"{config.app_name} startup completed")

        yield

        logger.info(f"Shutting down {config.app_name}...")
        engine.dispose()

    app = FastAPI(
        title=config.app_name,
        version="1.0.0",
        debug=config.debug,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.engine = engine
    app.state.order_store = OrderStore(session_factory)
    app.state.order_service = OrderService(
        app.state.order_store, strategy=config.pagination_strategy
    )

    register_error_handlers(app)
    app.include_router(router, prefix=config.api_prefix)

    @app.get("/health", response_model=HealthResponse)
    def health_check():
        return HealthResponse(status="ok")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
