import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import Settings, settings as default_settings
from app.core.errors import format_validation_errors
from app.infrastructure.database import build_engine, build_session_factory, init_database
from app.infrastructure.repositories.memory_repository import InMemoryOrderRepository
from app.infrastructure.repositories.order_repository import SqlOrderRepository
from app.interfaces import orders_api
from app.interfaces.IOrderRepository import IOrderRepository

logger = logging.getLogger(__name__)


def build_order_repository(settings: Settings) -> IOrderRepository:
    if settings.STORAGE_BACKEND == "sql":
        engine = build_engine(settings.DATABASE_URL)
        init_database(engine, settings.DB_CONNECT_RETRIES, settings.DB_CONNECT_WAIT_SECONDS)
        logger.info("✅ Using SQL order storage.")
        return SqlOrderRepository(build_session_factory(engine))

    bound = "unbounded" if settings.ORDER_STORE_CAPACITY is None else f"capacity={settings.ORDER_STORE_CAPACITY}"
    logger.info(f"✅ Using in-memory order storage ({bound}).")
    return InMemoryOrderRepository(capacity=settings.ORDER_STORE_CAPACITY)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = format_validation_errors(exc.errors())
    logger.info(f"⚠️ Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})


def create_app(settings: Optional[Settings] = None, order_repo: Optional[IOrderRepository] = None) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(title=settings.PROJECT_NAME)

    # ---------------------------------------------------------
    # COMPOSITION ROOT
    # ---------------------------------------------------------
    app.state.settings = settings
    app.state.order_repo = order_repo if order_repo is not None else build_order_repository(settings)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(orders_api.router)

    @app.get("/")
    def health_check():
        return {
            "status": "active",
            "system": settings.PROJECT_NAME,
            "storage": type(app.state.order_repo).__name__,
        }

    return app


app = create_app()
