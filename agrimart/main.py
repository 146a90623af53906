# agrimart/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from agrimart.api.errors import register_error_handlers
from agrimart.api.routers import addresses, carts, health, orders, products, shipping
from agrimart.data.database import engine, init_db
from agrimart.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database")
    try:
        init_db(engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables ready")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Agrimart",
        version="1.0.0",
        lifespan=lifespan,
    )

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    app.include_router(addresses.router)
    app.include_router(shipping.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
