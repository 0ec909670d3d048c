# loom/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

# every model has to be imported before create_all
import loom.data.models  # noqa: F401
from loom.api.errors import setup_error_handlers
from loom.api.routers import auctions, cart, health, orders, products, users
from loom.data.database import Base, SessionLocal, engine
from loom.data.seed import seed
from loom.utils import settings
from loom.utils.logging import get_logger

logger = get_logger(__name__)


def init_db():
    logger.info(f"Creating tables: {list(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=engine)
    if settings.SEED_DEMO_DATA:
        db = SessionLocal()
        try:
            seed(db)
        finally:
            db.close()


def create_app(init_database: bool = True) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if init_database:
            init_db()
        yield

    app = FastAPI(
        title="The Artisan's Loom API",
        version="1.0.0",
        lifespan=lifespan,
    )
    setup_error_handlers(app)

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(cart.router)
    app.include_router(orders.router)
    app.include_router(auctions.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
