# storefront/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from storefront.api.routers import carts, health, orders
from storefront.data.database import build_engine, build_sessionmaker, create_tables
from storefront.data.seed import seed
from storefront.utils import settings
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def create_app(
    database_url: str | None = None,
    auto_create_tables: bool | None = None,
    seed_demo_data: bool | None = None,
) -> FastAPI:
    engine = build_engine(database_url)
    SessionLocal = build_sessionmaker(engine)

    create_all = settings.AUTO_CREATE_TABLES if auto_create_tables is None else auto_create_tables
    load_demo = settings.SEED_DEMO_DATA if seed_demo_data is None else seed_demo_data

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if create_all:
            logger.info("Creating database tables")
            await create_tables(engine)
        if load_demo:
            await seed(SessionLocal)
        yield
        await engine.dispose()

    app = FastAPI(
        title="Storefront Checkout Service",
        version="1.0.0",
        lifespan=lifespan,
    )
    # pula polaczen przekazywana do handlerow przez get_db
    app.state.engine = engine
    app.state.sessionmaker = SessionLocal

    # Include routers
    app.include_router(health.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
