"""Main FastAPI application."""
from fastapi import FastAPI
from contextlib import asynccontextmanager

from cafe.core.config import settings
from cafe.core.logging import setup_logging
from cafe.db.database import AsyncSessionLocal, init_db
from cafe.services.menu.seed import seed_menu
from cafe.api import health, menu, orders, payments, users


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    await init_db()
    if settings.seed_menu_on_startup:
        async with AsyncSessionLocal() as session:
            await seed_menu(session)
    yield


app = FastAPI(
    title=settings.cafe_name,
    description="Digital ordering API for the cafe",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router, tags=["health"])
app.include_router(menu.router, tags=["menu"])
app.include_router(orders.router, tags=["orders"])
app.include_router(payments.router, tags=["payments"])
app.include_router(users.router, tags=["users"])


@app.get("/")
async def root():
    return {
        "message": f"{settings.cafe_name} ordering API",
        "version": "0.1.0",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("cafe.main:app", host=settings.host, port=settings.port)
