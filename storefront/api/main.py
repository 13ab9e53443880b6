"""FastAPI application serving the in-memory catalog and cart."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import load_config
from ..providers.memory import InMemoryCartApi, InMemoryCatalog
from .routers import cart, menu, products


def create_app(
    catalog: Optional[InMemoryCatalog] = None,
    cart_api: Optional[InMemoryCartApi] = None,
) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan: build the in-memory backends on startup."""
        settings = load_config().catalog

        # Store backends in router globals
        products._catalog = catalog or InMemoryCatalog(
            latency=settings.latency, failure_rate=settings.failure_rate
        )
        cart._cart = cart_api or InMemoryCartApi(
            latency=settings.latency, failure_rate=settings.failure_rate
        )

        yield

    app = FastAPI(
        title="Storefront Mock API",
        description="In-memory catalog and cart for storefront development",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(products.router, prefix="/api/products", tags=["products"])
    app.include_router(menu.router, prefix="/api/menu", tags=["menu"])
    app.include_router(cart.router, prefix="/api/cart", tags=["cart"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
