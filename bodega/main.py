# bodega/main.py
import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from bodega.config.settings import settings
from bodega.config.database import engine
from bodega.core.middleware import setup_middleware
from bodega.core.exceptions import setup_exception_handlers
from bodega.api.v1.router import api_router
from bodega.shared.database.init_db import init_db

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("🚀 Bodega API Starting...")
    logger.info(f"📍 Version: {settings.version}")
    logger.info(f"🌍 Environment: {'Development' if settings.debug else 'Production'}")
    logger.info(f"🗄️  Database: {settings.database_url.split('@')[1] if '@' in settings.database_url else 'local'}")

    if settings.auto_create_tables:
        init_db(engine)
        logger.info("✅ Tablas verificadas")

    yield

    # Shutdown
    logger.info("🛑 Bodega API Shutting down...")

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Inventario, ventas, caja y pedidos de la bodega central de farmacias",
    docs_url="/docs",
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# Setup middleware
setup_middleware(app)
setup_exception_handlers(app)

# Include routers
app.include_router(api_router, prefix="/api/v1")

# Root endpoint
@app.get("/")
def root():
    return {
        "message": "🚀 Bodega API - Inventario y Pedidos",
        "version": settings.version,
        "status": "running",
        "environment": "production" if not settings.debug else "development",
        "docs": "/docs",
        "api": "/api/v1"
    }

@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "version": settings.version,
        "app": settings.app_name,
        "environment": "production" if not settings.debug else "development"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "bodega.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
