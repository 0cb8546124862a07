"""Main FastAPI application"""

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from datetime import datetime
import logging

from app.config import settings
from app.database import connect_to_mongo, close_mongo_connection, database
from app.api.error_handlers import register_error_handlers
from app.api.v1 import auth, categories, products, payments

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.debug else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events"""
    # Startup
    logger.info(f"Starting up {settings.app_name}...")
    await connect_to_mongo()
    logger.info("Application ready!")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}...")
    await close_mongo_connection()
    logger.info("Shutdown complete!")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=API_VERSION,
    description="""
    E-commerce backend for the storefront.

    ## Features

    * **Authentication**: Registration, login and password reset with JWT
    * **Categories**: Admin-managed product categories
    * **Products**: Catalogue with photos, filters, search and pagination
    * **Orders**: Buyer order history and admin status workflow
    * **Payments**: Stripe card payments that create orders

    ## Authentication

    Protected endpoints read a JWT from the Authorization header:
    ```
    Authorization: Bearer <your_jwt_token>
    ```
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


# Health check endpoints
@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint to verify the API is running.
    """
    return {
        "success": True,
        "status": "healthy",
        "version": API_VERSION,
        "app": settings.app_name
    }


@app.get("/readiness", tags=["Health"])
async def readiness_probe():
    """
    Returns 200 when the database answers a ping, 503 otherwise.
    """
    if database.db is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not ready",
                "database": "not connected",
                "timestamp": datetime.utcnow().isoformat()
            }
        )

    try:
        await database.db.command("ping")
    except Exception as e:
        logger.error(f"Readiness check failed: {str(e)}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not ready",
                "database": "unreachable",
                "timestamp": datetime.utcnow().isoformat()
            }
        )

    return {
        "status": "ready",
        "database": "connected",
        "timestamp": datetime.utcnow().isoformat()
    }


@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint with API information.
    """
    return {
        "success": True,
        "message": f"Welcome to {settings.app_name}",
        "version": API_VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
    }


# Include routers
app.include_router(
    auth.router,
    prefix="/api/v1/auth",
    tags=["Authentication"]
)

app.include_router(
    categories.router,
    prefix="/api/v1/category",
    tags=["Categories"]
)

app.include_router(
    products.router,
    prefix="/api/v1/product",
    tags=["Products"]
)

app.include_router(
    payments.router,
    prefix="/api/v1/product",
    tags=["Payments"]
)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level="info"
    )
