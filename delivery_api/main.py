"""
FastAPI Application Entry Point

Delivery Tech API - order placement and pricing.

Endpoints:
    - POST /api/orders: Place an order priced from the catalog
    - GET /api/orders/{order_id}: Fetch an order aggregate
    - GET /api/restaurants/{restaurant_id}/products: Restaurant catalog
    - GET /health: System health check
    - GET /info: Application information
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Path, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from delivery_api.core.config import get_settings, setup_logging
from delivery_api.core.exceptions import DeliveryError
from delivery_api.database import engine, get_db, init_db
from delivery_api.schemas import (
    ErrorResponse,
    HealthResponse,
    InfoResponse,
    MAX_ID,
    OrderCreate,
    OrderResponse,
    ProductResponse,
)
from delivery_api.services import CatalogLookup, OrderService

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    logger.info("=" * 60)
    logger.info(f"Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    await init_db()

    problems = settings.validate_production_config()
    if problems:
        logger.warning(f"Settings left at development defaults: {problems}")

    logger.info("Application ready")

    yield  # Application runs

    logger.info("Shutting down...")
    await engine.dispose()
    logger.info("Cleanup complete")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Order placement and pricing for the Delivery Tech platform.",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_order_service(db: AsyncSession = Depends(get_db)) -> OrderService:
    return OrderService.for_session(db, settings)


def get_catalog(db: AsyncSession = Depends(get_db)) -> CatalogLookup:
    return CatalogLookup(db)


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    db: AsyncSession = Depends(get_db)
) -> HealthResponse:
    """Verify the database is reachable."""
    db_status = "healthy"
    try:
        await db.execute(select(func.now()))
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"
        logger.error(f"Database health check failed: {e}")

    return HealthResponse(
        status="UP" if db_status == "healthy" else "DOWN",
        database=db_status,
        service=settings.app_name,
        timestamp=datetime.now(),
    )


@app.get("/info", response_model=InfoResponse, tags=["Health"])
async def info() -> InfoResponse:
    """Application information."""
    return InfoResponse(
        application=settings.app_name,
        version=settings.app_version,
        developer=settings.app_developer,
        environment=settings.env_mode.value,
        framework="FastAPI",
    )


# =============================================================================
# ORDER API ENDPOINTS
# =============================================================================

@app.post(
    "/api/orders",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    tags=["Orders"],
    summary="Create Order",
)
async def create_order(
    order_data: OrderCreate,
    response: Response,
    service: OrderService = Depends(get_order_service),
) -> OrderResponse:
    """
    Create a new order for a customer at a restaurant.

    Unit prices come from the current catalog; the total is the sum of
    the line subtotals.
    """
    order = await service.place_order(order_data.to_command())

    response.headers["Location"] = f"/api/orders/{order.id}"
    logger.info(f"Order #{order.id} created, total {order.total}")

    return OrderResponse.from_order(order)


@app.get(
    "/api/orders/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def get_order(
    order_id: int = Path(..., gt=0, le=MAX_ID),
    service: OrderService = Depends(get_order_service),
) -> OrderResponse:
    """Get a specific order by ID."""
    order = await service.get_order(order_id)
    return OrderResponse.from_order(order)


# =============================================================================
# CATALOG ENDPOINTS
# =============================================================================

@app.get(
    "/api/restaurants/{restaurant_id}/products",
    response_model=list[ProductResponse],
    responses={404: {"model": ErrorResponse}},
    tags=["Catalog"],
)
async def list_restaurant_products(
    restaurant_id: int = Path(..., gt=0, le=MAX_ID),
    catalog: CatalogLookup = Depends(get_catalog),
) -> list[ProductResponse]:
    """List a restaurant's products with their current prices."""
    products = await catalog.list_products(restaurant_id)
    return [ProductResponse.model_validate(p) for p in products]


# =============================================================================
# ERROR HANDLERS
# =============================================================================

def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: Optional[dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        timestamp=datetime.now(),
        status=status_code,
        error=error,
        message=message,
        path=request.url.path,
        details=details,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


@app.exception_handler(DeliveryError)
async def delivery_error_handler(request: Request, exc: DeliveryError) -> JSONResponse:
    """Translate domain errors into their HTTP status."""
    if exc.status_code >= 500:
        logger.error(f"{exc.error}: {exc.message}")
    else:
        logger.warning(f"{exc.error}: {exc.message}")

    return error_response(request, exc.status_code, exc.error, exc.message, exc.details)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report invalid request fields one by one."""
    details = {
        ".".join(str(part) for part in err["loc"] if part != "body"): err["msg"]
        for err in exc.errors()
    }
    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "Erro de validação",
        "Campos inválidos na requisição",
        details,
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Erro interno no servidor",
        str(exc) if settings.debug else "Ocorreu um erro inesperado. Tente novamente mais tarde.",
    )


if __name__ == "__main__":
    uvicorn.run(
        "delivery_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
    )
