from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, List, Optional

from fastapi import Body, Depends, FastAPI, Path, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, get_settings
from db import Database
from errors import ProductServiceError, StoreError
from models.gen_response import ErrorResponse, HealthResponse, OkResponse
from models.product import ProductCreate, ProductRead, ProductUpdate
from product_service import ProductService

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation failure"},
    404: {"model": ErrorResponse, "description": "Product not found"},
    500: {"model": ErrorResponse, "description": "Store failure"},
}


# -----------------------------------------------------------------------------
# Error mapping
# -----------------------------------------------------------------------------


async def handle_service_error(request: Request, exc: ProductServiceError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        message = "invalid JSON body"
    else:
        message = errors[0].get("msg", "invalid request") if errors else "invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("%s %s failed unexpectedly", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc)},
    )


def get_product_service(request: Request) -> ProductService:
    return request.app.state.product_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    database = app.state.database
    database.open()
    try:
        yield
    finally:
        database.close()


# -----------------------------------------------------------------------------
# Application factory
# -----------------------------------------------------------------------------


def create_app(settings: Optional[Settings] = None, database=None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    app = FastAPI(
        title="Product Inventory API",
        description="FastAPI service for managing product records (name, price, quantity)",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database if database is not None else Database(settings)
    app.state.product_service = ProductService(
        app.state.database,
        allow_fractional_quantity=settings.allow_fractional_quantity_on_create,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ProductServiceError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)

    register_routes(app)
    return app


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------


def register_routes(app: FastAPI) -> None:

    @app.get("/health", response_model=HealthResponse, response_model_exclude_none=True)
    def get_health(service: ProductService = Depends(get_product_service)):
        try:
            service.health()
        except StoreError as e:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"ok": False, "error": e.message},
            )
        return {"ok": True}

    @app.get("/api/products", response_model=List[ProductRead], responses={500: ERROR_RESPONSES[500]})
    def list_products(service: ProductService = Depends(get_product_service)):
        """List all products, oldest first."""
        return service.list_products()

    @app.get("/api/products/{product_id}", response_model=ProductRead, responses=ERROR_RESPONSES)
    def get_product(
        product_id: str = Path(..., description="Product ID"),
        service: ProductService = Depends(get_product_service),
    ):
        """Get a specific product by ID."""
        return service.get_product(product_id)

    @app.post(
        "/api/products",
        response_model=ProductRead,
        status_code=status.HTTP_201_CREATED,
        responses={400: ERROR_RESPONSES[400], 500: ERROR_RESPONSES[500]},
    )
    def create_product(
        payload: Any = Body(None, openapi_examples={"create": {"value": ProductCreate.model_config["json_schema_extra"]["examples"][0]}}),
        service: ProductService = Depends(get_product_service),
    ):
        """Create a new product. name, price and quantity are required."""
        return service.create_product(payload)

    @app.put("/api/products/{product_id}", response_model=ProductRead, responses=ERROR_RESPONSES)
    def update_product(
        product_id: str = Path(..., description="Product ID"),
        payload: Any = Body(None, openapi_examples={"partial": {"value": ProductUpdate.model_config["json_schema_extra"]["examples"][0]}}),
        service: ProductService = Depends(get_product_service),
    ):
        """Update a product (partial update). Only the supplied fields change."""
        return service.update_product(product_id, payload)

    @app.delete("/api/products/{product_id}", response_model=OkResponse, responses=ERROR_RESPONSES)
    def delete_product(
        product_id: str = Path(..., description="Product ID"),
        service: ProductService = Depends(get_product_service),
    ):
        """Delete a product record."""
        service.delete_product(product_id)
        return {"ok": True}


app = create_app()


# -----------------------------------------------------------------------------
# Run the app
# -----------------------------------------------------------------------------
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
