import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, get_settings
from app.core.errors import InventoryError, StoreFailure
from app.core.logging import setup_logging
from app.database import SessionLocal, init_db
from app.routers import health_router, products_router
from app.services.seed_service import seed_sample_products

logger = logging.getLogger(__name__)

setup_logging()
settings: Settings = get_settings()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    init_db()
    if settings.SEED_SAMPLE_DATA:
        db = SessionLocal()
        try:
            seed_sample_products(db)
        finally:
            db.close()
    logger.info("%s ready (environment: %s)", settings.APP_NAME, settings.ENVIRONMENT)
    yield


app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list(),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InventoryError)
async def inventory_error_handler(_request: Request, exc: InventoryError):
    if exc.status_code >= 500:
        logger.error("Request failed: %s", exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Validation Error", "errors": errors},
    )


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(_request: Request, exc: SQLAlchemyError):
    logger.error("Database error: %s", exc, exc_info=exc)
    failure = StoreFailure(str(exc.orig) if getattr(exc, "orig", None) else str(exc))
    return JSONResponse(status_code=failure.status_code, content=failure.to_payload())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


app.include_router(health_router)
app.include_router(products_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    prefix = settings.API_PREFIX
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "endpoints": {
            "products": f"{prefix}/products",
            "search": f"{prefix}/products/search?name=query",
            "export": f"{prefix}/products/export",
            "import": f"{prefix}/products/import",
            "history": f"{prefix}/products/:id/history",
        },
    }


def run():
    import uvicorn

    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)


__all__ = ["app", "root", "run"]
