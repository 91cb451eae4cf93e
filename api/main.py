import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core import db
from core.errors import DomainError, StoreError
from ingredients import router as ingredients_router
from recipes import router as recipes_router

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip() or DEFAULT_CORS_ORIGINS
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(lifespan=lifespan)

# Allow local frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ingredients_router.router, prefix="/ingredients", tags=["ingredients"])
app.include_router(recipes_router.router, prefix="/recipes", tags=["recipes"])
# Singular aliases.
app.include_router(ingredients_router.router, prefix="/ingredient", include_in_schema=False)
app.include_router(recipes_router.router, prefix="/recipe", include_in_schema=False)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if type(exc) is StoreError:
        logger.warning(
            "store_error method=%s path=%s sqlstate=%s detail=%s",
            request.method,
            request.url.path,
            exc.sqlstate,
            exc,
        )
    return JSONResponse(
        status_code=exc.http_status,
        content={"error": exc.kind, "detail": str(exc)},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for error in exc.errors():
        loc = " -> ".join(str(part) for part in error["loc"])
        details.append(f"{loc}: {error['msg']}")
    return JSONResponse(
        status_code=400,
        content={"error": "invalid_request", "detail": details},
    )


@app.exception_handler(Exception)
async def unclassified_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unclassified_error method=%s path=%s error=%s",
        request.method,
        request.url.path,
        type(exc).__name__,
    )
    return JSONResponse(
        status_code=400,
        content={"error": DomainError.kind, "detail": str(exc) or type(exc).__name__},
    )


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "recipe-cost api"}
